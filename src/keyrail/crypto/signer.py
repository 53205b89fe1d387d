"""
Signature Backends

Thin async adapters over the `cryptography` library:
- Ed25519 - fast, fixed parameters
- ECDSA over NIST P-256 / P-384 / P-521, DER or IEEE P1363 encoded

Each object is bound to one key. Invalid signatures return False; anything
else (bad argument types, backend faults) propagates and is handled by the
wrapper's dispatch.
"""

from typing import Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..primitives import PublicKeySign, PublicKeyVerify
from ..proto import EcdsaSignatureEncoding, EllipticCurveType, HashType

ED25519_KEY_SIZE = 32
ED25519_SIGNATURE_SIZE = 64

CURVES: Dict[EllipticCurveType, ec.EllipticCurve] = {
    EllipticCurveType.NIST_P256: ec.SECP256R1(),
    EllipticCurveType.NIST_P384: ec.SECP384R1(),
    EllipticCurveType.NIST_P521: ec.SECP521R1(),
}

# Field element size in bytes, used for IEEE P1363 (r || s) encoding
COORDINATE_SIZES: Dict[EllipticCurveType, int] = {
    EllipticCurveType.NIST_P256: 32,
    EllipticCurveType.NIST_P384: 48,
    EllipticCurveType.NIST_P521: 66,
}


def hash_algorithm(hash_type: HashType) -> hashes.HashAlgorithm:
    if hash_type == HashType.SHA1:
        return hashes.SHA1()
    if hash_type == HashType.SHA256:
        return hashes.SHA256()
    if hash_type == HashType.SHA384:
        return hashes.SHA384()
    if hash_type == HashType.SHA512:
        return hashes.SHA512()
    raise ValueError(f"Unknown hash type: {hash_type}")


def ecdsa_public_key(curve: EllipticCurveType, x: bytes, y: bytes) -> ec.EllipticCurvePublicKey:
    """Build a public key from affine coordinates. Raises ValueError off-curve."""
    numbers = ec.EllipticCurvePublicNumbers(
        int.from_bytes(x, "big"),
        int.from_bytes(y, "big"),
        CURVES[curve],
    )
    return numbers.public_key()


def ecdsa_private_key(curve: EllipticCurveType, key_value: bytes) -> ec.EllipticCurvePrivateKey:
    return ec.derive_private_key(int.from_bytes(key_value, "big"), CURVES[curve])


def der_to_ieee_p1363(signature: bytes, curve: EllipticCurveType) -> bytes:
    size = COORDINATE_SIZES[curve]
    r, s = decode_dss_signature(signature)
    return r.to_bytes(size, "big") + s.to_bytes(size, "big")


def ieee_p1363_to_der(signature: bytes, curve: EllipticCurveType) -> bytes:
    size = COORDINATE_SIZES[curve]
    if len(signature) != 2 * size:
        raise InvalidSignature(f"IEEE P1363 signature must be {2 * size} bytes")
    r = int.from_bytes(signature[:size], "big")
    s = int.from_bytes(signature[size:], "big")
    return encode_dss_signature(r, s)


class Ed25519Sign(PublicKeySign):
    """Ed25519 signer bound to one private key."""

    def __init__(self, private_key_bytes: bytes):
        self._private_key = ed25519.Ed25519PrivateKey.from_private_bytes(private_key_bytes)

    async def sign(self, data: bytes) -> bytes:
        return self._private_key.sign(data)


class Ed25519Verify(PublicKeyVerify):
    """Ed25519 verifier bound to one public key."""

    def __init__(self, public_key_bytes: bytes):
        self._public_key = ed25519.Ed25519PublicKey.from_public_bytes(public_key_bytes)

    async def verify(self, signature: bytes, data: bytes) -> bool:
        try:
            self._public_key.verify(signature, data)
            return True
        except InvalidSignature:
            return False


class EcdsaSign(PublicKeySign):
    """ECDSA signer bound to one private key."""

    def __init__(
        self,
        private_key: ec.EllipticCurvePrivateKey,
        curve: EllipticCurveType,
        hash_type: HashType,
        encoding: EcdsaSignatureEncoding = EcdsaSignatureEncoding.DER,
    ):
        self._private_key = private_key
        self._curve = curve
        self._algorithm = ec.ECDSA(hash_algorithm(hash_type))
        self._encoding = encoding

    async def sign(self, data: bytes) -> bytes:
        signature = self._private_key.sign(data, self._algorithm)
        if self._encoding == EcdsaSignatureEncoding.IEEE_P1363:
            return der_to_ieee_p1363(signature, self._curve)
        return signature


class EcdsaVerify(PublicKeyVerify):
    """ECDSA verifier bound to one public key."""

    def __init__(
        self,
        public_key: ec.EllipticCurvePublicKey,
        curve: EllipticCurveType,
        hash_type: HashType,
        encoding: EcdsaSignatureEncoding = EcdsaSignatureEncoding.DER,
    ):
        self._public_key = public_key
        self._curve = curve
        self._algorithm = ec.ECDSA(hash_algorithm(hash_type))
        self._encoding = encoding

    async def verify(self, signature: bytes, data: bytes) -> bool:
        try:
            if self._encoding == EcdsaSignatureEncoding.IEEE_P1363:
                signature = ieee_p1363_to_der(signature, self._curve)
            self._public_key.verify(signature, data, self._algorithm)
            return True
        except InvalidSignature:
            return False
