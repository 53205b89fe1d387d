"""
ECDSA Key Managers

EcdsaPublicKeyManager builds verifiers and never generates keys.
EcdsaPrivateKeyManager builds signers, generates key pairs, and hands out the
matching public key material.
"""

from typing import Dict, Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import ec

from ..core.exceptions import MalformedKeyError
from ..core.key_manager import (
    GeneratingKeyFactory,
    KeyManager,
    PrivateKeyManager,
    PublicKeyFactory,
    validate_version,
)
from ..core.keyset import KeyMaterialType
from ..crypto.signer import (
    COORDINATE_SIZES,
    CURVES,
    EcdsaSign,
    EcdsaVerify,
    ecdsa_private_key,
    ecdsa_public_key,
)
from ..primitives import PublicKeySign, PublicKeyVerify
from ..proto import (
    EcdsaKeyFormat,
    EcdsaParams,
    EcdsaPrivateKey,
    EcdsaPublicKey,
    EllipticCurveType,
    HashType,
)

ECDSA_PUBLIC_KEY_TYPE = "type.keyrail.dev/keyrail.EcdsaPublicKey"
ECDSA_PRIVATE_KEY_TYPE = "type.keyrail.dev/keyrail.EcdsaPrivateKey"

# Hash functions accepted for each curve
ALLOWED_HASHES: Dict[EllipticCurveType, Tuple[HashType, ...]] = {
    EllipticCurveType.NIST_P256: (HashType.SHA256,),
    EllipticCurveType.NIST_P384: (HashType.SHA384, HashType.SHA512),
    EllipticCurveType.NIST_P521: (HashType.SHA512,),
}


def validate_params(params: Optional[EcdsaParams], type_url: str) -> EcdsaParams:
    if params is None:
        raise MalformedKeyError(f"Input cannot be parsed as {type_url} key-proto: missing params")
    if params.hash_type not in ALLOWED_HASHES[params.curve]:
        raise MalformedKeyError(
            f"Hash {params.hash_type.value} is not allowed with curve {params.curve.value}"
        )
    return params


def validate_public_key(key: EcdsaPublicKey, type_url: str) -> ec.EllipticCurvePublicKey:
    params = validate_params(key.params, type_url)
    if not key.x or not key.y:
        raise MalformedKeyError(f"Input cannot be parsed as {type_url} key-proto: missing point")
    try:
        return ecdsa_public_key(params.curve, key.x, key.y)
    except ValueError as e:
        raise MalformedKeyError("Public key point is not on the curve") from e


class EcdsaPublicKeyManager(KeyManager[PublicKeyVerify]):
    """Verifier-only key manager for ECDSA public keys."""

    KEY_TYPE = ECDSA_PUBLIC_KEY_TYPE
    VERSION = 0
    KEY_PROTO = EcdsaPublicKey
    PRIMITIVE = PublicKeyVerify
    KEY_MATERIAL_TYPE = KeyMaterialType.ASYMMETRIC_PUBLIC

    def __init__(self):
        self._key_factory = PublicKeyFactory("EcdsaPrivateKeyManager")

    def key_factory(self) -> PublicKeyFactory:
        return self._key_factory

    def validate_key(self, key: EcdsaPublicKey) -> None:
        validate_public_key(key, self.key_type())

    def primitive_from(self, key: EcdsaPublicKey) -> PublicKeyVerify:
        params = key.params
        return EcdsaVerify(
            ecdsa_public_key(params.curve, key.x, key.y),
            params.curve,
            params.hash_type,
            params.encoding,
        )


class EcdsaPrivateKeyFactory(GeneratingKeyFactory):
    KEY_FORMAT = EcdsaKeyFormat

    def validate_key_format(self, key_format: EcdsaKeyFormat) -> None:
        validate_params(key_format.params, ECDSA_PRIVATE_KEY_TYPE)

    def generate(self, key_format: EcdsaKeyFormat) -> EcdsaPrivateKey:
        params = key_format.params
        size = COORDINATE_SIZES[params.curve]
        private_key = ec.generate_private_key(CURVES[params.curve])
        numbers = private_key.private_numbers()

        public_key = EcdsaPublicKey(
            version=EcdsaPublicKeyManager.VERSION,
            params=params,
            x=numbers.public_numbers.x.to_bytes(size, "big"),
            y=numbers.public_numbers.y.to_bytes(size, "big"),
        )
        return EcdsaPrivateKey(
            version=EcdsaPrivateKeyManager.VERSION,
            public_key=public_key,
            key_value=numbers.private_value.to_bytes(size, "big"),
        )


class EcdsaPrivateKeyManager(PrivateKeyManager[PublicKeySign]):
    """Signer key manager for ECDSA private keys."""

    KEY_TYPE = ECDSA_PRIVATE_KEY_TYPE
    VERSION = 0
    KEY_PROTO = EcdsaPrivateKey
    PRIMITIVE = PublicKeySign

    def __init__(self):
        self._public_key_manager = EcdsaPublicKeyManager()
        self._key_factory = EcdsaPrivateKeyFactory(self)

    def key_factory(self) -> EcdsaPrivateKeyFactory:
        return self._key_factory

    def public_key_manager(self) -> EcdsaPublicKeyManager:
        return self._public_key_manager

    def public_key(self, key: EcdsaPrivateKey) -> EcdsaPublicKey:
        return key.public_key

    def validate_key(self, key: EcdsaPrivateKey) -> None:
        if key.public_key is None:
            raise MalformedKeyError(
                f"Input cannot be parsed as {self.key_type()} key-proto: missing public key"
            )
        validate_version(key.public_key.version, self._public_key_manager.version(), "public key")
        public_key = validate_public_key(key.public_key, self.key_type())

        if not key.key_value:
            raise MalformedKeyError(
                f"Input cannot be parsed as {self.key_type()} key-proto: missing private value"
            )
        try:
            private_key = ecdsa_private_key(key.public_key.params.curve, key.key_value)
        except ValueError as e:
            raise MalformedKeyError("Private value is out of range for the curve") from e

        if private_key.public_key().public_numbers() != public_key.public_numbers():
            raise MalformedKeyError("Private key does not match its public key")

    def primitive_from(self, key: EcdsaPrivateKey) -> PublicKeySign:
        params = key.public_key.params
        return EcdsaSign(
            ecdsa_private_key(params.curve, key.key_value),
            params.curve,
            params.hash_type,
            params.encoding,
        )
