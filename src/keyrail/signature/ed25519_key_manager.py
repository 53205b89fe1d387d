"""
Ed25519 Key Managers
"""

from cryptography.hazmat.primitives.asymmetric import ed25519

from ..core.exceptions import MalformedKeyError
from ..core.key_manager import (
    GeneratingKeyFactory,
    KeyManager,
    PrivateKeyManager,
    PublicKeyFactory,
    validate_version,
)
from ..core.keyset import KeyMaterialType
from ..crypto.signer import ED25519_KEY_SIZE, Ed25519Sign, Ed25519Verify
from ..primitives import PublicKeySign, PublicKeyVerify
from ..proto import Ed25519KeyFormat, Ed25519PrivateKey, Ed25519PublicKey

ED25519_PUBLIC_KEY_TYPE = "type.keyrail.dev/keyrail.Ed25519PublicKey"
ED25519_PRIVATE_KEY_TYPE = "type.keyrail.dev/keyrail.Ed25519PrivateKey"


def _check_key_size(key_value: bytes, what: str) -> None:
    if len(key_value) != ED25519_KEY_SIZE:
        raise MalformedKeyError(
            f"Invalid Ed25519 {what}: expected {ED25519_KEY_SIZE} bytes, got {len(key_value)}"
        )


def _raw_public_bytes(private_key: ed25519.Ed25519PrivateKey) -> bytes:
    return private_key.public_key().public_bytes_raw()


class Ed25519PublicKeyManager(KeyManager[PublicKeyVerify]):
    """Verifier-only key manager for Ed25519 public keys."""

    KEY_TYPE = ED25519_PUBLIC_KEY_TYPE
    VERSION = 0
    KEY_PROTO = Ed25519PublicKey
    PRIMITIVE = PublicKeyVerify
    KEY_MATERIAL_TYPE = KeyMaterialType.ASYMMETRIC_PUBLIC

    def __init__(self):
        self._key_factory = PublicKeyFactory("Ed25519PrivateKeyManager")

    def key_factory(self) -> PublicKeyFactory:
        return self._key_factory

    def validate_key(self, key: Ed25519PublicKey) -> None:
        _check_key_size(key.key_value, "public key")

    def primitive_from(self, key: Ed25519PublicKey) -> PublicKeyVerify:
        return Ed25519Verify(key.key_value)


class Ed25519PrivateKeyFactory(GeneratingKeyFactory):
    KEY_FORMAT = Ed25519KeyFormat

    def validate_key_format(self, key_format: Ed25519KeyFormat) -> None:
        pass

    def generate(self, key_format: Ed25519KeyFormat) -> Ed25519PrivateKey:
        private_key = ed25519.Ed25519PrivateKey.generate()
        return Ed25519PrivateKey(
            version=Ed25519PrivateKeyManager.VERSION,
            public_key=Ed25519PublicKey(
                version=Ed25519PublicKeyManager.VERSION,
                key_value=_raw_public_bytes(private_key),
            ),
            key_value=private_key.private_bytes_raw(),
        )


class Ed25519PrivateKeyManager(PrivateKeyManager[PublicKeySign]):
    """Signer key manager for Ed25519 private keys."""

    KEY_TYPE = ED25519_PRIVATE_KEY_TYPE
    VERSION = 0
    KEY_PROTO = Ed25519PrivateKey
    PRIMITIVE = PublicKeySign

    def __init__(self):
        self._public_key_manager = Ed25519PublicKeyManager()
        self._key_factory = Ed25519PrivateKeyFactory(self)

    def key_factory(self) -> Ed25519PrivateKeyFactory:
        return self._key_factory

    def public_key_manager(self) -> Ed25519PublicKeyManager:
        return self._public_key_manager

    def public_key(self, key: Ed25519PrivateKey) -> Ed25519PublicKey:
        return key.public_key

    def validate_key(self, key: Ed25519PrivateKey) -> None:
        if key.public_key is None:
            raise MalformedKeyError(
                f"Input cannot be parsed as {self.key_type()} key-proto: missing public key"
            )
        validate_version(key.public_key.version, self._public_key_manager.version(), "public key")
        _check_key_size(key.key_value, "private key")
        _check_key_size(key.public_key.key_value, "public key")

        private_key = ed25519.Ed25519PrivateKey.from_private_bytes(key.key_value)
        if _raw_public_bytes(private_key) != key.public_key.key_value:
            raise MalformedKeyError("Private key does not match its public key")

    def primitive_from(self, key: Ed25519PrivateKey) -> PublicKeySign:
        return Ed25519Sign(key.key_value)
