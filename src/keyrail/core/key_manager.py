"""
Key Manager Contract

A key manager is the trust boundary between serialized key bytes and a usable
primitive: nothing builds a primitive from material the manager for its type
URL has not validated first.

Managers for the public half of an asymmetric pair expose a factory that
refuses to generate keys.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Type, TypeVar

import structlog

from ..proto import KeyProto
from .exceptions import (
    KeyValidationError,
    MalformedKeyError,
    UnsupportedOperationError,
    UnsupportedVersionError,
    WrongKeyTypeError,
)
from .keyset import KeyMaterialType, KeyStatus, SerializedKeyMaterial

logger = structlog.get_logger()

P = TypeVar("P")
K = TypeVar("K", bound=KeyProto)


def validate_version(candidate: int, max_expected: int, what: str = "key") -> None:
    if candidate > max_expected:
        raise UnsupportedVersionError(
            f"{what} has version {candidate}; only keys with version in "
            f"range [0..{max_expected}] are supported"
        )


def parse_key_proto(proto_class: Type[K], value: Any, type_url: str) -> K:
    """Decode key bytes, mapping every decoding failure to MalformedKeyError."""
    try:
        return proto_class.parse(value)
    except ValueError as e:
        raise MalformedKeyError(
            f"Input cannot be parsed as {type_url} key-proto"
        ) from e


class KeyFactory(ABC):
    """Generates new keys of one key type from a serialized key format."""

    @abstractmethod
    def new_key(self, serialized_key_format: Optional[bytes]) -> KeyProto:
        pass

    @abstractmethod
    def new_key_data(self, serialized_key_format: Optional[bytes]) -> SerializedKeyMaterial:
        pass


class PublicKeyFactory(KeyFactory):
    """Factory for public key types: generation is never allowed."""

    def __init__(self, private_manager_name: str):
        self._private_manager_name = private_manager_name

    def _refuse(self):
        raise UnsupportedOperationError(
            "This operation is not supported for public keys. "
            f"Use {self._private_manager_name} to generate new keys."
        )

    def new_key(self, serialized_key_format: Optional[bytes]) -> KeyProto:
        self._refuse()

    def new_key_data(self, serialized_key_format: Optional[bytes]) -> SerializedKeyMaterial:
        self._refuse()


class KeyManager(ABC, Generic[P]):
    """
    Validates and instantiates keys of one type.

    Subclasses declare KEY_TYPE, VERSION, KEY_PROTO, PRIMITIVE and
    KEY_MATERIAL_TYPE, then implement validate_key() and primitive_from().
    """

    KEY_TYPE: str = ""
    VERSION: int = 0
    KEY_PROTO: Type[KeyProto] = KeyProto
    PRIMITIVE: Type[Any] = object
    KEY_MATERIAL_TYPE: KeyMaterialType = KeyMaterialType.UNKNOWN

    def key_type(self) -> str:
        return self.KEY_TYPE

    def version(self) -> int:
        return self.VERSION

    def primitive_class(self) -> Type[P]:
        return self.PRIMITIVE

    def key_material_type(self) -> KeyMaterialType:
        return self.KEY_MATERIAL_TYPE

    def does_support(self, type_url: str) -> bool:
        return type_url == self.key_type()

    @abstractmethod
    def key_factory(self) -> KeyFactory:
        pass

    @abstractmethod
    def validate_key(self, key: KeyProto) -> None:
        """Check type-specific fields. Raise MalformedKeyError/UnsupportedVersionError."""
        pass

    @abstractmethod
    def primitive_from(self, key: KeyProto) -> P:
        """Build the primitive from a validated key. Pure, no I/O."""
        pass

    def validate_and_parse(self, material: SerializedKeyMaterial) -> KeyProto:
        """
        Validate serialized key material and decode it.

        Raises:
            WrongKeyTypeError: type URL is not this manager's
            MalformedKeyError: bytes do not decode or required fields are absent
            UnsupportedVersionError: key is newer than this manager supports
        """
        if material is None:
            raise MalformedKeyError("Key material has to be non-null")

        if not self.does_support(material.type_url):
            raise WrongKeyTypeError(
                f"Key type {material.type_url} is not supported. "
                f"This key manager supports {self.key_type()}."
            )

        try:
            key = parse_key_proto(self.KEY_PROTO, material.value, self.key_type())
            validate_version(key.version, self.version(), self.key_type())
            self.validate_key(key)
        except KeyValidationError as e:
            logger.debug(
                "key_validation_failed",
                type_url=self.key_type(),
                reason=type(e).__name__,
            )
            raise

        return key

    def primitive(self, material: SerializedKeyMaterial) -> P:
        return self.primitive_from(self.validate_and_parse(material))

    def key_data(self, key: KeyProto) -> SerializedKeyMaterial:
        """Wrap a validated key into serialized material of this type."""
        return SerializedKeyMaterial(
            type_url=self.key_type(),
            value=key.serialize(),
            status=KeyStatus.ENABLED,
            key_material_type=self.key_material_type(),
        )


class PrivateKeyManager(KeyManager[P]):
    """Key manager for the private half of an asymmetric key pair."""

    KEY_MATERIAL_TYPE = KeyMaterialType.ASYMMETRIC_PRIVATE

    @abstractmethod
    def public_key_manager(self) -> KeyManager:
        pass

    @abstractmethod
    def public_key(self, key: KeyProto) -> KeyProto:
        """Extract the public key proto from a validated private key."""
        pass

    def public_key_data(self, material: SerializedKeyMaterial) -> SerializedKeyMaterial:
        """Public key material matching `material`, keeping its status."""
        private_key = self.validate_and_parse(material)
        public_data = self.public_key_manager().key_data(self.public_key(private_key))
        return public_data.with_status(material.status)


class GeneratingKeyFactory(KeyFactory):
    """
    Factory base for key types that support generation.

    Subclasses declare KEY_FORMAT and implement validate_key_format() and
    generate(); an empty serialized format means the default format.
    """

    KEY_FORMAT: Type[KeyProto] = KeyProto

    def __init__(self, manager: KeyManager):
        self._manager = manager

    @abstractmethod
    def validate_key_format(self, key_format: KeyProto) -> None:
        pass

    @abstractmethod
    def generate(self, key_format: KeyProto) -> KeyProto:
        pass

    def parse_key_format(self, serialized_key_format: Optional[bytes]) -> KeyProto:
        if not serialized_key_format:
            key_format = self.KEY_FORMAT()
        else:
            key_format = parse_key_proto(
                self.KEY_FORMAT, serialized_key_format, self._manager.key_type()
            )
        validate_version(key_format.version, self._manager.version(), "key format")
        self.validate_key_format(key_format)
        return key_format

    def new_key(self, serialized_key_format: Optional[bytes]) -> KeyProto:
        key = self.generate(self.parse_key_format(serialized_key_format))
        logger.info("key_generated", type_url=self._manager.key_type())
        return key

    def new_key_data(self, serialized_key_format: Optional[bytes]) -> SerializedKeyMaterial:
        return self._manager.key_data(self.new_key(serialized_key_format))
