"""
keyrail Core

Primitive sets, the dispatch/fallback wrapper skeleton, the key manager
contract, and the keyset model that ties them together.
"""

from .exceptions import (
    KeyRailError,
    KeyValidationError,
    WrongKeyTypeError,
    MalformedKeyError,
    UnsupportedVersionError,
    UnsupportedOperationError,
    DuplicatePrimaryError,
    NullPrimitiveSetError,
    PrimitiveTypeMismatchError,
    MissingPrimaryError,
    UnknownKeyTypeError,
    KeyManagerExistsError,
    UnknownPrimitiveError,
    InvalidKeysetError,
    KeyNotFoundError,
    DecryptionError,
)
from .keyset import (
    KeyStatus,
    OutputPrefixType,
    KeyMaterialType,
    SerializedKeyMaterial,
    KeysetKey,
    Keyset,
    KeyTemplate,
)
from .crypto_format import NON_RAW_PREFIX_SIZE, output_prefix
from .primitive_set import PrimitiveEntry, PrimitiveSet, PrimitiveSetBuilder
from .primitive_wrapper import PrimitiveWrapper, dispatch
from .key_manager import KeyFactory, KeyManager, PrivateKeyManager, PublicKeyFactory
from .registry import Registry
from .keyset_handle import KeysetHandle
from .keyset_manager import KeysetManager

__all__ = [
    "KeyRailError",
    "KeyValidationError",
    "WrongKeyTypeError",
    "MalformedKeyError",
    "UnsupportedVersionError",
    "UnsupportedOperationError",
    "DuplicatePrimaryError",
    "NullPrimitiveSetError",
    "PrimitiveTypeMismatchError",
    "MissingPrimaryError",
    "UnknownKeyTypeError",
    "KeyManagerExistsError",
    "UnknownPrimitiveError",
    "InvalidKeysetError",
    "KeyNotFoundError",
    "DecryptionError",
    "KeyStatus",
    "OutputPrefixType",
    "KeyMaterialType",
    "SerializedKeyMaterial",
    "KeysetKey",
    "Keyset",
    "KeyTemplate",
    "NON_RAW_PREFIX_SIZE",
    "output_prefix",
    "PrimitiveEntry",
    "PrimitiveSet",
    "PrimitiveSetBuilder",
    "PrimitiveWrapper",
    "dispatch",
    "KeyFactory",
    "KeyManager",
    "PrivateKeyManager",
    "PublicKeyFactory",
    "Registry",
    "KeysetHandle",
    "KeysetManager",
]
