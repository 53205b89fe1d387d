"""
Exceptions for keyrail

Construction-time errors are raised to the caller. Operation-time failures of
individual keys never surface; wrappers report only the aggregate outcome.
"""


class KeyRailError(Exception):
    """Base class for every error raised by keyrail."""
    pass


class KeyValidationError(KeyRailError):
    """Raised when serialized key material is rejected by a key manager."""
    pass


class WrongKeyTypeError(KeyValidationError):
    """Raised when key material is routed to a manager of another key type."""
    pass


class MalformedKeyError(KeyValidationError):
    """Raised when key bytes do not decode or lack required fields."""
    pass


class UnsupportedVersionError(KeyValidationError):
    """Raised when key material carries a newer schema version than supported."""
    pass


class UnsupportedOperationError(KeyRailError):
    """Raised when an operation is not available for a key type."""
    pass


class DuplicatePrimaryError(KeyRailError):
    """Raised when a second primary entry is inserted into a primitive set."""
    pass


class NullPrimitiveSetError(KeyRailError):
    """Raised when a wrapper is asked to wrap a missing primitive set."""
    pass


class PrimitiveTypeMismatchError(KeyRailError):
    """Raised when a primitive does not satisfy the expected operation contract."""
    pass


class MissingPrimaryError(KeyRailError):
    """Raised when an operation needs a primary key and the set has none."""
    pass


class UnknownKeyTypeError(KeyRailError):
    """Raised when no key manager is registered for a type URL."""
    pass


class KeyManagerExistsError(KeyRailError):
    """Raised when a different key manager is already registered for a type URL."""
    pass


class UnknownPrimitiveError(KeyRailError):
    """Raised when no wrapper is registered for a primitive class."""
    pass


class InvalidKeysetError(KeyRailError):
    """Raised when a keyset cannot be turned into a primitive set."""
    pass


class KeyNotFoundError(KeyRailError):
    """Raised when a key id is not present in a keyset."""
    pass


class DecryptionError(KeyRailError):
    """Raised when no enabled key can decrypt a ciphertext."""
    pass
