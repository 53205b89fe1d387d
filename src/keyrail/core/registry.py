"""
Key Manager Registry

Routes serialized key material to the key manager for its type URL and a
primitive set to the wrapper for its primitive class. A registry is an
ordinary object owned by the caller; there is no process-wide instance.
"""

from threading import Lock
from typing import Dict, Optional, Type, TypeVar

import structlog

from .exceptions import (
    InvalidKeysetError,
    KeyManagerExistsError,
    NullPrimitiveSetError,
    PrimitiveTypeMismatchError,
    UnknownKeyTypeError,
    UnknownPrimitiveError,
    UnsupportedOperationError,
)
from .key_manager import KeyManager, PrivateKeyManager
from .keyset import Keyset, KeyStatus, KeyTemplate, SerializedKeyMaterial
from .primitive_set import PrimitiveSet, PrimitiveSetBuilder
from .primitive_wrapper import PrimitiveWrapper

logger = structlog.get_logger()

P = TypeVar("P")


class Registry:
    """
    Explicit registry of key managers and primitive wrappers.

    Registration is guarded by a lock; lookups afterwards only read.
    """

    def __init__(self):
        self._key_managers: Dict[str, KeyManager] = {}
        self._new_key_allowed: Dict[str, bool] = {}
        self._wrappers: Dict[type, PrimitiveWrapper] = {}
        self._lock = Lock()

    def register_key_manager(self, manager: KeyManager, new_key_allowed: bool = True) -> None:
        type_url = manager.key_type()
        with self._lock:
            existing = self._key_managers.get(type_url)
            if existing is not None and type(existing) is not type(manager):
                raise KeyManagerExistsError(
                    f"A manager of type {type(existing).__name__} is already "
                    f"registered for {type_url}"
                )
            self._key_managers[type_url] = manager
            self._new_key_allowed[type_url] = new_key_allowed

        logger.debug(
            "key_manager_registered",
            type_url=type_url,
            primitive_class=manager.primitive_class().__name__,
            new_key_allowed=new_key_allowed,
        )

    def register_primitive_wrapper(self, wrapper: PrimitiveWrapper) -> None:
        with self._lock:
            self._wrappers[wrapper.input_primitive_class()] = wrapper

    def key_manager(self, type_url: str) -> KeyManager:
        manager = self._key_managers.get(type_url)
        if manager is None:
            raise UnknownKeyTypeError(f"No key manager registered for key type {type_url}")
        return manager

    def primitive(self, material: SerializedKeyMaterial, primitive_class: Optional[Type[P]] = None) -> P:
        """Validate `material` with its manager and build the primitive."""
        manager = self.key_manager(material.type_url)
        if primitive_class is not None and not issubclass(manager.primitive_class(), primitive_class):
            raise PrimitiveTypeMismatchError(
                f"Key type {material.type_url} provides {manager.primitive_class().__name__}, "
                f"not {primitive_class.__name__}"
            )
        return manager.primitive(material)

    def new_key_data(self, template: KeyTemplate) -> SerializedKeyMaterial:
        manager = self.key_manager(template.type_url)
        if not self._new_key_allowed.get(template.type_url, False):
            raise UnsupportedOperationError(
                f"Generating new keys is not allowed for key type {template.type_url}"
            )
        return manager.key_factory().new_key_data(template.value)

    def public_key_data(self, material: SerializedKeyMaterial) -> SerializedKeyMaterial:
        manager = self.key_manager(material.type_url)
        if not isinstance(manager, PrivateKeyManager):
            raise UnsupportedOperationError(
                f"Key type {material.type_url} is not a private key type"
            )
        return manager.public_key_data(material)

    def is_private_key_type(self, type_url: str) -> bool:
        """Whether the manager for `type_url` holds private asymmetric keys."""
        return isinstance(self.key_manager(type_url), PrivateKeyManager)

    def public_key_type(self, type_url: str) -> str:
        manager = self.key_manager(type_url)
        if not isinstance(manager, PrivateKeyManager):
            raise UnsupportedOperationError(f"Key type {type_url} is not a private key type")
        return manager.public_key_manager().key_type()

    def primitive_set(self, keyset: Keyset, primitive_class: Type[P]) -> PrimitiveSet[P]:
        """
        Build a frozen primitive set from a keyset.

        ENABLED and DISABLED keys are validated and added, DISABLED ones for
        bookkeeping only. DESTROYED keys are the exception: their material is
        gone and cannot be validated, so they are left out of the set rather
        than retained.
        """
        validate_keyset(keyset)

        builder: PrimitiveSetBuilder[P] = PrimitiveSetBuilder(primitive_class)
        for key in keyset.keys:
            if key.status == KeyStatus.DESTROYED:
                continue
            primitive = self.primitive(key.material, primitive_class)
            is_primary = key.key_id == keyset.primary_key_id and key.status == KeyStatus.ENABLED
            builder.add_primitive(primitive, key, is_primary=is_primary)

        primitive_set = builder.build()
        logger.info(
            "primitive_set_loaded",
            primitive_class=primitive_class.__name__,
            entries=len(primitive_set),
            primary_key_id=keyset.primary_key_id,
        )
        return primitive_set

    def wrap(self, primitive_set: PrimitiveSet[P]):
        """Wrap a primitive set with the wrapper registered for its class."""
        if primitive_set is None:
            raise NullPrimitiveSetError("Primitive set has to be non-null")

        wrapper = self._wrappers.get(primitive_set.primitive_class)
        if wrapper is None:
            raise UnknownPrimitiveError(
                f"No wrapper registered for {primitive_set.primitive_class.__name__}"
            )
        return wrapper.wrap(primitive_set)


def validate_keyset(keyset: Keyset) -> None:
    """Reject keysets that cannot back a primitive set."""
    if keyset is None or not keyset.keys:
        raise InvalidKeysetError("Keyset must contain at least one key")

    if keyset.primary_key_id is None:
        return

    candidates = [key for key in keyset.keys if key.key_id == keyset.primary_key_id]
    if not candidates:
        raise InvalidKeysetError(f"Primary key {keyset.primary_key_id} is not in the keyset")
    if len(candidates) > 1:
        raise InvalidKeysetError(f"Primary key id {keyset.primary_key_id} is ambiguous")
    if candidates[0].status != KeyStatus.ENABLED:
        raise InvalidKeysetError(
            f"Primary key {keyset.primary_key_id} is {candidates[0].status.value}, not ENABLED"
        )
