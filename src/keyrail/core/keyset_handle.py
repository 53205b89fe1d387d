"""
Keyset Handle

Binds a keyset to a registry and turns it into a wrapped primitive.
"""

from typing import Any, Dict, Type, TypeVar

import structlog

from .exceptions import InvalidKeysetError
from .keyset import Keyset, KeysetKey, KeyMaterialType, KeyStatus, KeyTemplate, SerializedKeyMaterial
from .registry import Registry, validate_keyset

logger = structlog.get_logger()

P = TypeVar("P")


class KeysetHandle:
    """An immutable keyset plus the registry that knows its key types."""

    def __init__(self, keyset: Keyset, registry: Registry):
        validate_keyset(keyset)
        self._keyset = keyset
        self._registry = registry

    @classmethod
    def generate_new(cls, template: KeyTemplate, registry: Registry) -> "KeysetHandle":
        """A fresh single-key keyset whose key is primary."""
        from .keyset_manager import KeysetManager

        manager = KeysetManager(registry)
        manager.add(template, as_primary=True)
        return manager.handle()

    @property
    def keyset(self) -> Keyset:
        return self._keyset

    def keyset_info(self) -> Dict[str, Any]:
        """Key metadata without any key material."""
        return self._keyset.info()

    def primitive(self, primitive_class: Type[P]) -> P:
        """Build the primitive set for this keyset and wrap it."""
        primitive_set = self._registry.primitive_set(self._keyset, primitive_class)
        return self._registry.wrap(primitive_set)

    def public_keyset_handle(self) -> "KeysetHandle":
        """The same keyset with every private key replaced by its public key."""
        public_keys = []
        for key in self._keyset.keys:
            if not self._registry.is_private_key_type(key.type_url):
                raise InvalidKeysetError(
                    f"Key {key.key_id} is not an asymmetric private key"
                )

            if key.status == KeyStatus.DESTROYED:
                material = SerializedKeyMaterial(
                    type_url=self._registry.public_key_type(key.type_url),
                    value=b"",
                    status=KeyStatus.DESTROYED,
                    key_material_type=KeyMaterialType.ASYMMETRIC_PUBLIC,
                )
            else:
                material = self._registry.public_key_data(key.material)

            public_keys.append(KeysetKey(
                material=material,
                key_id=key.key_id,
                output_prefix_type=key.output_prefix_type,
            ))

        logger.info("public_keyset_extracted", keys=len(public_keys))

        return KeysetHandle(
            Keyset(keys=tuple(public_keys), primary_key_id=self._keyset.primary_key_id),
            self._registry,
        )

    def __repr__(self) -> str:
        return f"KeysetHandle({self._keyset.info()!r})"
