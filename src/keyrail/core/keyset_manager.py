"""
Keyset Management

Rotation bookkeeping for a keyset: add keys, promote a new primary, disable
or destroy old keys. Every change produces a new frozen Keyset; snapshots that
were already handed out (and the primitive sets built from them) never change.
"""

import secrets
from typing import List, Optional

import structlog

from .crypto_format import MAX_KEY_ID
from .exceptions import InvalidKeysetError, KeyNotFoundError
from .keyset import Keyset, KeysetKey, KeyStatus, KeyTemplate, SerializedKeyMaterial
from .keyset_handle import KeysetHandle
from .registry import Registry

logger = structlog.get_logger()


class KeysetManager:
    """
    Manages the keys of one logical keyset.

    Features:
    - Key generation from templates
    - Rotation (new primary, old key stays enabled for verification)
    - Disable / enable / destroy
    - Public keyset export
    """

    def __init__(self, registry: Registry, keyset: Optional[Keyset] = None):
        self._registry = registry
        self._keyset = keyset or Keyset()

    def keyset(self) -> Keyset:
        return self._keyset

    def handle(self) -> KeysetHandle:
        return KeysetHandle(self._keyset, self._registry)

    def _new_key_id(self) -> int:
        existing = set(self._keyset.key_ids())
        while True:
            key_id = secrets.randbelow(MAX_KEY_ID) + 1
            if key_id not in existing:
                return key_id

    def _get(self, key_id: int) -> KeysetKey:
        key = self._keyset.get(key_id)
        if key is None:
            raise KeyNotFoundError(f"Key not found: {key_id}")
        return key

    def _replace(self, new_key: KeysetKey) -> None:
        keys = tuple(new_key if k.key_id == new_key.key_id else k for k in self._keyset.keys)
        self._keyset = Keyset(keys=keys, primary_key_id=self._keyset.primary_key_id)

    def add(self, template: KeyTemplate, as_primary: bool = False) -> int:
        """Generate a key from `template` and append it. Returns the key id."""
        material = self._registry.new_key_data(template)
        key = KeysetKey(
            material=material,
            key_id=self._new_key_id(),
            output_prefix_type=template.output_prefix_type,
        )
        self._keyset = Keyset(
            keys=self._keyset.keys + (key,),
            primary_key_id=key.key_id if as_primary else self._keyset.primary_key_id,
        )

        logger.info(
            "key_added",
            key_id=key.key_id,
            type_url=template.type_url,
            output_prefix_type=template.output_prefix_type.value,
            primary=as_primary,
        )

        return key.key_id

    def rotate(self, template: KeyTemplate) -> int:
        """
        Add a new key and make it primary.

        The previous primary stays ENABLED so data it produced still verifies
        or decrypts until it is disabled.
        """
        old_primary = self._keyset.primary_key_id
        key_id = self.add(template, as_primary=True)

        logger.info("key_rotated", old_key_id=old_primary, new_key_id=key_id)

        return key_id

    def set_primary(self, key_id: int) -> None:
        key = self._get(key_id)
        if key.status != KeyStatus.ENABLED:
            raise InvalidKeysetError(
                f"Key {key_id} is {key.status.value}; only ENABLED keys can be primary"
            )
        self._keyset = Keyset(keys=self._keyset.keys, primary_key_id=key_id)
        logger.info("primary_key_set", key_id=key_id)

    def enable(self, key_id: int) -> None:
        key = self._get(key_id)
        if key.status == KeyStatus.DESTROYED:
            raise InvalidKeysetError(f"Key {key_id} is destroyed and cannot be enabled")
        self._replace(key.with_status(KeyStatus.ENABLED))
        logger.info("key_enabled", key_id=key_id)

    def disable(self, key_id: int) -> None:
        """Keep the key for bookkeeping but stop using it."""
        if key_id == self._keyset.primary_key_id:
            raise InvalidKeysetError("Cannot disable the primary key")
        key = self._get(key_id)
        if key.status == KeyStatus.DESTROYED:
            raise InvalidKeysetError(f"Key {key_id} is destroyed and cannot be disabled")
        self._replace(key.with_status(KeyStatus.DISABLED))
        logger.info("key_disabled", key_id=key_id)

    def destroy(self, key_id: int) -> None:
        """Drop the key material. The key id stays so its history is visible."""
        if key_id == self._keyset.primary_key_id:
            raise InvalidKeysetError("Cannot destroy the primary key")
        key = self._get(key_id)
        destroyed = KeysetKey(
            material=SerializedKeyMaterial(
                type_url=key.type_url,
                value=b"",
                status=KeyStatus.DESTROYED,
                key_material_type=key.material.key_material_type,
            ),
            key_id=key.key_id,
            output_prefix_type=key.output_prefix_type,
        )
        self._replace(destroyed)
        logger.warning("key_destroyed", key_id=key_id)

    def list_keys(self, status: Optional[KeyStatus] = None) -> List[KeysetKey]:
        """List keys in keyset order, optionally filtered by status."""
        keys = list(self._keyset.keys)
        if status:
            keys = [k for k in keys if k.status == status]
        return keys

    def public_keyset(self) -> Keyset:
        """Public half of the current keyset, for distribution to verifiers."""
        return self.handle().public_keyset_handle().keyset
