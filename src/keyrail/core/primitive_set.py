"""
Primitive Set

An immutable collection of keyed primitive instances backing one logical
keyset. Entries are indexed by their output prefix so lookup never scans the
whole set; RAW entries live in their own ordered sequence.

Built once through PrimitiveSetBuilder, then frozen. Rotation produces a new
set instead of editing an existing one.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Generic, List, Optional, Tuple, Type, TypeVar

import structlog

from .crypto_format import key_output_prefix
from .exceptions import DuplicatePrimaryError, KeyRailError, PrimitiveTypeMismatchError
from .keyset import KeysetKey, KeyStatus, OutputPrefixType

logger = structlog.get_logger()

P = TypeVar("P")


@dataclass(frozen=True)
class PrimitiveEntry(Generic[P]):
    """A primitive bound to one key, with the key's identity and status."""
    primitive: P
    key_id: int
    identifier: bytes
    output_prefix_type: OutputPrefixType
    status: KeyStatus
    is_primary: bool = False
    type_url: str = ""

    @property
    def is_enabled(self) -> bool:
        return self.status == KeyStatus.ENABLED

    @property
    def is_raw(self) -> bool:
        return self.output_prefix_type == OutputPrefixType.RAW


class PrimitiveSet(Generic[P]):
    """
    Frozen primitive set.

    Lookups return tuples in insertion order. Several entries may share a
    prefix (independently generated key ids can collide); all of them are
    returned.
    """

    def __init__(
        self,
        primitive_class: Type[P],
        buckets: Dict[bytes, Tuple[PrimitiveEntry[P], ...]],
        entries: Tuple[PrimitiveEntry[P], ...],
        primary: Optional[PrimitiveEntry[P]],
    ):
        self._primitive_class = primitive_class
        self._buckets = MappingProxyType(dict(buckets))
        self._entries = entries
        self._primary = primary

    @property
    def primitive_class(self) -> Type[P]:
        return self._primitive_class

    def entries_for_prefix(self, prefix: bytes) -> Tuple[PrimitiveEntry[P], ...]:
        """All entries, any status, whose output prefix equals `prefix`."""
        return self._buckets.get(bytes(prefix), ())

    def raw_entries(self) -> Tuple[PrimitiveEntry[P], ...]:
        return self._buckets.get(b"", ())

    def primary(self) -> Optional[PrimitiveEntry[P]]:
        return self._primary

    def all_entries(self) -> Tuple[PrimitiveEntry[P], ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"PrimitiveSet(primitive_class={self._primitive_class.__name__}, "
            f"entries={len(self._entries)}, "
            f"primary_key_id={self._primary.key_id if self._primary else None})"
        )


class PrimitiveSetBuilder(Generic[P]):
    """Mutable builder used while a keyset is being loaded."""

    def __init__(self, primitive_class: Type[P]):
        self._primitive_class = primitive_class
        self._buckets: Dict[bytes, List[PrimitiveEntry[P]]] = {}
        self._entries: List[PrimitiveEntry[P]] = []
        self._primary: Optional[PrimitiveEntry[P]] = None
        self._built = False

    def insert(self, entry: PrimitiveEntry[P]) -> PrimitiveEntry[P]:
        """Append an entry to its prefix bucket, preserving insertion order."""
        if self._built:
            raise KeyRailError("Primitive set has already been built")

        if not isinstance(entry.primitive, self._primitive_class):
            raise PrimitiveTypeMismatchError(
                f"Primitive {type(entry.primitive).__name__} is not a "
                f"{self._primitive_class.__name__}"
            )

        if entry.is_primary:
            if self._primary is not None:
                raise DuplicatePrimaryError(
                    f"Primary already set to key {self._primary.key_id}, "
                    f"cannot also mark key {entry.key_id} primary"
                )
            self._primary = entry

        self._buckets.setdefault(bytes(entry.identifier), []).append(entry)
        self._entries.append(entry)
        return entry

    def add_primitive(
        self,
        primitive: P,
        key: KeysetKey,
        is_primary: bool = False,
    ) -> PrimitiveEntry[P]:
        """Create and insert the entry for `primitive` bound to `key`."""
        entry = PrimitiveEntry(
            primitive=primitive,
            key_id=key.key_id,
            identifier=key_output_prefix(key),
            output_prefix_type=key.output_prefix_type,
            status=key.status,
            is_primary=is_primary,
            type_url=key.type_url,
        )
        return self.insert(entry)

    def build(self) -> PrimitiveSet[P]:
        """Freeze the collected entries. The builder cannot be reused."""
        if self._built:
            raise KeyRailError("Primitive set has already been built")
        self._built = True

        primitive_set = PrimitiveSet(
            primitive_class=self._primitive_class,
            buckets={prefix: tuple(entries) for prefix, entries in self._buckets.items()},
            entries=tuple(self._entries),
            primary=self._primary,
        )

        logger.debug(
            "primitive_set_built",
            primitive_class=self._primitive_class.__name__,
            entries=len(primitive_set),
            prefixes=len(self._buckets),
            primary_key_id=self._primary.key_id if self._primary else None,
        )

        return primitive_set
