"""
Keyset Data Model

Value types shared by key managers, primitive sets and wrappers:
- KeyStatus / OutputPrefixType / KeyMaterialType enums
- SerializedKeyMaterial - opaque key bytes tagged with a type URL
- KeysetKey / Keyset - a logical keyset with one primary key
- KeyTemplate - what a key factory needs to generate a key
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class KeyStatus(Enum):
    """Lifecycle status of a key. Only ENABLED keys are ever exercised."""
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    DESTROYED = "DESTROYED"


class OutputPrefixType(Enum):
    """How operation output is tagged with the owning key's identifier."""
    RAW = "RAW"  # No prefix
    TINK = "TINK"  # 0x01 || key_id
    LEGACY = "LEGACY"  # 0x00 || key_id, data suffixed with 0x00
    CRUNCHY = "CRUNCHY"  # 0x00 || key_id


class KeyMaterialType(Enum):
    """Kind of secret carried by serialized key material."""
    UNKNOWN = "UNKNOWN"
    SYMMETRIC = "SYMMETRIC"
    ASYMMETRIC_PRIVATE = "ASYMMETRIC_PRIVATE"
    ASYMMETRIC_PUBLIC = "ASYMMETRIC_PUBLIC"
    REMOTE = "REMOTE"


@dataclass(frozen=True)
class SerializedKeyMaterial:
    """
    Key bytes as supplied by a keyset store or KMS.

    Opaque to everything except the key manager whose type URL matches.
    """
    type_url: str
    value: bytes
    status: KeyStatus = KeyStatus.ENABLED
    key_material_type: KeyMaterialType = KeyMaterialType.UNKNOWN

    def with_status(self, status: KeyStatus) -> "SerializedKeyMaterial":
        return replace(self, status=status)

    def __repr__(self) -> str:
        # Never print key bytes
        return (
            f"SerializedKeyMaterial(type_url={self.type_url!r}, "
            f"status={self.status.value}, "
            f"key_material_type={self.key_material_type.value})"
        )


@dataclass(frozen=True)
class KeysetKey:
    """One key of a keyset: material plus its identifier and prefix policy."""
    material: SerializedKeyMaterial
    key_id: int
    output_prefix_type: OutputPrefixType

    @property
    def status(self) -> KeyStatus:
        return self.material.status

    @property
    def type_url(self) -> str:
        return self.material.type_url

    def with_status(self, status: KeyStatus) -> "KeysetKey":
        return replace(self, material=self.material.with_status(status))

    def info(self) -> Dict[str, Any]:
        """Metadata safe to log or export."""
        return {
            "key_id": self.key_id,
            "type_url": self.type_url,
            "status": self.status.value,
            "output_prefix_type": self.output_prefix_type.value,
        }


@dataclass(frozen=True)
class Keyset:
    """An ordered collection of keys with an optional primary key id."""
    keys: Tuple[KeysetKey, ...] = ()
    primary_key_id: Optional[int] = None

    def __post_init__(self):
        # Accept any iterable but store a tuple so the value stays immutable
        object.__setattr__(self, "keys", tuple(self.keys))

    def get(self, key_id: int) -> Optional[KeysetKey]:
        for key in self.keys:
            if key.key_id == key_id:
                return key
        return None

    def key_ids(self) -> List[int]:
        return [key.key_id for key in self.keys]

    def info(self) -> Dict[str, Any]:
        return {
            "primary_key_id": self.primary_key_id,
            "keys": [key.info() for key in self.keys],
        }


@dataclass(frozen=True)
class KeyTemplate:
    """Parameters for generating one new key."""
    type_url: str
    value: bytes = b""
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)
