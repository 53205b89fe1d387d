"""
MAC Wrapper

Tags are computed with the primary key and prefixed with its identifier.
Verification tries tagged keys first, then RAW keys, and only ever answers
True or False.
"""

from typing import Optional, Type

from ..config import Settings
from ..core.crypto_format import legacy_data
from ..core.primitive_set import PrimitiveEntry, PrimitiveSet
from ..core.primitive_wrapper import BYTES_LIKE, PrimitiveWrapper, dispatch, require_primary
from ..primitives import Mac


class WrappedMac(Mac):

    def __init__(self, primitive_set: PrimitiveSet[Mac], settings: Optional[Settings] = None):
        self._primitive_set = primitive_set
        self._settings = settings

    async def compute_mac(self, data: bytes) -> bytes:
        primary = require_primary(self._primitive_set)
        tag = await primary.primitive.compute_mac(
            legacy_data(bytes(data), primary.output_prefix_type)
        )
        return primary.identifier + tag

    async def verify_mac(self, tag: bytes, data: bytes) -> bool:
        if not isinstance(tag, BYTES_LIKE) or not isinstance(data, BYTES_LIKE):
            return False
        data = bytes(data)

        async def attempt(entry: PrimitiveEntry[Mac], body: bytes) -> Optional[bool]:
            valid = await entry.primitive.verify_mac(
                body, legacy_data(data, entry.output_prefix_type)
            )
            return True if valid is True else None

        result = await dispatch(
            self._primitive_set,
            tag,
            attempt,
            operation="verify_mac",
            settings=self._settings,
        )
        return result is True


class MacWrapper(PrimitiveWrapper[Mac, Mac]):

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    def wrap(self, primitive_set: PrimitiveSet[Mac]) -> Mac:
        return WrappedMac(self.check_primitive_set(primitive_set), self._settings)

    def primitive_class(self) -> Type[Mac]:
        return Mac

    def input_primitive_class(self) -> Type[Mac]:
        return Mac
