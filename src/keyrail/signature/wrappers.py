"""
Signature Wrappers

WrappedPublicKeyVerify accepts a signature from any ENABLED key of a keyset,
tagged or raw, and answers only True or False. WrappedPublicKeySign signs with
the primary key and tags the signature with the primary's output prefix.
"""

from typing import Optional, Type

from ..config import Settings
from ..core.crypto_format import legacy_data
from ..core.primitive_set import PrimitiveEntry, PrimitiveSet
from ..core.primitive_wrapper import BYTES_LIKE, PrimitiveWrapper, dispatch, require_primary
from ..primitives import PublicKeySign, PublicKeyVerify


class WrappedPublicKeyVerify(PublicKeyVerify):
    """Verifies against every ENABLED key of a primitive set."""

    def __init__(self, primitive_set: PrimitiveSet[PublicKeyVerify], settings: Optional[Settings] = None):
        self._primitive_set = primitive_set
        self._settings = settings

    async def verify(self, signature: bytes, data: bytes) -> bool:
        if not isinstance(signature, BYTES_LIKE) or not isinstance(data, BYTES_LIKE):
            return False
        data = bytes(data)

        async def attempt(entry: PrimitiveEntry[PublicKeyVerify], body: bytes) -> Optional[bool]:
            valid = await entry.primitive.verify(
                body, legacy_data(data, entry.output_prefix_type)
            )
            return True if valid is True else None

        result = await dispatch(
            self._primitive_set,
            signature,
            attempt,
            operation="verify",
            settings=self._settings,
        )
        return result is True


class WrappedPublicKeySign(PublicKeySign):
    """Signs with the primary key; output is prefix || signature."""

    def __init__(self, primitive_set: PrimitiveSet[PublicKeySign]):
        self._primitive_set = primitive_set

    async def sign(self, data: bytes) -> bytes:
        primary = require_primary(self._primitive_set)
        signature = await primary.primitive.sign(
            legacy_data(bytes(data), primary.output_prefix_type)
        )
        return primary.identifier + signature


class PublicKeyVerifyWrapper(PrimitiveWrapper[PublicKeyVerify, PublicKeyVerify]):

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    def wrap(self, primitive_set: PrimitiveSet[PublicKeyVerify]) -> PublicKeyVerify:
        return WrappedPublicKeyVerify(self.check_primitive_set(primitive_set), self._settings)

    def primitive_class(self) -> Type[PublicKeyVerify]:
        return PublicKeyVerify

    def input_primitive_class(self) -> Type[PublicKeyVerify]:
        return PublicKeyVerify


class PublicKeySignWrapper(PrimitiveWrapper[PublicKeySign, PublicKeySign]):

    def wrap(self, primitive_set: PrimitiveSet[PublicKeySign]) -> PublicKeySign:
        return WrappedPublicKeySign(self.check_primitive_set(primitive_set))

    def primitive_class(self) -> Type[PublicKeySign]:
        return PublicKeySign

    def input_primitive_class(self) -> Type[PublicKeySign]:
        return PublicKeySign
