"""
AEAD Wrapper

Encryption uses the primary key and prefixes its identifier. Decryption tries
tagged keys, then RAW keys; when none succeeds it raises one DecryptionError
whose message never depends on which keys were tried.
"""

from typing import Optional, Type

from ..config import Settings
from ..core.exceptions import DecryptionError
from ..core.primitive_set import PrimitiveEntry, PrimitiveSet
from ..core.primitive_wrapper import BYTES_LIKE, PrimitiveWrapper, dispatch, require_primary
from ..primitives import Aead

DECRYPTION_FAILED = "decryption failed"


class WrappedAead(Aead):

    def __init__(self, primitive_set: PrimitiveSet[Aead], settings: Optional[Settings] = None):
        self._primitive_set = primitive_set
        self._settings = settings

    async def encrypt(self, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        primary = require_primary(self._primitive_set)
        ciphertext = await primary.primitive.encrypt(bytes(plaintext), bytes(associated_data))
        return primary.identifier + ciphertext

    async def decrypt(self, ciphertext: bytes, associated_data: bytes = b"") -> bytes:
        if not isinstance(ciphertext, BYTES_LIKE) or not isinstance(associated_data, BYTES_LIKE):
            raise DecryptionError(DECRYPTION_FAILED)
        associated_data = bytes(associated_data)

        async def attempt(entry: PrimitiveEntry[Aead], body: bytes) -> Optional[bytes]:
            return await entry.primitive.decrypt(body, associated_data)

        plaintext = await dispatch(
            self._primitive_set,
            ciphertext,
            attempt,
            operation="decrypt",
            settings=self._settings,
        )
        if plaintext is None:
            raise DecryptionError(DECRYPTION_FAILED)
        return plaintext


class AeadWrapper(PrimitiveWrapper[Aead, Aead]):

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings

    def wrap(self, primitive_set: PrimitiveSet[Aead]) -> Aead:
        return WrappedAead(self.check_primitive_set(primitive_set), self._settings)

    def primitive_class(self) -> Type[Aead]:
        return Aead

    def input_primitive_class(self) -> Type[Aead]:
        return Aead
