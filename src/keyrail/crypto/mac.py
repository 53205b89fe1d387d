"""
HMAC Backend
"""

from cryptography.hazmat.primitives import constant_time, hmac

from ..primitives import Mac
from ..proto import HashType
from .signer import hash_algorithm

MIN_TAG_SIZE = 10
MAX_TAG_SIZES = {
    HashType.SHA1: 20,
    HashType.SHA256: 32,
    HashType.SHA384: 48,
    HashType.SHA512: 64,
}


class HmacMac(Mac):
    """HMAC truncated to `tag_size` bytes."""

    def __init__(self, hash_type: HashType, key_value: bytes, tag_size: int):
        self._hash_type = hash_type
        self._key = bytes(key_value)
        self._tag_size = tag_size

    def _compute(self, data: bytes) -> bytes:
        h = hmac.HMAC(self._key, hash_algorithm(self._hash_type))
        h.update(data)
        return h.finalize()[:self._tag_size]

    async def compute_mac(self, data: bytes) -> bytes:
        return self._compute(data)

    async def verify_mac(self, tag: bytes, data: bytes) -> bool:
        if len(tag) != self._tag_size:
            return False
        return constant_time.bytes_eq(self._compute(data), bytes(tag))
