"""
AES-GCM Backend

Ciphertext layout: nonce (12 bytes) || ciphertext || tag (16 bytes).
"""

import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..primitives import Aead

NONCE_SIZE = 12
TAG_SIZE = 16
VALID_KEY_SIZES = (16, 32)


class AesGcmAead(Aead):
    """AES-GCM with a random 96-bit nonce per message."""

    def __init__(self, key_value: bytes):
        self._aesgcm = AESGCM(bytes(key_value))

    async def encrypt(self, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        return nonce + self._aesgcm.encrypt(nonce, plaintext, associated_data)

    async def decrypt(self, ciphertext: bytes, associated_data: bytes = b"") -> bytes:
        if len(ciphertext) < NONCE_SIZE + TAG_SIZE:
            raise ValueError("Ciphertext too short")
        nonce = ciphertext[:NONCE_SIZE]
        # Raises cryptography.exceptions.InvalidTag on a wrong key or tampering
        return self._aesgcm.decrypt(nonce, ciphertext[NONCE_SIZE:], associated_data)
