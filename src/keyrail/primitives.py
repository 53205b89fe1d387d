"""
Primitive Contracts

Every primitive is bound to exactly one key. Operations are coroutines so that
backends doing remote or blocking I/O can suspend; wrappers await each
candidate in turn.
"""

from abc import ABC, abstractmethod


class PublicKeySign(ABC):
    """Produces digital signatures."""

    @abstractmethod
    async def sign(self, data: bytes) -> bytes:
        """Sign data and return the signature."""
        pass


class PublicKeyVerify(ABC):
    """Verifies digital signatures."""

    @abstractmethod
    async def verify(self, signature: bytes, data: bytes) -> bool:
        """Return True iff `signature` is valid for `data`."""
        pass


class Mac(ABC):
    """Computes and verifies message authentication codes."""

    @abstractmethod
    async def compute_mac(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    async def verify_mac(self, tag: bytes, data: bytes) -> bool:
        pass


class Aead(ABC):
    """Authenticated encryption with associated data."""

    @abstractmethod
    async def encrypt(self, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        pass

    @abstractmethod
    async def decrypt(self, ciphertext: bytes, associated_data: bytes = b"") -> bytes:
        """Decrypt or raise; a wrong key or tampered input must never return."""
        pass
