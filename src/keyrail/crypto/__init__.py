"""
Algorithm Backends for keyrail

Supports:
- Ed25519 and ECDSA (P-256/P-384/P-521) signatures
- HMAC (SHA-1/SHA-2) message authentication
- AES-GCM authenticated encryption
"""

from .signer import (
    Ed25519Sign,
    Ed25519Verify,
    EcdsaSign,
    EcdsaVerify,
)
from .mac import HmacMac
from .aead import AesGcmAead

__all__ = [
    "Ed25519Sign",
    "Ed25519Verify",
    "EcdsaSign",
    "EcdsaVerify",
    "HmacMac",
    "AesGcmAead",
]
