"""
Digital Signatures for keyrail

Supports:
- ECDSA (NIST P-256/P-384/P-521, DER or IEEE P1363 signatures)
- Ed25519
"""

from typing import Optional

from ..config import Settings
from ..core.registry import Registry
from ..primitives import PublicKeySign, PublicKeyVerify
from .ecdsa_key_manager import (
    ECDSA_PRIVATE_KEY_TYPE,
    ECDSA_PUBLIC_KEY_TYPE,
    EcdsaPrivateKeyManager,
    EcdsaPublicKeyManager,
)
from .ed25519_key_manager import (
    ED25519_PRIVATE_KEY_TYPE,
    ED25519_PUBLIC_KEY_TYPE,
    Ed25519PrivateKeyManager,
    Ed25519PublicKeyManager,
)
from .wrappers import PublicKeySignWrapper, PublicKeyVerifyWrapper
from . import key_templates


def register(registry: Registry, settings: Optional[Settings] = None) -> None:
    """Register every signature key manager and both wrappers."""
    registry.register_key_manager(EcdsaPrivateKeyManager())
    registry.register_key_manager(EcdsaPublicKeyManager(), new_key_allowed=False)
    registry.register_key_manager(Ed25519PrivateKeyManager())
    registry.register_key_manager(Ed25519PublicKeyManager(), new_key_allowed=False)
    registry.register_primitive_wrapper(PublicKeySignWrapper())
    registry.register_primitive_wrapper(PublicKeyVerifyWrapper(settings))


__all__ = [
    "PublicKeySign",
    "PublicKeyVerify",
    "ECDSA_PRIVATE_KEY_TYPE",
    "ECDSA_PUBLIC_KEY_TYPE",
    "ED25519_PRIVATE_KEY_TYPE",
    "ED25519_PUBLIC_KEY_TYPE",
    "EcdsaPrivateKeyManager",
    "EcdsaPublicKeyManager",
    "Ed25519PrivateKeyManager",
    "Ed25519PublicKeyManager",
    "PublicKeySignWrapper",
    "PublicKeyVerifyWrapper",
    "key_templates",
    "register",
]
