"""
keyrail - Cryptographic Agility Layer

Holds a set of keys of different algorithms and rotation generations behind
one stable operation (sign, verify, MAC, encrypt, decrypt). Callers never
learn which key produced or consumed their data.
"""

from typing import Optional

from .config import Settings, configure_logging, get_settings
from .core import KeysetHandle, KeysetManager, Registry
from .primitives import Aead, Mac, PublicKeySign, PublicKeyVerify
from . import aead, mac, signature

__version__ = "1.0.0"


def new_registry(settings: Optional[Settings] = None) -> Registry:
    """A registry with every bundled key type and wrapper registered."""
    registry = Registry()
    signature.register(registry, settings)
    mac.register(registry, settings)
    aead.register(registry, settings)
    return registry


__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "KeysetHandle",
    "KeysetManager",
    "Registry",
    "Aead",
    "Mac",
    "PublicKeySign",
    "PublicKeyVerify",
    "aead",
    "mac",
    "signature",
    "new_registry",
]
