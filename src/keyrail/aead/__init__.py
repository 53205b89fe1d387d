"""
Authenticated Encryption for keyrail
"""

from typing import Optional

from ..config import Settings
from ..core.registry import Registry
from ..primitives import Aead
from .aes_gcm_key_manager import AES_GCM_KEY_TYPE, AesGcmKeyManager
from .wrapper import AeadWrapper
from . import key_templates


def register(registry: Registry, settings: Optional[Settings] = None) -> None:
    registry.register_key_manager(AesGcmKeyManager())
    registry.register_primitive_wrapper(AeadWrapper(settings))


__all__ = [
    "Aead",
    "AES_GCM_KEY_TYPE",
    "AesGcmKeyManager",
    "AeadWrapper",
    "key_templates",
    "register",
]
