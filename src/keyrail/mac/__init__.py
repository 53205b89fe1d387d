"""
Message Authentication Codes for keyrail
"""

from typing import Optional

from ..config import Settings
from ..core.registry import Registry
from ..primitives import Mac
from .hmac_key_manager import HMAC_KEY_TYPE, HmacKeyManager
from .wrapper import MacWrapper
from . import key_templates


def register(registry: Registry, settings: Optional[Settings] = None) -> None:
    registry.register_key_manager(HmacKeyManager())
    registry.register_primitive_wrapper(MacWrapper(settings))


__all__ = [
    "Mac",
    "HMAC_KEY_TYPE",
    "HmacKeyManager",
    "MacWrapper",
    "key_templates",
    "register",
]
