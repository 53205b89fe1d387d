"""
AES-GCM Key Manager
"""

import os

from ..core.exceptions import MalformedKeyError
from ..core.key_manager import GeneratingKeyFactory, KeyManager
from ..core.keyset import KeyMaterialType
from ..crypto.aead import VALID_KEY_SIZES, AesGcmAead
from ..primitives import Aead
from ..proto import AesGcmKey, AesGcmKeyFormat

AES_GCM_KEY_TYPE = "type.keyrail.dev/keyrail.AesGcmKey"


def validate_key_size(key_size: int) -> None:
    if key_size not in VALID_KEY_SIZES:
        raise MalformedKeyError(
            f"Invalid AES-GCM key size {key_size}; expected one of {list(VALID_KEY_SIZES)}"
        )


class AesGcmKeyFactory(GeneratingKeyFactory):
    KEY_FORMAT = AesGcmKeyFormat

    def validate_key_format(self, key_format: AesGcmKeyFormat) -> None:
        validate_key_size(key_format.key_size)

    def generate(self, key_format: AesGcmKeyFormat) -> AesGcmKey:
        return AesGcmKey(
            version=AesGcmKeyManager.VERSION,
            key_value=os.urandom(key_format.key_size),
        )


class AesGcmKeyManager(KeyManager[Aead]):
    """Builds AES-GCM primitives from symmetric key material."""

    KEY_TYPE = AES_GCM_KEY_TYPE
    VERSION = 0
    KEY_PROTO = AesGcmKey
    PRIMITIVE = Aead
    KEY_MATERIAL_TYPE = KeyMaterialType.SYMMETRIC

    def __init__(self):
        self._key_factory = AesGcmKeyFactory(self)

    def key_factory(self) -> AesGcmKeyFactory:
        return self._key_factory

    def validate_key(self, key: AesGcmKey) -> None:
        validate_key_size(len(key.key_value))

    def primitive_from(self, key: AesGcmKey) -> Aead:
        return AesGcmAead(key.key_value)
