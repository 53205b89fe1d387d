"""
HMAC Key Manager
"""

import os
from typing import Optional

from ..core.exceptions import MalformedKeyError
from ..core.key_manager import GeneratingKeyFactory, KeyManager
from ..core.keyset import KeyMaterialType
from ..crypto.mac import MAX_TAG_SIZES, MIN_TAG_SIZE, HmacMac
from ..primitives import Mac
from ..proto import HmacKey, HmacKeyFormat, HmacParams

HMAC_KEY_TYPE = "type.keyrail.dev/keyrail.HmacKey"

MIN_KEY_SIZE = 16
MAX_KEY_SIZE = 64


def validate_key_size(key_size: int) -> None:
    if not MIN_KEY_SIZE <= key_size <= MAX_KEY_SIZE:
        raise MalformedKeyError(
            f"Key size {key_size} out of range [{MIN_KEY_SIZE}..{MAX_KEY_SIZE}] bytes"
        )


def validate_params(params: Optional[HmacParams]) -> HmacParams:
    if params is None:
        raise MalformedKeyError(f"Input cannot be parsed as {HMAC_KEY_TYPE} key-proto: missing params")
    max_tag_size = MAX_TAG_SIZES.get(params.hash_type)
    if max_tag_size is None:
        raise MalformedKeyError(f"Unsupported hash: {params.hash_type.value}")
    if not MIN_TAG_SIZE <= params.tag_size <= max_tag_size:
        raise MalformedKeyError(
            f"Tag size {params.tag_size} out of range [{MIN_TAG_SIZE}..{max_tag_size}] "
            f"for {params.hash_type.value}"
        )
    return params


class HmacKeyFactory(GeneratingKeyFactory):
    KEY_FORMAT = HmacKeyFormat

    def validate_key_format(self, key_format: HmacKeyFormat) -> None:
        validate_params(key_format.params)
        validate_key_size(key_format.key_size)

    def generate(self, key_format: HmacKeyFormat) -> HmacKey:
        return HmacKey(
            version=HmacKeyManager.VERSION,
            params=key_format.params,
            key_value=os.urandom(key_format.key_size),
        )


class HmacKeyManager(KeyManager[Mac]):
    """Builds HMAC primitives from symmetric key material."""

    KEY_TYPE = HMAC_KEY_TYPE
    VERSION = 0
    KEY_PROTO = HmacKey
    PRIMITIVE = Mac
    KEY_MATERIAL_TYPE = KeyMaterialType.SYMMETRIC

    def __init__(self):
        self._key_factory = HmacKeyFactory(self)

    def key_factory(self) -> HmacKeyFactory:
        return self._key_factory

    def validate_key(self, key: HmacKey) -> None:
        validate_params(key.params)
        validate_key_size(len(key.key_value))

    def primitive_from(self, key: HmacKey) -> Mac:
        return HmacMac(key.params.hash_type, key.key_value, key.params.tag_size)
