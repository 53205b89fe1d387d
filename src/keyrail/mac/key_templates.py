"""
MAC Key Templates
"""

from ..core.keyset import KeyTemplate, OutputPrefixType
from ..proto import HashType, HmacKeyFormat, HmacParams
from .hmac_key_manager import HMAC_KEY_TYPE


def create_hmac_key_template(
    key_size: int,
    tag_size: int,
    hash_type: HashType,
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    key_format = HmacKeyFormat(
        params=HmacParams(hash_type=hash_type, tag_size=tag_size),
        key_size=key_size,
    )
    return KeyTemplate(
        type_url=HMAC_KEY_TYPE,
        value=key_format.serialize(),
        output_prefix_type=output_prefix_type,
    )


HMAC_SHA256_128BITTAG = create_hmac_key_template(32, 16, HashType.SHA256)
HMAC_SHA256_256BITTAG = create_hmac_key_template(32, 32, HashType.SHA256)
HMAC_SHA256_256BITTAG_RAW = create_hmac_key_template(
    32, 32, HashType.SHA256, OutputPrefixType.RAW
)
HMAC_SHA512_256BITTAG = create_hmac_key_template(64, 32, HashType.SHA512)
HMAC_SHA512_512BITTAG = create_hmac_key_template(64, 64, HashType.SHA512)
