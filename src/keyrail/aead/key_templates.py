"""
AEAD Key Templates
"""

from ..core.keyset import KeyTemplate, OutputPrefixType
from ..proto import AesGcmKeyFormat
from .aes_gcm_key_manager import AES_GCM_KEY_TYPE


def create_aes_gcm_key_template(
    key_size: int,
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    return KeyTemplate(
        type_url=AES_GCM_KEY_TYPE,
        value=AesGcmKeyFormat(key_size=key_size).serialize(),
        output_prefix_type=output_prefix_type,
    )


AES128_GCM = create_aes_gcm_key_template(16)
AES256_GCM = create_aes_gcm_key_template(32)
AES256_GCM_RAW = create_aes_gcm_key_template(32, OutputPrefixType.RAW)
