"""
Signature Key Templates

Pre-generated templates for the private key types. Public keys are never
generated directly; derive them with KeysetHandle.public_keyset_handle().
"""

from ..core.keyset import KeyTemplate, OutputPrefixType
from ..proto import (
    EcdsaKeyFormat,
    EcdsaParams,
    EcdsaSignatureEncoding,
    Ed25519KeyFormat,
    EllipticCurveType,
    HashType,
)
from .ecdsa_key_manager import ECDSA_PRIVATE_KEY_TYPE
from .ed25519_key_manager import ED25519_PRIVATE_KEY_TYPE


def create_ecdsa_key_template(
    hash_type: HashType,
    curve: EllipticCurveType,
    encoding: EcdsaSignatureEncoding,
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    key_format = EcdsaKeyFormat(
        params=EcdsaParams(hash_type=hash_type, curve=curve, encoding=encoding)
    )
    return KeyTemplate(
        type_url=ECDSA_PRIVATE_KEY_TYPE,
        value=key_format.serialize(),
        output_prefix_type=output_prefix_type,
    )


def create_ed25519_key_template(
    output_prefix_type: OutputPrefixType = OutputPrefixType.TINK,
) -> KeyTemplate:
    return KeyTemplate(
        type_url=ED25519_PRIVATE_KEY_TYPE,
        value=Ed25519KeyFormat().serialize(),
        output_prefix_type=output_prefix_type,
    )


ECDSA_P256 = create_ecdsa_key_template(
    HashType.SHA256, EllipticCurveType.NIST_P256, EcdsaSignatureEncoding.DER
)
ECDSA_P256_IEEE_P1363 = create_ecdsa_key_template(
    HashType.SHA256, EllipticCurveType.NIST_P256, EcdsaSignatureEncoding.IEEE_P1363
)
ECDSA_P256_RAW = create_ecdsa_key_template(
    HashType.SHA256,
    EllipticCurveType.NIST_P256,
    EcdsaSignatureEncoding.IEEE_P1363,
    OutputPrefixType.RAW,
)
ECDSA_P384 = create_ecdsa_key_template(
    HashType.SHA512, EllipticCurveType.NIST_P384, EcdsaSignatureEncoding.DER
)
ECDSA_P521 = create_ecdsa_key_template(
    HashType.SHA512, EllipticCurveType.NIST_P521, EcdsaSignatureEncoding.DER
)
ED25519 = create_ed25519_key_template()
ED25519_RAW = create_ed25519_key_template(OutputPrefixType.RAW)
ED25519_LEGACY = create_ed25519_key_template(OutputPrefixType.LEGACY)
