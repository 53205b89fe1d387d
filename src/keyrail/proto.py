"""
Key Schemas

Structured key material for every supported key type. Keys travel as UTF-8
JSON with base64 byte fields; fields default to empty the way protobuf
scalars do, so a key manager can tell "absent" from "present" and reject
incomplete keys explicitly.
"""

import base64
from enum import Enum
from typing import Annotated, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, ValidationError

T = TypeVar("T", bound="KeyProto")


def _decode_base64(value):
    if isinstance(value, str):
        return base64.b64decode(value, validate=True)
    return value


def _encode_base64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


# Raw bytes in Python, base64 strings in JSON
KeyBytes = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(_encode_base64, return_type=str, when_used="json"),
]


class HashType(str, Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"


class EllipticCurveType(str, Enum):
    NIST_P256 = "NIST_P256"
    NIST_P384 = "NIST_P384"
    NIST_P521 = "NIST_P521"


class EcdsaSignatureEncoding(str, Enum):
    DER = "DER"
    IEEE_P1363 = "IEEE_P1363"


class KeyProto(BaseModel):
    """Base for every key, key format and parameter schema."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    version: int = Field(default=0, ge=0)

    def serialize(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def parse(cls: Type[T], data: bytes) -> T:
        """Decode bytes into this schema. Raises ValueError on any failure."""
        if not isinstance(data, (bytes, bytearray)):
            raise ValueError(f"expected bytes, got {type(data).__name__}")
        try:
            return cls.model_validate_json(bytes(data))
        except ValidationError as e:
            raise ValueError(f"cannot decode {cls.__name__}: {e.error_count()} error(s)") from e


class EcdsaParams(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    hash_type: HashType
    curve: EllipticCurveType
    encoding: EcdsaSignatureEncoding = EcdsaSignatureEncoding.DER


class EcdsaPublicKey(KeyProto):
    params: Optional[EcdsaParams] = None
    x: KeyBytes = b""
    y: KeyBytes = b""


class EcdsaPrivateKey(KeyProto):
    public_key: Optional[EcdsaPublicKey] = None
    key_value: KeyBytes = Field(default=b"", repr=False)


class EcdsaKeyFormat(KeyProto):
    params: Optional[EcdsaParams] = None


class Ed25519PublicKey(KeyProto):
    key_value: KeyBytes = b""


class Ed25519PrivateKey(KeyProto):
    public_key: Optional[Ed25519PublicKey] = None
    key_value: KeyBytes = Field(default=b"", repr=False)


class Ed25519KeyFormat(KeyProto):
    pass


class HmacParams(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    hash_type: HashType
    tag_size: int


class HmacKey(KeyProto):
    params: Optional[HmacParams] = None
    key_value: KeyBytes = Field(default=b"", repr=False)


class HmacKeyFormat(KeyProto):
    params: Optional[HmacParams] = None
    key_size: int = 0


class AesGcmKey(KeyProto):
    key_value: KeyBytes = Field(default=b"", repr=False)


class AesGcmKeyFormat(KeyProto):
    key_size: int = 0
