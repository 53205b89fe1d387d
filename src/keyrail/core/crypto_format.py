"""
Output Prefix Wire Format

Non-RAW output is exactly NON_RAW_PREFIX_SIZE bytes of tag followed by the
algorithm's native output. RAW output carries no tag.
"""

import struct

from .exceptions import InvalidKeysetError
from .keyset import KeysetKey, OutputPrefixType

NON_RAW_PREFIX_SIZE = 5
LEGACY_PREFIX_SIZE = NON_RAW_PREFIX_SIZE
TINK_PREFIX_SIZE = NON_RAW_PREFIX_SIZE
RAW_PREFIX_SIZE = 0

TINK_START_BYTE = b"\x01"
LEGACY_START_BYTE = b"\x00"
RAW_PREFIX = b""

# Appended to the data before signing/MACing with LEGACY keys
LEGACY_DATA_SUFFIX = b"\x00"

MAX_KEY_ID = 0xFFFFFFFF


def output_prefix(key_id: int, output_prefix_type: OutputPrefixType) -> bytes:
    """Compute the tag prepended to output produced by the given key."""
    if output_prefix_type == OutputPrefixType.RAW:
        return RAW_PREFIX

    if not 0 <= key_id <= MAX_KEY_ID:
        raise InvalidKeysetError(f"Key id {key_id} does not fit in 32 bits")

    if output_prefix_type == OutputPrefixType.TINK:
        return TINK_START_BYTE + struct.pack(">I", key_id)

    if output_prefix_type in (OutputPrefixType.LEGACY, OutputPrefixType.CRUNCHY):
        return LEGACY_START_BYTE + struct.pack(">I", key_id)

    raise InvalidKeysetError(f"Unknown output prefix type: {output_prefix_type}")


def key_output_prefix(key: KeysetKey) -> bytes:
    return output_prefix(key.key_id, key.output_prefix_type)


def split_prefix(payload: bytes):
    """
    Split a payload into (candidate_prefix, remainder).

    Returns None when the payload is too short to carry a non-RAW prefix
    followed by at least one byte of native output.
    """
    if len(payload) <= NON_RAW_PREFIX_SIZE:
        return None
    return payload[:NON_RAW_PREFIX_SIZE], payload[NON_RAW_PREFIX_SIZE:]


def legacy_data(data: bytes, output_prefix_type: OutputPrefixType) -> bytes:
    """Data as actually signed/MACed by a key of the given prefix type."""
    if output_prefix_type == OutputPrefixType.LEGACY:
        return data + LEGACY_DATA_SUFFIX
    return data
