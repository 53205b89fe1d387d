"""
Pytest Configuration and Fixtures
"""

import asyncio
import os
import sys
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

from keyrail import new_registry
from keyrail.config import Settings
from keyrail.core.keyset import KeyStatus, OutputPrefixType
from keyrail.core.crypto_format import output_prefix
from keyrail.core.primitive_set import PrimitiveEntry
from keyrail.primitives import Mac, PublicKeyVerify


class FakeVerify(PublicKeyVerify):
    """Verifier that answers a fixed result and records every call."""

    def __init__(self, name, result=False, error=None, delay=0.0, calls=None):
        self.name = name
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = calls if calls is not None else []

    async def verify(self, signature, data):
        self.calls.append(("start", self.name, bytes(signature), bytes(data)))
        if self.delay:
            await asyncio.sleep(self.delay)
        self.calls.append(("end", self.name))
        if self.error is not None:
            raise self.error
        return self.result


class FakeMac(Mac):
    """MAC that accepts exactly one tag."""

    def __init__(self, tag, error=None):
        self.tag = tag
        self.error = error

    async def compute_mac(self, data):
        return self.tag

    async def verify_mac(self, tag, data):
        if self.error is not None:
            raise self.error
        return tag == self.tag


def make_entry(primitive, key_id, output_prefix_type=OutputPrefixType.TINK,
               status=KeyStatus.ENABLED, is_primary=False):
    return PrimitiveEntry(
        primitive=primitive,
        key_id=key_id,
        identifier=output_prefix(key_id, output_prefix_type),
        output_prefix_type=output_prefix_type,
        status=status,
        is_primary=is_primary,
    )


@pytest.fixture
def registry():
    """A registry with every bundled key type."""
    return new_registry(Settings())


@pytest.fixture
def call_log():
    """Shared call log for fake primitives."""
    return []

