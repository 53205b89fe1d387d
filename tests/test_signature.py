"""
Tests for Signature Keysets

End-to-end sign/verify across key rotation, output prefix types and public
keyset export.
"""

import pytest

from keyrail.core.crypto_format import output_prefix
from keyrail.core.keyset import Keyset, KeysetKey, OutputPrefixType
from keyrail.core.keyset_handle import KeysetHandle
from keyrail.core.keyset_manager import KeysetManager
from keyrail.primitives import PublicKeySign, PublicKeyVerify
from keyrail.signature import key_templates


async def sign_with(handle, data):
    return await handle.primitive(PublicKeySign).sign(data)


def verifier_for(handle):
    return handle.public_keyset_handle().primitive(PublicKeyVerify)


class TestSignVerify:
    """Test wrapped sign and verify with real keys."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("template", [
        key_templates.ECDSA_P256,
        key_templates.ECDSA_P256_IEEE_P1363,
        key_templates.ECDSA_P384,
        key_templates.ED25519,
        key_templates.ED25519_LEGACY,
    ])
    async def test_round_trip(self, registry, template):
        """A signature from the primary verifies with the public keyset."""
        handle = KeysetHandle.generate_new(template, registry)

        signature = await sign_with(handle, b"payload")

        verifier = verifier_for(handle)
        assert await verifier.verify(signature, b"payload") is True
        assert await verifier.verify(signature, b"tampered") is False

    @pytest.mark.asyncio
    async def test_tink_signature_prefixed(self, registry):
        """TINK signatures start with the primary key's prefix."""
        handle = KeysetHandle.generate_new(key_templates.ED25519, registry)
        key_id = handle.keyset.primary_key_id

        signature = await sign_with(handle, b"payload")

        assert signature[:5] == output_prefix(key_id, OutputPrefixType.TINK)
        assert len(signature) == 5 + 64

    @pytest.mark.asyncio
    async def test_raw_signature_unprefixed(self, registry):
        """RAW signatures are the algorithm's native output."""
        handle = KeysetHandle.generate_new(key_templates.ED25519_RAW, registry)

        signature = await sign_with(handle, b"payload")

        assert len(signature) == 64
        assert await verifier_for(handle).verify(signature, b"payload") is True

    @pytest.mark.asyncio
    async def test_prefix_must_match_key(self, registry):
        """A tagged signature moved under another key id is rejected."""
        handle = KeysetHandle.generate_new(key_templates.ED25519, registry)
        signature = await sign_with(handle, b"payload")
        key_id = handle.keyset.primary_key_id
        moved = output_prefix(key_id ^ 1, OutputPrefixType.TINK) + signature[5:]

        assert await verifier_for(handle).verify(moved, b"payload") is False

    @pytest.mark.asyncio
    async def test_stripped_tink_signature_rejected(self, registry):
        """A TINK key does not accept its signature without the prefix."""
        handle = KeysetHandle.generate_new(key_templates.ED25519, registry)
        signature = await sign_with(handle, b"payload")

        assert await verifier_for(handle).verify(signature[5:], b"payload") is False

    @pytest.mark.asyncio
    async def test_garbage_signature(self, registry):
        """Malformed signatures are a rejection, never an exception."""
        handle = KeysetHandle.generate_new(key_templates.ECDSA_P256, registry)
        verifier = verifier_for(handle)
        key_id = handle.keyset.primary_key_id

        assert await verifier.verify(b"", b"payload") is False
        assert await verifier.verify(b"\x01", b"payload") is False
        assert await verifier.verify(output_prefix(key_id, OutputPrefixType.TINK) + b"junk", b"payload") is False


class TestRotation:
    """Test verification across rotated keys."""

    @pytest.mark.asyncio
    async def test_old_and_new_signatures_verify(self, registry):
        """After rotation both generations still verify."""
        manager = KeysetManager(registry)
        manager.add(key_templates.ECDSA_P256, as_primary=True)
        old_signature = await sign_with(manager.handle(), b"payload")

        manager.rotate(key_templates.ED25519)
        new_signature = await sign_with(manager.handle(), b"payload")

        verifier = manager.handle().public_keyset_handle().primitive(PublicKeyVerify)
        assert await verifier.verify(old_signature, b"payload") is True
        assert await verifier.verify(new_signature, b"payload") is True

    @pytest.mark.asyncio
    async def test_mixed_tagged_and_raw_keys(self, registry):
        """A keyset with tagged and RAW keys verifies both kinds."""
        manager = KeysetManager(registry)
        raw_id = manager.add(key_templates.ED25519_RAW, as_primary=True)
        raw_signature = await sign_with(manager.handle(), b"payload")
        manager.rotate(key_templates.ECDSA_P256)
        tagged_signature = await sign_with(manager.handle(), b"payload")

        verifier = manager.handle().public_keyset_handle().primitive(PublicKeyVerify)
        assert await verifier.verify(raw_signature, b"payload") is True
        assert await verifier.verify(tagged_signature, b"payload") is True
        assert manager.keyset().get(raw_id).output_prefix_type == OutputPrefixType.RAW

    @pytest.mark.asyncio
    async def test_disabled_key_stops_verifying(self, registry):
        """Disabling the old key rejects its signatures."""
        manager = KeysetManager(registry)
        old_id = manager.add(key_templates.ED25519, as_primary=True)
        old_signature = await sign_with(manager.handle(), b"payload")
        manager.rotate(key_templates.ED25519)

        manager.disable(old_id)

        verifier = manager.handle().public_keyset_handle().primitive(PublicKeyVerify)
        assert await verifier.verify(old_signature, b"payload") is False

    @pytest.mark.asyncio
    async def test_destroyed_key_stops_verifying(self, registry):
        """Destroyed keys are left out of the primitive set."""
        manager = KeysetManager(registry)
        old_id = manager.add(key_templates.ED25519, as_primary=True)
        old_signature = await sign_with(manager.handle(), b"payload")
        manager.rotate(key_templates.ED25519)

        manager.destroy(old_id)

        verifier = manager.handle().public_keyset_handle().primitive(PublicKeyVerify)
        assert await verifier.verify(old_signature, b"payload") is False

    @pytest.mark.asyncio
    async def test_snapshot_unaffected_by_rotation(self, registry):
        """A verifier built before a change keeps its own key set."""
        manager = KeysetManager(registry)
        old_id = manager.add(key_templates.ED25519, as_primary=True)
        old_signature = await sign_with(manager.handle(), b"payload")
        verifier = manager.handle().public_keyset_handle().primitive(PublicKeyVerify)

        manager.rotate(key_templates.ED25519)
        manager.disable(old_id)

        assert await verifier.verify(old_signature, b"payload") is True


class TestTaggedAndRawKeys:
    """Test one tagged key and one RAW key in the same keyset."""

    @pytest.mark.asyncio
    async def test_tagged_raw_and_unknown_prefix(self, registry):
        """Tagged input matches by prefix, bare input reaches the RAW key."""
        tagged_key = KeysetKey(
            material=registry.new_key_data(key_templates.ED25519),
            key_id=0x01020304,
            output_prefix_type=OutputPrefixType.TINK,
        )
        raw_key = KeysetKey(
            material=registry.new_key_data(key_templates.ED25519_RAW),
            key_id=7,
            output_prefix_type=OutputPrefixType.RAW,
        )
        keys = [tagged_key, raw_key]
        tagged_handle = KeysetHandle(Keyset(keys=keys, primary_key_id=0x01020304), registry)
        raw_handle = KeysetHandle(Keyset(keys=keys, primary_key_id=7), registry)
        verifier = verifier_for(tagged_handle)

        tagged_signature = await sign_with(tagged_handle, b"data")
        raw_signature = await sign_with(raw_handle, b"data")

        assert tagged_signature[:5] == b"\x01\x01\x02\x03\x04"
        assert await verifier.verify(tagged_signature, b"data") is True
        assert len(raw_signature) == 64
        assert await verifier.verify(raw_signature, b"data") is True
        assert await verifier.verify(b"\x01\x09\x09\x09\x09" + tagged_signature[5:], b"data") is False
