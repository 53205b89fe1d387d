"""
Tests for AEAD Keysets
"""

import pytest

from keyrail.core.exceptions import DecryptionError
from keyrail.core.keyset_handle import KeysetHandle
from keyrail.core.keyset_manager import KeysetManager
from keyrail.aead import key_templates
from keyrail.aead.wrapper import DECRYPTION_FAILED
from keyrail.primitives import Aead


class TestAesGcm:
    """Test wrapped AES-GCM with generated keys."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("template", [key_templates.AES128_GCM, key_templates.AES256_GCM])
    async def test_round_trip(self, registry, template):
        aead = KeysetHandle.generate_new(template, registry).primitive(Aead)

        ciphertext = await aead.encrypt(b"secret", b"context")

        assert ciphertext[:1] == b"\x01"
        assert await aead.decrypt(ciphertext, b"context") == b"secret"

    @pytest.mark.asyncio
    async def test_empty_plaintext(self, registry):
        """An empty plaintext is a successful decryption, not a miss."""
        aead = KeysetHandle.generate_new(key_templates.AES128_GCM, registry).primitive(Aead)

        ciphertext = await aead.encrypt(b"")

        assert await aead.decrypt(ciphertext) == b""

    @pytest.mark.asyncio
    async def test_wrong_associated_data(self, registry):
        aead = KeysetHandle.generate_new(key_templates.AES256_GCM, registry).primitive(Aead)
        ciphertext = await aead.encrypt(b"secret", b"context")

        with pytest.raises(DecryptionError):
            await aead.decrypt(ciphertext, b"other")

    @pytest.mark.asyncio
    async def test_tampered_ciphertext(self, registry):
        aead = KeysetHandle.generate_new(key_templates.AES256_GCM, registry).primitive(Aead)
        ciphertext = bytearray(await aead.encrypt(b"secret"))
        ciphertext[-1] ^= 1

        with pytest.raises(DecryptionError):
            await aead.decrypt(bytes(ciphertext))

    @pytest.mark.asyncio
    async def test_failure_message_is_uniform(self, registry):
        """Every failure raises the same message."""
        aead = KeysetHandle.generate_new(key_templates.AES256_GCM, registry).primitive(Aead)
        messages = set()

        for ciphertext in (b"", b"short", b"\x01" * 40, "not bytes"):
            with pytest.raises(DecryptionError) as exc_info:
                await aead.decrypt(ciphertext)
            messages.add(str(exc_info.value))

        assert messages == {DECRYPTION_FAILED}

    @pytest.mark.asyncio
    async def test_raw_key(self, registry):
        aead = KeysetHandle.generate_new(key_templates.AES256_GCM_RAW, registry).primitive(Aead)

        ciphertext = await aead.encrypt(b"secret")

        assert len(ciphertext) == 12 + len(b"secret") + 16
        assert await aead.decrypt(ciphertext) == b"secret"

    @pytest.mark.asyncio
    async def test_rotation(self, registry):
        """Ciphertext from an older key decrypts until the key is disabled."""
        manager = KeysetManager(registry)
        old_id = manager.add(key_templates.AES128_GCM, as_primary=True)
        old_ciphertext = await manager.handle().primitive(Aead).encrypt(b"secret")
        manager.rotate(key_templates.AES256_GCM_RAW)
        new_ciphertext = await manager.handle().primitive(Aead).encrypt(b"secret")

        aead = manager.handle().primitive(Aead)
        assert await aead.decrypt(old_ciphertext) == b"secret"
        assert await aead.decrypt(new_ciphertext) == b"secret"

        manager.disable(old_id)
        with pytest.raises(DecryptionError):
            await manager.handle().primitive(Aead).decrypt(old_ciphertext)
