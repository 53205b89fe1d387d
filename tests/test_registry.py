"""
Tests for the Key Manager Registry and Keyset Handles
"""

import pytest

from keyrail import new_registry
from keyrail.core.exceptions import (
    InvalidKeysetError,
    KeyManagerExistsError,
    NullPrimitiveSetError,
    PrimitiveTypeMismatchError,
    UnknownKeyTypeError,
    UnknownPrimitiveError,
    UnsupportedOperationError,
)
from keyrail.core.keyset import (
    Keyset,
    KeysetKey,
    KeyStatus,
    KeyTemplate,
    OutputPrefixType,
    SerializedKeyMaterial,
)
from keyrail.core.keyset_handle import KeysetHandle
from keyrail.core.primitive_set import PrimitiveSetBuilder
from keyrail.core.registry import Registry
from keyrail.mac import key_templates as mac_templates
from keyrail.mac.hmac_key_manager import HmacKeyManager
from keyrail.primitives import Aead, Mac, PublicKeySign, PublicKeyVerify
from keyrail.signature import key_templates as signature_templates
from keyrail.signature.ecdsa_key_manager import ECDSA_PUBLIC_KEY_TYPE
from keyrail.signature.ed25519_key_manager import ED25519_PUBLIC_KEY_TYPE, Ed25519PrivateKeyManager


def keyset_key(registry, template, key_id, status=KeyStatus.ENABLED):
    material = registry.new_key_data(template).with_status(status)
    return KeysetKey(material=material, key_id=key_id, output_prefix_type=template.output_prefix_type)


class TestRegistration:
    """Test registering and looking up key managers."""

    def test_registries_are_independent(self):
        """Each registry starts empty; nothing is global."""
        populated = new_registry()
        empty = Registry()

        assert populated.key_manager(ED25519_PUBLIC_KEY_TYPE).key_type() == ED25519_PUBLIC_KEY_TYPE
        with pytest.raises(UnknownKeyTypeError):
            empty.key_manager(ED25519_PUBLIC_KEY_TYPE)

    def test_same_manager_class_may_reregister(self):
        registry = Registry()
        registry.register_key_manager(HmacKeyManager())
        registry.register_key_manager(HmacKeyManager())

    def test_conflicting_manager_rejected(self):
        """A type URL cannot be claimed by a second manager class."""

        class OtherHmacManager(HmacKeyManager):
            pass

        registry = Registry()
        registry.register_key_manager(HmacKeyManager())

        with pytest.raises(KeyManagerExistsError):
            registry.register_key_manager(OtherHmacManager())

    def test_unknown_type(self, registry):
        with pytest.raises(UnknownKeyTypeError):
            registry.primitive(SerializedKeyMaterial(type_url="type.example/Unknown", value=b""))

    def test_public_keys_not_generated(self, registry):
        """Public key types refuse generation through the registry."""
        template = KeyTemplate(type_url=ECDSA_PUBLIC_KEY_TYPE)

        with pytest.raises(UnsupportedOperationError):
            registry.new_key_data(template)

    def test_primitive_class_mismatch(self, registry):
        material = registry.new_key_data(mac_templates.HMAC_SHA256_128BITTAG)

        with pytest.raises(PrimitiveTypeMismatchError):
            registry.primitive(material, PublicKeyVerify)
        assert isinstance(registry.primitive(material, Mac), Mac)

    def test_public_key_type(self, registry):
        assert registry.public_key_type(Ed25519PrivateKeyManager.KEY_TYPE) == ED25519_PUBLIC_KEY_TYPE
        with pytest.raises(UnsupportedOperationError):
            registry.public_key_type(ED25519_PUBLIC_KEY_TYPE)


class TestPrimitiveSetLoading:
    """Test building primitive sets from keysets."""

    def test_primary_marked(self, registry):
        keyset = Keyset(
            keys=[
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10),
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 11),
            ],
            primary_key_id=11,
        )

        pset = registry.primitive_set(keyset, Mac)

        assert pset.primary().key_id == 11
        assert [e.key_id for e in pset.all_entries()] == [10, 11]

    def test_destroyed_keys_left_out(self, registry):
        live = keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10)
        dead = keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 11)
        dead = KeysetKey(
            material=SerializedKeyMaterial(type_url=dead.type_url, value=b"", status=KeyStatus.DESTROYED),
            key_id=11,
            output_prefix_type=OutputPrefixType.TINK,
        )

        pset = registry.primitive_set(Keyset(keys=[live, dead], primary_key_id=10), Mac)

        assert [e.key_id for e in pset.all_entries()] == [10]

    def test_disabled_keys_kept_with_status(self, registry):
        keyset = Keyset(
            keys=[
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10),
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 11, KeyStatus.DISABLED),
            ],
            primary_key_id=10,
        )

        pset = registry.primitive_set(keyset, Mac)

        assert pset.all_entries()[1].status == KeyStatus.DISABLED

    @pytest.mark.parametrize("keyset", [
        Keyset(),
        Keyset(keys=(), primary_key_id=1),
    ])
    def test_empty_keyset_rejected(self, registry, keyset):
        with pytest.raises(InvalidKeysetError):
            registry.primitive_set(keyset, Mac)

    def test_missing_primary_rejected(self, registry):
        keyset = Keyset(
            keys=[keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10)],
            primary_key_id=99,
        )

        with pytest.raises(InvalidKeysetError):
            KeysetHandle(keyset, registry)

    def test_ambiguous_primary_rejected(self, registry):
        keyset = Keyset(
            keys=[
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10),
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10),
            ],
            primary_key_id=10,
        )

        with pytest.raises(InvalidKeysetError):
            registry.primitive_set(keyset, Mac)

    def test_disabled_primary_rejected(self, registry):
        keyset = Keyset(
            keys=[keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10, KeyStatus.DISABLED)],
            primary_key_id=10,
        )

        with pytest.raises(InvalidKeysetError):
            registry.primitive_set(keyset, Mac)

    def test_duplicate_ids_without_primary_conflict(self, registry):
        """Colliding key ids are allowed when the primary is unambiguous."""
        keyset = Keyset(
            keys=[
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10),
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 10),
                keyset_key(registry, mac_templates.HMAC_SHA256_128BITTAG, 12),
            ],
            primary_key_id=12,
        )

        pset = registry.primitive_set(keyset, Mac)

        assert len(pset.entries_for_prefix(pset.all_entries()[0].identifier)) == 2


class TestWrap:
    """Test wrapper lookup."""

    def test_wrap_none(self, registry):
        with pytest.raises(NullPrimitiveSetError):
            registry.wrap(None)

    def test_unknown_primitive(self):
        registry = Registry()

        with pytest.raises(UnknownPrimitiveError):
            registry.wrap(PrimitiveSetBuilder(Aead).build())

    def test_wrap_returns_contract(self, registry):
        assert isinstance(registry.wrap(PrimitiveSetBuilder(PublicKeySign).build()), PublicKeySign)
        assert isinstance(registry.wrap(PrimitiveSetBuilder(Aead).build()), Aead)


class TestKeysetHandle:
    """Test keyset handles."""

    def test_keyset_info_has_no_material(self, registry):
        handle = KeysetHandle.generate_new(mac_templates.HMAC_SHA256_128BITTAG, registry)

        info = handle.keyset_info()

        assert info["primary_key_id"] == handle.keyset.primary_key_id
        assert set(info["keys"][0]) == {"key_id", "type_url", "status", "output_prefix_type"}
        assert "key_value" not in repr(handle)

    def test_public_keyset_of_symmetric_keys_rejected(self, registry):
        handle = KeysetHandle.generate_new(mac_templates.HMAC_SHA256_128BITTAG, registry)

        with pytest.raises(InvalidKeysetError):
            handle.public_keyset_handle()

    def test_public_keyset(self, registry):
        handle = KeysetHandle.generate_new(signature_templates.ED25519, registry)

        public = handle.public_keyset_handle()

        key = public.keyset.keys[0]
        assert key.type_url == ED25519_PUBLIC_KEY_TYPE
        assert key.key_id == handle.keyset.primary_key_id
        assert public.keyset.primary_key_id == handle.keyset.primary_key_id

    def test_public_keyset_cannot_sign(self, registry):
        """Public key managers build verifiers, not signers."""
        public = KeysetHandle.generate_new(signature_templates.ED25519, registry).public_keyset_handle()

        with pytest.raises(PrimitiveTypeMismatchError):
            public.primitive(PublicKeySign)

    def test_public_keyset_of_stored_keys(self, registry):
        """Material without a key material type still exports its public keys."""
        generated = registry.new_key_data(signature_templates.ED25519)
        stored = SerializedKeyMaterial(
            type_url=generated.type_url,
            value=generated.value,
            status=KeyStatus.ENABLED,
        )
        handle = KeysetHandle(
            Keyset(
                keys=[KeysetKey(material=stored, key_id=1, output_prefix_type=OutputPrefixType.TINK)],
                primary_key_id=1,
            ),
            registry,
        )

        public = handle.public_keyset_handle()

        key = public.keyset.get(1)
        assert key.type_url == ED25519_PUBLIC_KEY_TYPE
        assert isinstance(public.primitive(PublicKeyVerify), PublicKeyVerify)

    def test_is_private_key_type(self, registry):
        assert registry.is_private_key_type(Ed25519PrivateKeyManager.KEY_TYPE) is True
        assert registry.is_private_key_type(ED25519_PUBLIC_KEY_TYPE) is False
        assert registry.is_private_key_type(mac_templates.HMAC_SHA256_128BITTAG.type_url) is False
