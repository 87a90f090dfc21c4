"""
Tests for the key parameter registry and key handles.
"""

import pytest

from trinci_client.crypto.keys import KeyHandle, KeyType
from trinci_client.crypto.params import (
    KEY_PARAMS,
    KeyParamsId,
    get_params,
    join_params_id,
    resolve_params,
    split_params_id,
)
from trinci_client.runtime.errors import ImportTypeError, KeyPrimitiveError


class TestRegistry:
    """Registry contents and lookups."""

    def test_registered_ids(self):
        assert set(KEY_PARAMS) == {"", "ecdsa_secp256r1", "ecdsa_secp384r1", "ed25519"}

    @pytest.mark.parametrize("params_id,key_size,hash_name,signature_size", [
        (KeyParamsId.ECDSA_P256, 32, "sha256", 64),
        (KeyParamsId.ECDSA_P384, 48, "sha384", 96),
        (KeyParamsId.ED25519, 32, None, 64),
    ])
    def test_descriptors(self, params_id, key_size, hash_name, signature_size):
        params = get_params(params_id)
        assert params.params_id is params_id
        assert params.key_size == key_size
        assert params.hash_name == hash_name
        assert params.signature_size == signature_size
        assert not params.is_empty

    def test_empty_sentinel(self):
        assert get_params("").is_empty

    def test_lookup_by_string_or_enum(self):
        assert get_params("ecdsa_secp384r1") is get_params(KeyParamsId.ECDSA_P384)

    def test_unknown_id(self):
        """Test that unregistered identifiers are rejected, not defaulted."""
        with pytest.raises(ImportTypeError, match="Unknown key parameters") as exc_info:
            get_params("ecdsa_secp256k1")
        assert exc_info.value.details == {"paramsId": "ecdsa_secp256k1"}


class TestIdParts:

    def test_split_on_first_separator(self):
        assert split_params_id("ecdsa_secp384r1") == ("ecdsa", "secp384r1")

    def test_split_without_separator(self):
        assert split_params_id("ed25519") == ("ed25519", "")
        assert split_params_id("") == ("", "")

    def test_join(self):
        assert join_params_id("ecdsa", "secp256r1") == "ecdsa_secp256r1"
        assert join_params_id("ed25519", "") == "ed25519"
        assert join_params_id("", "") == ""

    def test_resolve(self):
        assert resolve_params("ecdsa", "secp384r1").params_id is KeyParamsId.ECDSA_P384
        assert resolve_params("", "").is_empty

    def test_resolve_unknown_pair(self):
        with pytest.raises(ImportTypeError):
            resolve_params("rsa", "2048")

    def test_resolve_non_string_parts(self):
        with pytest.raises(ImportTypeError, match="must be strings"):
            resolve_params(b"ecdsa", "secp384r1")


class TestKeyHandle:

    def test_empty_handle(self):
        key = KeyHandle.empty()
        assert key.is_empty
        assert key.raw == b""
        assert key.params_id is KeyParamsId.EMPTY
        assert key.key_type is KeyType.PUBLIC

    def test_id_parts(self, p384_public_key):
        assert p384_public_key.id_parts() == ("ecdsa", "secp384r1")

    def test_unknown_params_rejected(self):
        with pytest.raises(ImportTypeError):
            KeyHandle("dsa", b"\x00")

    def test_equality(self):
        a = KeyHandle(KeyParamsId.ED25519, b"\x01" * 32)
        b = KeyHandle("ed25519", bytearray(b"\x01" * 32))
        c = KeyHandle(KeyParamsId.ED25519, b"\x01" * 32, KeyType.PRIVATE)
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_repr_hides_private_material(self, p384_private_key):
        assert "private" in repr(p384_private_key)
        assert p384_private_key.to_hex() not in repr(p384_private_key)

    def test_account_id(self, p384_public_key):
        account = p384_public_key.account_id()
        assert account.startswith("Qm")
        assert account == p384_public_key.account_id()

    def test_account_id_requires_public_key(self, p384_private_key):
        with pytest.raises(KeyPrimitiveError):
            p384_private_key.account_id()
        with pytest.raises(KeyPrimitiveError):
            KeyHandle.empty().account_id()
