"""
Shared fixtures for the TRINCI client tests.

Keys are deterministic so that encoded bytes are stable across runs; the
recording provider lets tests observe which primitives a transaction calls.
"""

import pytest

from trinci_client.crypto import (
    CryptographyKeyProvider,
    KeyHandle,
    KeyParamsId,
    KeyProvider,
    KeyType,
)
from trinci_client.tx import Transaction, TxData

# Arbitrary scalars below every curve order
P384_SCALAR = bytes(range(1, 49))
P256_SCALAR = bytes(range(101, 133))
ED25519_SEED = b"trinci_test_seed_for_ed25519_key"[:32]

SAMPLE_ACCOUNT = "QmeJbDt8YyFH3UU6HP6U9dNgCk2ShkxLNx2bmbAJqdCzpg"


class RecordingKeyProvider(KeyProvider):
    """KeyProvider that delegates to the cryptography provider and records calls."""

    def __init__(self):
        self._inner = CryptographyKeyProvider()
        self.calls = []

    def generate(self, params_id):
        self.calls.append("generate")
        return self._inner.generate(params_id)

    def derive_public(self, private_key):
        self.calls.append("derive_public")
        return self._inner.derive_public(private_key)

    def export_raw(self, key):
        self.calls.append("export_raw")
        return self._inner.export_raw(key)

    def import_raw(self, params_id, raw, key_type=KeyType.PUBLIC):
        self.calls.append("import_raw")
        return self._inner.import_raw(params_id, raw, key_type)

    def sign(self, private_key, data):
        self.calls.append("sign")
        return self._inner.sign(private_key, data)

    def verify(self, public_key, data, signature):
        self.calls.append("verify")
        return self._inner.verify(public_key, data, signature)

    def random_bytes(self, n):
        self.calls.append("random_bytes")
        return bytes([0xAB]) * n


@pytest.fixture
def provider():
    """Real cryptography-backed provider."""
    return CryptographyKeyProvider()


@pytest.fixture
def recording_provider():
    return RecordingKeyProvider()


@pytest.fixture
def p384_private_key():
    """Deterministic ECDSA P-384 private key."""
    return KeyHandle(KeyParamsId.ECDSA_P384, P384_SCALAR, KeyType.PRIVATE)


@pytest.fixture
def p256_private_key():
    """Deterministic ECDSA P-256 private key."""
    return KeyHandle(KeyParamsId.ECDSA_P256, P256_SCALAR, KeyType.PRIVATE)


@pytest.fixture
def ed25519_private_key():
    """Deterministic Ed25519 private key."""
    return KeyHandle(KeyParamsId.ED25519, ED25519_SEED, KeyType.PRIVATE)


@pytest.fixture
def p384_public_key(provider, p384_private_key):
    return provider.derive_public(p384_private_key)


@pytest.fixture
def transfer_args():
    return {"from": "A", "to": "B", "amount": 10}


@pytest.fixture
def transfer_data(transfer_args):
    """Populated, unsigned transaction data for a token transfer."""
    data = TxData()
    data.account_id = SAMPLE_ACCOUNT
    data.max_fuel = 10
    data.network_name = "skynet"
    data.smart_contract_method = "transfer"
    data.smart_contract_method_args = transfer_args
    return data


@pytest.fixture
def transfer_tx(transfer_args):
    """Populated, unsigned transaction for a token transfer."""
    tx = Transaction()
    tx.account_id = SAMPLE_ACCOUNT
    tx.max_fuel = 10
    tx.network_name = "skynet"
    tx.smart_contract_method = "transfer"
    tx.smart_contract_method_args = transfer_args
    return tx
