"""
TRINCI Python client

Canonical encoding, hashing and signing of TRINCI transactions.
"""

# Errors and encodings
from .runtime.errors import *
from .runtime.encoding import to_hex, from_hex, to_base58, from_base58

# Configuration
from .config import ATOMIC_TX_SCHEMA, TxConfig

# Keys and providers
from .crypto import *

# Transactions
from .tx import *

__version__ = "0.3.0"
__all__ = [
    # Errors
    "ErrorCode",
    "TrinciError",
    "ValidationError",
    "FixedLengthError",
    "ImportTypeError",
    "MissingSignatureError",
    "KeyPrimitiveError",
    "SigningError",
    "EncodingError",
    "MarshalError",
    "UnmarshalError",
    # Encodings
    "to_hex",
    "from_hex",
    "to_base58",
    "from_base58",
    # Configuration
    "ATOMIC_TX_SCHEMA",
    "TxConfig",
    # Keys
    "KeyParamsId",
    "KeyParams",
    "KEY_PARAMS",
    "get_params",
    "resolve_params",
    "KeyType",
    "KeyHandle",
    "KeyProvider",
    "CryptographyKeyProvider",
    "get_default_provider",
    "set_default_provider",
    # Transactions
    "NONCE_LENGTH",
    "TxData",
    "TxDataBufferObject",
    "TxDataObject",
    "TransactionBufferObject",
    "TransactionObject",
    "Transaction",
]
