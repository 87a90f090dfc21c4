"""
Key handling for TRINCI transactions.

Provides the key parameter registry, opaque key handles and the KeyProvider
capability with its ``cryptography`` implementation.
"""

from .params import KeyParamsId, KeyParams, KEY_PARAMS, get_params, resolve_params
from .keys import KeyType, KeyHandle
from .provider import (
    KeyProvider,
    CryptographyKeyProvider,
    get_default_provider,
    set_default_provider,
)

__all__ = [
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
]
