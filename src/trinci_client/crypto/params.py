"""
Key parameter registry.

Every key used by a transaction is identified by an ``algorithm[_curve]``
string. The identifier must resolve against KEY_PARAMS; anything else is
rejected at import time rather than silently defaulted.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..runtime.errors import ImportTypeError

PARAMS_SEPARATOR = "_"


class KeyParamsId(str, Enum):
    """Known key parameter identifiers."""

    EMPTY = ""
    ECDSA_P256 = "ecdsa_secp256r1"
    ECDSA_P384 = "ecdsa_secp384r1"
    ED25519 = "ed25519"


@dataclass(frozen=True)
class KeyParams:
    """Descriptor for one key parameter set."""

    params_id: KeyParamsId
    algorithm: str
    curve: str
    key_size: int
    hash_name: Optional[str]
    signature_size: int

    @property
    def is_empty(self) -> bool:
        return self.params_id is KeyParamsId.EMPTY


KEY_PARAMS: Dict[str, KeyParams] = {
    KeyParamsId.EMPTY.value: KeyParams(KeyParamsId.EMPTY, "", "", 0, None, 0),
    KeyParamsId.ECDSA_P256.value: KeyParams(KeyParamsId.ECDSA_P256, "ecdsa", "secp256r1", 32, "sha256", 64),
    KeyParamsId.ECDSA_P384.value: KeyParams(KeyParamsId.ECDSA_P384, "ecdsa", "secp384r1", 48, "sha384", 96),
    KeyParamsId.ED25519.value: KeyParams(KeyParamsId.ED25519, "ed25519", "", 32, None, 64),
}


def join_params_id(algorithm: str, curve: str) -> str:
    """Build an identifier from its parts; an empty curve is omitted."""
    if curve:
        return f"{algorithm}{PARAMS_SEPARATOR}{curve}"
    return algorithm


def split_params_id(params_id: str) -> Tuple[str, str]:
    """
    Split an identifier on its first separator.

    Returns:
        (algorithm, curve), with curve "" when there is no separator
    """
    algorithm, _, curve = params_id.partition(PARAMS_SEPARATOR)
    return algorithm, curve


def get_params(params_id) -> KeyParams:
    """
    Look up a registry entry by identifier.

    Raises:
        ImportTypeError: If the identifier is not registered
    """
    key = params_id.value if isinstance(params_id, KeyParamsId) else params_id
    if not isinstance(key, str) or key not in KEY_PARAMS:
        raise ImportTypeError(f"Unknown key parameters: {params_id!r}",
                              details={"paramsId": str(key)})
    return KEY_PARAMS[key]


def resolve_params(algorithm: str, curve: str) -> KeyParams:
    """Resolve an (algorithm, curve) pair against the registry."""
    if not isinstance(algorithm, str) or not isinstance(curve, str):
        raise ImportTypeError("Key algorithm and curve must be strings")
    return get_params(join_params_id(algorithm, curve))


__all__ = [
    "PARAMS_SEPARATOR",
    "KeyParamsId",
    "KeyParams",
    "KEY_PARAMS",
    "join_params_id",
    "split_params_id",
    "get_params",
    "resolve_params",
]
