"""
Opaque key handles.

A KeyHandle pairs a registry identifier with raw key bytes. It performs no
cryptography itself; loading, deriving and signing are done by a KeyProvider.
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple, Union

from ..codec.hashes import account_id_from_raw
from ..runtime.encoding import BytesLike, to_bytes
from ..runtime.errors import KeyPrimitiveError
from .params import KeyParams, KeyParamsId, get_params, split_params_id


class KeyType(str, Enum):
    """Whether a handle holds public or private material."""

    PUBLIC = "public"
    PRIVATE = "private"


class KeyHandle:
    """
    Public or private key wrapper.

    Raw formats:
    - ECDSA public: uncompressed SEC1 point (0x04 || X || Y)
    - ECDSA private: big-endian scalar, key_size bytes
    - Ed25519 public/private: 32 bytes
    """

    def __init__(self, params_id: Union[KeyParamsId, str] = KeyParamsId.EMPTY,
                 raw: BytesLike = b"", key_type: KeyType = KeyType.PUBLIC):
        """
        Initialize a key handle.

        Args:
            params_id: Registry identifier, e.g. "ecdsa_secp384r1"
            raw: Raw key bytes
            key_type: KeyType.PUBLIC or KeyType.PRIVATE

        Raises:
            ImportTypeError: If params_id is not registered
        """
        self._params = get_params(params_id)
        self._raw = to_bytes(raw)
        self._key_type = KeyType(key_type)

    @classmethod
    def empty(cls) -> KeyHandle:
        """The sentinel handle meaning "no key set"."""
        return cls()

    @property
    def params(self) -> KeyParams:
        return self._params

    @property
    def params_id(self) -> KeyParamsId:
        return self._params.params_id

    @property
    def key_type(self) -> KeyType:
        return self._key_type

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def is_empty(self) -> bool:
        return self._params.is_empty

    @property
    def is_private(self) -> bool:
        return self._key_type is KeyType.PRIVATE

    def id_parts(self) -> Tuple[str, str]:
        """(algorithm, curve) parts of the identifier; curve may be ""."""
        return split_params_id(self.params_id.value)

    def account_id(self) -> str:
        """
        Account identifier owned by this public key.

        Raises:
            KeyPrimitiveError: If the handle is empty or private
        """
        if self.is_empty or self.is_private:
            raise KeyPrimitiveError("Account id requires a public key")
        return account_id_from_raw(self._raw)

    def to_hex(self) -> str:
        return self._raw.hex()

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyHandle):
            return False
        return (self.params_id is other.params_id
                and self._key_type is other._key_type
                and self._raw == other._raw)

    def __hash__(self) -> int:
        return hash((self.params_id, self._key_type, self._raw))

    def __repr__(self) -> str:
        if self.is_empty:
            return "KeyHandle.empty()"
        if self.is_private:
            return f"KeyHandle({self.params_id.value!r}, <private>)"
        return f"KeyHandle({self.params_id.value!r}, {self.to_hex()[:16]}...)"


__all__ = ["KeyType", "KeyHandle"]
