"""
Signed transactions.

Transaction wraps a TxData with its signature and implements the signing
protocol over the canonical data bytes:

    sign(private_key):
        1. derive the public key and store it as the signer key
        2. encode the data (the new signer key is part of the payload)
        3. sign those bytes and store the signature

    verify():
        re-encode the data with the current field values and check the
        stored signature against the stored signer key

Changing a field after signing does not clear the signature; the record
must be signed again or verify() will return False.

The transport form is the envelope ``[data_tuple, signature]``, with an
absent signature carried as zero-length bytes.
"""

from __future__ import annotations
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..codec import msgpack_codec
from ..config import TxConfig
from ..crypto.keys import KeyHandle
from ..crypto.provider import KeyProvider
from ..runtime import encoding
from ..runtime.encoding import BytesLike
from ..runtime.errors import (
    ImportTypeError,
    KeyPrimitiveError,
    MissingSignatureError,
)
from .data import TxData
from .objects import TransactionBufferObject, TransactionObject

logger = logging.getLogger(__name__)

ENVELOPE_ARITY = 2


def _forward(name: str) -> property:
    """Expose a TxData property on Transaction."""
    def fget(self):
        return getattr(self._data, name)

    def fset(self, value):
        setattr(self._data, name, value)

    return property(fget, fset, doc=getattr(TxData, name).__doc__)


class Transaction:
    """
    A transaction record: field accessors, signature and transport forms.
    """

    account_id = _forward("account_id")
    max_fuel = _forward("max_fuel")
    nonce = _forward("nonce")
    nonce_hex = _forward("nonce_hex")
    network_name = _forward("network_name")
    smart_contract_hash = _forward("smart_contract_hash")
    smart_contract_hash_hex = _forward("smart_contract_hash_hex")
    smart_contract_method = _forward("smart_contract_method")
    smart_contract_method_args = _forward("smart_contract_method_args")
    smart_contract_method_args_bytes = _forward("smart_contract_method_args_bytes")
    smart_contract_method_args_hex = _forward("smart_contract_method_args_hex")
    signer_public_key = _forward("signer_public_key")

    def __init__(self, data: Optional[TxData] = None,
                 key_provider: Optional[KeyProvider] = None,
                 config: Optional[TxConfig] = None):
        """
        Initialize an unsigned transaction.

        Args:
            data: Existing transaction data to wrap; a new TxData otherwise
            key_provider: KeyProvider for a newly created TxData
            config: Defaults for a newly created TxData
        """
        if data is None:
            data = TxData(key_provider=key_provider, config=config)
        self._data = data
        self._signature: Optional[bytes] = None

    @classmethod
    def new(cls, config: Optional[TxConfig] = None,
            key_provider: Optional[KeyProvider] = None) -> Transaction:
        """Create a transaction seeded from a configuration (environment by default)."""
        return cls(key_provider=key_provider, config=config or TxConfig.from_env())

    @property
    def data(self) -> TxData:
        return self._data

    @property
    def key_provider(self) -> KeyProvider:
        return self._data.key_provider

    @property
    def schema(self) -> str:
        return self._data.schema

    def gen_nonce(self) -> None:
        self._data.gen_nonce()

    def set_smart_contract_hash(self, contract_hash: Union[BytesLike, str]) -> None:
        self._data.set_smart_contract_hash(contract_hash)

    @property
    def signature(self) -> Optional[bytes]:
        """Signature over the canonical data bytes, None until signed."""
        return self._signature

    @signature.setter
    def signature(self, signature: Optional[BytesLike]) -> None:
        if signature is None:
            self._signature = None
        else:
            self._signature = encoding.to_bytes(signature) or None

    @property
    def is_signed(self) -> bool:
        return self._signature is not None

    def sign(self, private_key: KeyHandle) -> bytes:
        """
        Sign the transaction.

        Args:
            private_key: Private key handle

        Returns:
            Signature bytes

        Raises:
            SigningError: If the key cannot be loaded or the primitive fails
        """
        provider = self.key_provider
        self._data.signer_public_key = provider.derive_public(private_key)
        payload = self._data.to_bytes()
        signature = provider.sign(private_key, payload)
        self._signature = signature
        logger.debug(f"Signed transaction for account {self._data.account_id!r} "
                     f"with {private_key.params_id.value} key")
        return signature

    def verify(self) -> bool:
        """
        Check the stored signature against the current field values.

        Returns:
            True if the signature is valid for the canonical data bytes

        Raises:
            MissingSignatureError: If the transaction is not signed
            KeyPrimitiveError: If the signer key is unset or malformed
        """
        if self._signature is None:
            raise MissingSignatureError("Transaction has no signature to verify")
        signer_key = self._data.signer_public_key
        if signer_key.is_empty:
            raise KeyPrimitiveError("Transaction has no signer public key")
        payload = self._data.to_bytes()
        valid = self.key_provider.verify(signer_key, payload, self._signature)
        if not valid:
            logger.debug(f"Signature mismatch for account {self._data.account_id!r}")
        return bool(valid)

    def get_hash(self) -> bytes:
        """Transaction hash: SHA-256 multihash of the canonical data bytes."""
        return self._data.get_hash()

    def get_hash_hex(self) -> str:
        return self._data.get_hash_hex()

    def to_unnamed(self) -> List[Any]:
        return [self._data.to_unnamed(), self._signature or b""]

    def to_buffer_object(self) -> TransactionBufferObject:
        return TransactionBufferObject(
            data=self._data.to_buffer_object(),
            signature=self._signature,
        )

    def to_typed_object(self) -> TransactionObject:
        return TransactionObject.from_buffer_object(self.to_buffer_object())

    to_object = to_typed_object

    def to_bytes(self) -> bytes:
        """Signed envelope bytes for transport."""
        return msgpack_codec.encode(self.to_unnamed())

    def to_base58(self) -> str:
        return encoding.to_base58(self.to_bytes())

    def from_unnamed(self, unnamed: Any) -> bool:
        """
        Import a signed envelope.

        The signature is checked first; the data tuple is then imported with
        TxData.from_unnamed, which commits nothing unless it fully validates.
        """
        if not isinstance(unnamed, (list, tuple)) or len(unnamed) != ENVELOPE_ARITY:
            raise ImportTypeError(f"Transaction must be a {ENVELOPE_ARITY}-element array")
        data_tuple, signature = unnamed
        if not isinstance(signature, (bytes, bytearray, memoryview)):
            raise ImportTypeError(f"Signature must be bytes, got {type(signature).__name__}")
        signature = bytes(signature) or None
        self._data.from_unnamed(data_tuple)
        self._signature = signature
        logger.debug(f"Imported transaction for account {self._data.account_id!r}, "
                     f"signed={self._signature is not None}")
        return True

    def from_buffer_object(self, obj: Union[TransactionBufferObject, Mapping[str, Any]]) -> bool:
        obj = self._coerce_buffer_object(obj)
        return self.from_unnamed([obj.data.to_unnamed(), obj.signature or b""])

    def from_typed_object(self, obj: Union[TransactionObject, Mapping[str, Any]]) -> bool:
        if isinstance(obj, TransactionObject):
            try:
                obj = obj.to_buffer_object()
            except PydanticValidationError as e:
                raise ImportTypeError(f"Malformed transaction object: {e}", cause=e)
        return self.from_buffer_object(obj)

    from_object = from_typed_object

    def from_bytes(self, data: BytesLike) -> bool:
        return self.from_unnamed(msgpack_codec.decode(data))

    def from_base58(self, text: str) -> bool:
        return self.from_bytes(encoding.from_base58(text))

    @staticmethod
    def _coerce_buffer_object(obj: Any) -> TransactionBufferObject:
        if isinstance(obj, TransactionBufferObject):
            return obj
        if not isinstance(obj, Mapping):
            raise ImportTypeError(f"Expected a transaction object, got {type(obj).__name__}")
        try:
            return TransactionBufferObject.model_validate(obj)
        except PydanticValidationError as e:
            raise ImportTypeError(f"Malformed transaction object: {e}", cause=e)

    def __repr__(self) -> str:
        state = "signed" if self.is_signed else "unsigned"
        return f"Transaction({self._data!r}, {state})"


__all__ = ["ENVELOPE_ARITY", "Transaction"]
