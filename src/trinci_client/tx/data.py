"""
Transaction data for the atomic schema.

TxData owns the fields of a transaction, enforces their local invariants and
converts between every representation of them:

- typed accessors (the properties of this class)
- the unnamed tuple, ``[schema, account, maxFuel, nonce, network, contract,
  method, [algorithm, curve, rawKey], args]``; position order is the wire
  contract
- TxDataBufferObject (bytes fields) and TxDataObject (bytearray fields)
- MessagePack bytes and their base58 text

Imports are staged: an incoming tuple is fully validated, including signer
key resolution, before any field of the record changes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..codec import msgpack_codec
from ..codec.hashes import sha256_multihash
from ..config import TxConfig
from ..crypto.keys import KeyHandle
from ..crypto.params import resolve_params, split_params_id
from ..crypto.provider import KeyProvider, get_default_provider
from ..runtime import encoding
from ..runtime.encoding import BytesLike
from ..runtime.errors import (
    FixedLengthError,
    ImportTypeError,
    TrinciError,
    ValidationError,
)
from .objects import (
    CALLER_ARITY,
    TX_DATA_ARITY,
    TxDataBufferObject,
    TxDataObject,
)

logger = logging.getLogger(__name__)

NONCE_LENGTH = 8

_BYTES_TYPES = (bytes, bytearray, memoryview)


@dataclass(frozen=True)
class _StagedTxData:
    """Fully validated field values awaiting commit."""

    schema: str
    account: str
    max_fuel: int
    nonce: bytes
    network: str
    contract: Optional[bytes]
    method: str
    signer_key: KeyHandle
    args: bytes


def _check_max_fuel(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _check_nonce(nonce: bytes) -> bytes:
    if len(nonce) != NONCE_LENGTH:
        raise FixedLengthError(
            f"Nonce must be exactly {NONCE_LENGTH} bytes, got {len(nonce)}",
            details={"expected": NONCE_LENGTH, "actual": len(nonce)},
        )
    return nonce


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
    return value


class TxData:
    """
    Field set of one transaction.

    Each instance is an independent value; it shares no mutable state with
    other instances. Key material is handled through a KeyProvider, which
    defaults to the process-wide provider.
    """

    def __init__(self, schema: Optional[str] = None,
                 key_provider: Optional[KeyProvider] = None,
                 config: Optional[TxConfig] = None):
        """
        Initialize empty transaction data.

        Args:
            schema: Schema tag; defaults to the configured (atomic) schema
            key_provider: KeyProvider to use instead of the default one
            config: Defaults for network and max fuel
        """
        config = config or TxConfig()
        self._key_provider = key_provider
        self._schema = _require_str(schema if schema is not None else config.schema, "schema")
        self._account = ""
        self._max_fuel = config.max_fuel
        self._nonce = bytes(NONCE_LENGTH)
        self._network = _require_str(config.network, "network_name")
        self._contract: Optional[bytes] = None
        self._method = ""
        self._args = b""
        self._signer_pub_key = KeyHandle.empty()

    @classmethod
    def default_schema(cls) -> str:
        return TxConfig().schema

    @property
    def key_provider(self) -> KeyProvider:
        if self._key_provider is None:
            return get_default_provider()
        return self._key_provider

    @property
    def schema(self) -> str:
        """Schema tag selecting the field layout."""
        return self._schema

    @property
    def account_id(self) -> str:
        """Account ID of the target (receiving account) of the transaction."""
        return self._account

    @account_id.setter
    def account_id(self, account_id: str) -> None:
        self._account = _require_str(account_id, "account_id")

    @property
    def max_fuel(self) -> int:
        """Maximum amount of fuel the sender is ready to burn for this transaction."""
        return self._max_fuel

    @max_fuel.setter
    def max_fuel(self, max_fuel: int) -> None:
        if not _check_max_fuel(max_fuel):
            raise ValidationError(f"max_fuel must be a non-negative integer, got {max_fuel!r}")
        self._max_fuel = max_fuel

    @property
    def nonce(self) -> bytes:
        """Random 8-byte value used as anti-replay protection."""
        return self._nonce

    @nonce.setter
    def nonce(self, nonce: BytesLike) -> None:
        self._nonce = _check_nonce(encoding.to_bytes(nonce))

    @property
    def nonce_hex(self) -> str:
        """Nonce as hex string."""
        return self._nonce.hex()

    @nonce_hex.setter
    def nonce_hex(self, nonce: str) -> None:
        self._nonce = _check_nonce(encoding.from_hex(nonce))

    def gen_nonce(self) -> None:
        """Generate and set a new random nonce."""
        self._nonce = _check_nonce(encoding.to_bytes(self.key_provider.random_bytes(NONCE_LENGTH)))

    @property
    def network_name(self) -> str:
        """Name of the network to which the transaction is addressed."""
        return self._network

    @network_name.setter
    def network_name(self, network_name: str) -> None:
        self._network = _require_str(network_name, "network_name")

    @property
    def smart_contract_hash(self) -> bytes:
        """
        Hash of the smart contract invoked on the target account.

        Reads b"" when no hash is set; writing b"" clears it.
        """
        return self._contract if self._contract is not None else b""

    @smart_contract_hash.setter
    def smart_contract_hash(self, contract_hash: BytesLike) -> None:
        self._contract = encoding.to_bytes(contract_hash) or None

    @property
    def smart_contract_hash_hex(self) -> str:
        """Smart contract hash as hex string ("" when unset)."""
        return self.smart_contract_hash.hex()

    @smart_contract_hash_hex.setter
    def smart_contract_hash_hex(self, contract_hash: str) -> None:
        self._contract = encoding.from_hex(contract_hash) or None

    def set_smart_contract_hash(self, contract_hash: Union[BytesLike, str]) -> None:
        """Set the smart contract hash from bytes or hex text."""
        if isinstance(contract_hash, str):
            self.smart_contract_hash_hex = contract_hash
        else:
            self.smart_contract_hash = contract_hash

    @property
    def smart_contract_method(self) -> str:
        """Method to call on the invoked smart contract."""
        return self._method

    @smart_contract_method.setter
    def smart_contract_method(self, method: str) -> None:
        self._method = _require_str(method, "smart_contract_method")

    @property
    def smart_contract_method_args(self) -> Any:
        """
        Method arguments as a structured value.

        Written values are MessagePack encoded; None is returned when no
        arguments are set.
        """
        if not self._args:
            return None
        return msgpack_codec.decode(self._args)

    @smart_contract_method_args.setter
    def smart_contract_method_args(self, args: Any) -> None:
        self._args = msgpack_codec.encode(args)

    @property
    def smart_contract_method_args_bytes(self) -> bytes:
        """Method arguments as raw bytes."""
        return self._args

    @smart_contract_method_args_bytes.setter
    def smart_contract_method_args_bytes(self, args: BytesLike) -> None:
        self._args = encoding.to_bytes(args)

    @property
    def smart_contract_method_args_hex(self) -> str:
        """Method arguments as hex string."""
        return self._args.hex()

    @smart_contract_method_args_hex.setter
    def smart_contract_method_args_hex(self, args: str) -> None:
        self._args = encoding.from_hex(args)

    @property
    def signer_public_key(self) -> KeyHandle:
        """Public key of the signer; empty until set or signed."""
        return self._signer_pub_key

    @signer_public_key.setter
    def signer_public_key(self, public_key: KeyHandle) -> None:
        if not isinstance(public_key, KeyHandle):
            raise ValidationError(f"signer_public_key must be a KeyHandle, got {type(public_key).__name__}")
        if public_key.is_private:
            raise ValidationError("signer_public_key must not hold private key material")
        self._signer_pub_key = public_key

    def to_unnamed(self) -> List[Any]:
        """
        Build the positional tuple.

        The signer key slot is ``["", "", b""]`` while no key is set;
        otherwise its raw bytes are obtained from the KeyProvider and its
        identifier is split into algorithm and curve parts.
        """
        caller: List[Any] = ["", "", b""]
        if not self._signer_pub_key.is_empty:
            raw_key = self.key_provider.export_raw(self._signer_pub_key)
            algorithm, curve = split_params_id(self._signer_pub_key.params_id.value)
            caller = [algorithm, curve, bytes(raw_key)]
        return [
            self._schema,
            self._account,
            self._max_fuel,
            self._nonce,
            self._network,
            self._contract,
            self._method,
            caller,
            self._args,
        ]

    def to_buffer_object(self) -> TxDataBufferObject:
        return TxDataBufferObject.from_unnamed(self.to_unnamed())

    def to_typed_object(self) -> TxDataObject:
        return TxDataObject.from_buffer_object(self.to_buffer_object())

    to_object = to_typed_object

    def to_bytes(self) -> bytes:
        """Canonical bytes of the transaction data; this is what gets signed."""
        return msgpack_codec.encode(self.to_unnamed())

    def to_base58(self) -> str:
        return encoding.to_base58(self.to_bytes())

    def get_hash(self) -> bytes:
        """SHA-256 multihash of the canonical bytes."""
        return sha256_multihash(self.to_bytes())

    def get_hash_hex(self) -> str:
        return self.get_hash().hex()

    def from_unnamed(self, unnamed: Any) -> bool:
        """
        Import fields from a positional tuple.

        Returns:
            True once every field has been replaced

        Raises:
            ImportTypeError: Wrong arity, element types or unknown key identifier
            FixedLengthError: Nonce is not 8 bytes
            KeyPrimitiveError: The KeyProvider rejected the raw signer key
        """
        self._commit(self._stage(unnamed))
        logger.debug(f"Imported transaction data for account {self._account!r}")
        return True

    def from_buffer_object(self, obj: Union[TxDataBufferObject, Mapping[str, Any]]) -> bool:
        return self.from_unnamed(self._coerce_buffer_object(obj).to_unnamed())

    def from_typed_object(self, obj: Union[TxDataObject, Mapping[str, Any]]) -> bool:
        if isinstance(obj, TxDataObject):
            try:
                obj = obj.to_buffer_object()
            except PydanticValidationError as e:
                raise ImportTypeError(f"Malformed transaction data object: {e}", cause=e)
        return self.from_buffer_object(obj)

    from_object = from_typed_object

    def from_bytes(self, data: BytesLike) -> bool:
        return self.from_unnamed(msgpack_codec.decode(data))

    def from_base58(self, text: str) -> bool:
        return self.from_bytes(encoding.from_base58(text))

    @staticmethod
    def _coerce_buffer_object(obj: Any) -> TxDataBufferObject:
        if isinstance(obj, TxDataBufferObject):
            return obj
        if not isinstance(obj, Mapping):
            raise ImportTypeError(f"Expected a transaction data object, got {type(obj).__name__}")
        try:
            return TxDataBufferObject.model_validate(obj)
        except PydanticValidationError as e:
            raise ImportTypeError(f"Malformed transaction data object: {e}", cause=e)

    def _stage(self, unnamed: Any) -> _StagedTxData:
        try:
            return self._validate_unnamed(unnamed)
        except TrinciError as e:
            logger.warning(f"Rejected transaction data import: {e.message}")
            raise

    def _validate_unnamed(self, unnamed: Any) -> _StagedTxData:
        if not isinstance(unnamed, (list, tuple)) or len(unnamed) != TX_DATA_ARITY:
            raise ImportTypeError(f"Transaction data must be a {TX_DATA_ARITY}-element array")
        schema, account, max_fuel, nonce, network, contract, method, caller, args = unnamed

        for name, value in (("schema", schema), ("account", account),
                            ("network", network), ("method", method)):
            if not isinstance(value, str):
                raise ImportTypeError(f"Field {name} must be a string, got {type(value).__name__}")
        if not _check_max_fuel(max_fuel):
            raise ImportTypeError(f"Field maxFuel must be a non-negative integer, got {max_fuel!r}")
        if not isinstance(nonce, _BYTES_TYPES):
            raise ImportTypeError(f"Field nonce must be bytes, got {type(nonce).__name__}")
        if contract is not None and not isinstance(contract, _BYTES_TYPES):
            raise ImportTypeError(f"Field contract must be bytes or null, got {type(contract).__name__}")
        if not isinstance(args, _BYTES_TYPES):
            raise ImportTypeError(f"Field args must be bytes, got {type(args).__name__}")
        if not isinstance(caller, (list, tuple)) or len(caller) != CALLER_ARITY:
            raise ImportTypeError(f"Field caller must be a {CALLER_ARITY}-element array")
        algorithm, curve, raw_key = caller
        if not isinstance(raw_key, _BYTES_TYPES):
            raise ImportTypeError(f"Caller key value must be bytes, got {type(raw_key).__name__}")

        params = resolve_params(algorithm, curve)
        if params.is_empty:
            signer_key = KeyHandle.empty()
        else:
            signer_key = self.key_provider.import_raw(params.params_id, bytes(raw_key))

        return _StagedTxData(
            schema=schema,
            account=account,
            max_fuel=max_fuel,
            nonce=_check_nonce(bytes(nonce)),
            network=network,
            contract=bytes(contract) if contract else None,
            method=method,
            signer_key=signer_key,
            args=bytes(args),
        )

    def _commit(self, staged: _StagedTxData) -> None:
        self._schema = staged.schema
        self._account = staged.account
        self._max_fuel = staged.max_fuel
        self._nonce = staged.nonce
        self._network = staged.network
        self._contract = staged.contract
        self._method = staged.method
        self._signer_pub_key = staged.signer_key
        self._args = staged.args

    def __repr__(self) -> str:
        return (f"TxData(schema={self._schema!r}, account={self._account!r}, "
                f"max_fuel={self._max_fuel}, network={self._network!r}, "
                f"method={self._method!r})")


__all__ = ["NONCE_LENGTH", "TxData"]
