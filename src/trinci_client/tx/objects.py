"""
Named object forms of a transaction.

Two projections of the canonical tuple, keyed by field name:

- ``*BufferObject`` (pydantic models): byte fields are immutable ``bytes``;
  used for validated construction from plain mappings.
- ``*Object`` (dataclasses): byte fields are owned ``bytearray`` copies, so
  mutating them never reaches the transaction they came from.

Neither form is a wire format; both map 1:1 onto the positional tuple.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import ATOMIC_TX_SCHEMA

# Positions inside the canonical data tuple
SCHEMA, ACCOUNT, MAX_FUEL, NONCE, NETWORK, CONTRACT, METHOD, CALLER, ARGS = range(9)
TX_DATA_ARITY = 9
CALLER_ARITY = 3


def _coerce_bytes(v: Any) -> Any:
    if isinstance(v, (bytearray, memoryview)):
        return bytes(v)
    if isinstance(v, str):
        raise ValueError("byte fields do not accept text, decode hex or base58 first")
    return v


class CallerKeyBufferObject(BaseModel):
    """Signer public key: algorithm part, curve part and raw bytes."""

    type: str
    curve: str
    value: bytes

    @field_validator("value", mode="before")
    @classmethod
    def validate_value(cls, v: Any) -> Any:
        return _coerce_bytes(v)


class TxDataBufferObject(BaseModel):
    """
    Transaction data with raw byte buffers.

    Accepts either the camelCase wire names (``maxFuel``) or the Python
    attribute names (``max_fuel``). ``schema`` is exposed as ``tx_schema``
    on the model to stay clear of pydantic's own attributes.
    """

    tx_schema: str = Field(alias="schema")
    account: str
    max_fuel: int = Field(alias="maxFuel", ge=0, strict=True)
    nonce: bytes
    network: str
    contract: Optional[bytes] = None
    method: str
    caller: CallerKeyBufferObject
    args: bytes

    model_config = {"populate_by_name": True}

    @field_validator("nonce", "contract", "args", mode="before")
    @classmethod
    def validate_bytes(cls, v: Any) -> Any:
        return _coerce_bytes(v)

    def to_unnamed(self) -> List[Any]:
        """Positional tuple for this object."""
        return [
            self.tx_schema,
            self.account,
            self.max_fuel,
            self.nonce,
            self.network,
            self.contract if self.contract else None,
            self.method,
            [self.caller.type, self.caller.curve, self.caller.value],
            self.args,
        ]

    @classmethod
    def from_unnamed(cls, unnamed: List[Any]) -> TxDataBufferObject:
        """Name the positions of an already validated tuple."""
        caller = unnamed[CALLER]
        return cls(
            tx_schema=unnamed[SCHEMA],
            account=unnamed[ACCOUNT],
            max_fuel=unnamed[MAX_FUEL],
            nonce=unnamed[NONCE],
            network=unnamed[NETWORK],
            contract=unnamed[CONTRACT],
            method=unnamed[METHOD],
            caller=CallerKeyBufferObject(type=caller[0], curve=caller[1], value=caller[2]),
            args=unnamed[ARGS],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary keyed by wire names."""
        return self.model_dump(by_alias=True)


@dataclass
class CallerKeyObject:
    """Signer public key with a typed byte array value."""

    type: str = ""
    curve: str = ""
    value: bytearray = field(default_factory=bytearray)


@dataclass
class TxDataObject:
    """Transaction data with typed (owned, mutable) byte arrays."""

    schema: str = ATOMIC_TX_SCHEMA
    account: str = ""
    max_fuel: int = 0
    nonce: bytearray = field(default_factory=bytearray)
    network: str = ""
    contract: Optional[bytearray] = None
    method: str = ""
    caller: CallerKeyObject = field(default_factory=CallerKeyObject)
    args: bytearray = field(default_factory=bytearray)

    @classmethod
    def from_buffer_object(cls, obj: TxDataBufferObject) -> TxDataObject:
        """Copy every byte buffer into a fresh bytearray."""
        return cls(
            schema=obj.tx_schema,
            account=obj.account,
            max_fuel=obj.max_fuel,
            nonce=bytearray(obj.nonce),
            network=obj.network,
            contract=bytearray(obj.contract) if obj.contract else None,
            method=obj.method,
            caller=CallerKeyObject(
                type=obj.caller.type,
                curve=obj.caller.curve,
                value=bytearray(obj.caller.value),
            ),
            args=bytearray(obj.args),
        )

    def to_buffer_object(self) -> TxDataBufferObject:
        return TxDataBufferObject(
            tx_schema=self.schema,
            account=self.account,
            max_fuel=self.max_fuel,
            nonce=self.nonce,
            network=self.network,
            contract=self.contract if self.contract else None,
            method=self.method,
            caller=CallerKeyBufferObject(
                type=self.caller.type,
                curve=self.caller.curve,
                value=self.caller.value,
            ),
            args=self.args,
        )


class TransactionBufferObject(BaseModel):
    """Signed transaction with raw byte buffers."""

    data: TxDataBufferObject
    signature: Optional[bytes] = None

    @field_validator("signature", mode="before")
    @classmethod
    def validate_signature(cls, v: Any) -> Any:
        return _coerce_bytes(v)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


@dataclass
class TransactionObject:
    """Signed transaction with typed byte arrays."""

    data: TxDataObject = field(default_factory=TxDataObject)
    signature: Optional[bytearray] = None

    @classmethod
    def from_buffer_object(cls, obj: TransactionBufferObject) -> TransactionObject:
        return cls(
            data=TxDataObject.from_buffer_object(obj.data),
            signature=bytearray(obj.signature) if obj.signature else None,
        )

    def to_buffer_object(self) -> TransactionBufferObject:
        return TransactionBufferObject(
            data=self.data.to_buffer_object(),
            signature=self.signature if self.signature else None,
        )


__all__ = [
    "TX_DATA_ARITY",
    "CALLER_ARITY",
    "CallerKeyBufferObject",
    "TxDataBufferObject",
    "CallerKeyObject",
    "TxDataObject",
    "TransactionBufferObject",
    "TransactionObject",
]
