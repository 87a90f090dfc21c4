"""
Transaction records for TRINCI networks.

Provides the transaction data field set with its representations, the named
object forms, and the signed Transaction wrapper.
"""

from .data import NONCE_LENGTH, TxData
from .objects import (
    CallerKeyBufferObject,
    TxDataBufferObject,
    CallerKeyObject,
    TxDataObject,
    TransactionBufferObject,
    TransactionObject,
)
from .transaction import Transaction

__all__ = [
    "NONCE_LENGTH",
    "TxData",
    "CallerKeyBufferObject",
    "TxDataBufferObject",
    "CallerKeyObject",
    "TxDataObject",
    "TransactionBufferObject",
    "TransactionObject",
    "Transaction",
]
