"""
Textual encodings for byte values.

Hex and base58 conversions used by the field accessors and the base58
transport form of transactions.
"""

from __future__ import annotations
from typing import Union

import base58

from .errors import EncodingError

BytesLike = Union[bytes, bytearray, memoryview]


def to_bytes(value: BytesLike) -> bytes:
    """Copy any bytes-like value into an immutable bytes object."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise EncodingError(f"Expected bytes-like value, got {type(value).__name__}")


def to_hex(value: BytesLike) -> str:
    """Lowercase hex of the given bytes."""
    return to_bytes(value).hex()


def from_hex(text: str) -> bytes:
    """
    Decode a hex string.

    Args:
        text: Hex text, without prefix

    Returns:
        Decoded bytes

    Raises:
        EncodingError: If text is not valid hex
    """
    if not isinstance(text, str):
        raise EncodingError(f"Expected hex string, got {type(text).__name__}")
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise EncodingError(f"Invalid hex string: {e}", cause=e)


def to_base58(value: BytesLike) -> str:
    """Base58 (bitcoin alphabet) of the given bytes."""
    return base58.b58encode(to_bytes(value)).decode("ascii")


def from_base58(text: str) -> bytes:
    """
    Decode a base58 string.

    Raises:
        EncodingError: If text contains characters outside the alphabet
    """
    if not isinstance(text, str):
        raise EncodingError(f"Expected base58 string, got {type(text).__name__}")
    try:
        return base58.b58decode(text)
    except ValueError as e:
        raise EncodingError(f"Invalid base58 string: {e}", cause=e)


__all__ = [
    "BytesLike",
    "to_bytes",
    "to_hex",
    "from_hex",
    "to_base58",
    "from_base58",
]
