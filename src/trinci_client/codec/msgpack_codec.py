"""
Canonical MessagePack codec.

Schema-less structured binary encoding used for the canonical transaction
tuple and for free-form smart contract arguments. Map keys are sorted before
encoding so that the same value always produces the same bytes, regardless
of the insertion order of the caller's dictionaries.
"""

from typing import Any

import msgpack

from ..runtime.errors import MarshalError, UnmarshalError


def encode(value: Any) -> bytes:
    """
    Encode a value as canonical MessagePack bytes.

    Strings are packed as ``str``, bytes-like values as ``bin``, tuples as
    arrays and ``None`` as ``nil``.

    Args:
        value: Value to encode (dict, list, tuple, str, bytes, int, float, bool, None)

    Returns:
        Encoded bytes

    Raises:
        MarshalError: If the value holds a type MessagePack cannot represent
    """
    try:
        return msgpack.packb(_canonicalize(value), use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise MarshalError(f"Cannot encode value: {e}", cause=e)


def decode(data: bytes) -> Any:
    """
    Decode MessagePack bytes.

    The whole buffer must hold exactly one value; trailing bytes are an error.

    Args:
        data: Encoded bytes

    Returns:
        Decoded value (arrays become lists, ``bin`` becomes bytes)

    Raises:
        UnmarshalError: If the data is not a single well-formed value
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise UnmarshalError(f"Expected bytes to decode, got {type(data).__name__}")
    try:
        return msgpack.unpackb(bytes(data), raw=False, strict_map_key=False)
    except (TypeError, ValueError) as e:
        raise UnmarshalError(f"Cannot decode data: {e}", cause=e)


def _canonicalize(v: Any) -> Any:
    """
    Recursively canonicalize a value.

    - Maps: sort keys, recursively canonicalize values
    - Lists and tuples: recursively canonicalize elements, preserve order
    - Bytes-like: normalize to bytes
    - Primitives: pass through unchanged
    """
    if isinstance(v, dict):
        out = {}
        for k in sorted(v.keys(), key=_key_order):
            out[k] = _canonicalize(v[k])
        return out
    elif isinstance(v, (list, tuple)):
        return [_canonicalize(item) for item in v]
    elif isinstance(v, (bytearray, memoryview)):
        return bytes(v)
    else:
        return v


def _key_order(key: Any):
    # Keys of different types never compare directly
    return (type(key).__name__, key)


__all__ = ["encode", "decode"]
