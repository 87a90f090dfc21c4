"""
TRINCI Codec Module

Structured binary encoding (canonical MessagePack) and hashing helpers.

Key components:
- msgpack_codec.py: canonical encode/decode for the transaction tuple and method arguments
- hashes.py: SHA-256 and multihash helpers
"""

from .hashes import sha256_bytes, sha256_multihash, account_id_from_raw
from .msgpack_codec import encode, decode

__all__ = [
    "encode",
    "decode",
    "sha256_bytes",
    "sha256_multihash",
    "account_id_from_raw",
]
