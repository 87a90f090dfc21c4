"""
Hash Functions

SHA-256 helpers and the multihash framing used for transaction and
account identifiers.
"""

import hashlib

from ..runtime.encoding import to_base58

# Multihash header for a 32-byte SHA-256 digest: <fn code 0x12><length 0x20>
SHA256_MULTIHASH_PREFIX = b"\x12\x20"


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def sha256_multihash(input_bytes: bytes) -> bytes:
    """
    SHA-256 digest framed as a multihash.

    Returns:
        34 bytes: the multihash prefix followed by the digest
    """
    return SHA256_MULTIHASH_PREFIX + sha256_bytes(input_bytes)


def account_id_from_raw(raw_public_key: bytes) -> str:
    """Base58 of the SHA-256 multihash of a raw public key."""
    return to_base58(sha256_multihash(raw_public_key))
