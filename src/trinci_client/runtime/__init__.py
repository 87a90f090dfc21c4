"""Runtime helpers for the TRINCI client"""

from .errors import TrinciError
from .encoding import to_hex, from_hex, to_base58, from_base58

__all__ = [
    "TrinciError",
    "to_hex",
    "from_hex",
    "to_base58",
    "from_base58",
]
