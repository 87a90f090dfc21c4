"""
Defaults applied to newly created transactions.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .runtime.errors import ValidationError

ATOMIC_TX_SCHEMA = "atomic"

PACKAGE_LOGGER = "trinci_client"


@dataclass
class TxConfig:
    """Configuration for new transactions."""

    network: str = ""
    max_fuel: int = 0
    schema: str = ATOMIC_TX_SCHEMA
    debug: bool = False

    def __post_init__(self):
        if isinstance(self.max_fuel, bool) or not isinstance(self.max_fuel, int) or self.max_fuel < 0:
            raise ValidationError(f"max_fuel must be a non-negative integer, got {self.max_fuel!r}")
        for name in ("network", "schema"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
        if self.debug:
            logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> TxConfig:
        """
        Build a configuration from environment variables.

        Reads TRINCI_NETWORK, TRINCI_MAX_FUEL, TRINCI_SCHEMA and TRINCI_DEBUG;
        unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        max_fuel = env.get("TRINCI_MAX_FUEL", "0")
        try:
            max_fuel_value = int(max_fuel)
        except ValueError as e:
            raise ValidationError(f"TRINCI_MAX_FUEL is not an integer: {max_fuel!r}", cause=e)
        return cls(
            network=env.get("TRINCI_NETWORK", ""),
            max_fuel=max_fuel_value,
            schema=env.get("TRINCI_SCHEMA", ATOMIC_TX_SCHEMA),
            debug=env.get("TRINCI_DEBUG", "false").lower() in ("1", "true", "yes"),
        )


__all__ = ["ATOMIC_TX_SCHEMA", "TxConfig"]
