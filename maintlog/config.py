"""Ledger configuration."""

import dataclasses
import os
from typing import Any

# Well-known unusable principal reserved by the host platform.
BURN_ADDRESS = "SP000000000000000000002Q6VF78"

# Longest newest-first index kept for one vehicle.
MAX_RECORDS_PER_VIN = 100


def _env_int(value, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


@dataclasses.dataclass(frozen=True)
class LedgerConfig:
    """Capacity limits and reserved identities for a ledger.

    Parameters
    ----------
    max_records : int
        Total records the ledger will ever accept.
    max_records_per_vin : int
        Length of the newest-first index kept per vehicle. Older ids fall
        off the end; the records themselves are kept.
    burn_address : str
        Principal that may never be bound as the authority.
    """

    max_records: int = 10000
    max_records_per_vin: int = MAX_RECORDS_PER_VIN
    burn_address: str = BURN_ADDRESS

    def __post_init__(self) -> None:
        if self.max_records < 0:
            raise ValueError("max_records must be non-negative")
        if not 1 <= self.max_records_per_vin <= MAX_RECORDS_PER_VIN:
            raise ValueError(f"max_records_per_vin must be between 1 and {MAX_RECORDS_PER_VIN}")

    @classmethod
    def from_env(cls, **overrides: Any) -> "LedgerConfig":
        """Create configuration from environment variables.

        Reads ``MAINT_MAX_RECORDS``, ``MAINT_MAX_RECORDS_PER_VIN`` and
        ``MAINT_BURN_ADDRESS``. Explicit keyword arguments override
        environment values.
        """
        values = {
            "max_records": _env_int(os.environ.get("MAINT_MAX_RECORDS"), cls.max_records),
            "max_records_per_vin": _env_int(
                os.environ.get("MAINT_MAX_RECORDS_PER_VIN"), cls.max_records_per_vin
            ),
            "burn_address": os.environ.get("MAINT_BURN_ADDRESS") or cls.burn_address,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
