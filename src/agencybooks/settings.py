"""Runtime settings sourced from environment variables."""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional

from agencybooks.domain.wallet import DEFAULT_WALLETS
from agencybooks.utils.amount_parser import parse_amount


def parse_wallet_seeds(raw: str) -> dict[str, Decimal]:
    """Parse ``key=amount,key=amount`` into starting balances.

    Raises:
        ValueError: If an item is malformed or an amount is negative
    """
    seeds: dict[str, Decimal] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, amount = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid wallet seed '{item}', expected key=amount")
        value = parse_amount(amount)
        if value < 0:
            raise ValueError(f"Starting balance for wallet '{key}' cannot be negative")
        seeds[key] = value
    return seeds


@dataclass(frozen=True)
class Settings:
    """Settings for the agencybooks composition root.

    Attributes:
        database_path: SQLite file path; None selects the default location.
        log_level: Logging level name for the package logger.
        wallet_seeds: Starting balance for wallets not yet stored.
    """

    database_path: Optional[str] = None
    log_level: str = "WARNING"
    wallet_seeds: Mapping[str, Decimal] = field(default_factory=lambda: dict(DEFAULT_WALLETS))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Returns:
            Settings: Settings sourced from environment variables.
        """
        environ = os.environ if environ is None else environ
        raw_seeds = environ.get("AGENCYBOOKS_WALLETS")
        seeds = parse_wallet_seeds(raw_seeds) if raw_seeds else dict(DEFAULT_WALLETS)
        return cls(
            database_path=environ.get("AGENCYBOOKS_DB_PATH") or None,
            log_level=(environ.get("AGENCYBOOKS_LOG_LEVEL") or "WARNING").strip().upper(),
            wallet_seeds=seeds,
        )
