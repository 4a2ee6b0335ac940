"""
Settings - read from the environment once per process.
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from functools import lru_cache

# ISO 4217 currencies without a minor unit
DEFAULT_CURRENCY_TOLERANCES = "JPY=1,KRW=1,VND=1,CLP=1,ISK=1"


def _parse_tolerance(raw: str, name: str) -> Decimal:
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"{name}: invalid tolerance {raw!r}") from None
    if not value.is_finite() or value <= 0:
        raise ValueError(f"{name}: tolerance must be positive, got {raw!r}")
    return value


def parse_currency_tolerances(raw: str) -> dict[str, Decimal]:
    """Parse "JPY=1,KRW=1" into {"JPY": Decimal("1"), ...}."""
    tolerances: dict[str, Decimal] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        currency, sep, value = item.partition("=")
        if not sep or not currency.strip():
            raise ValueError(f"LEDGERCHECK_CURRENCY_TOLERANCES: malformed item {item!r}")
        tolerances[currency.strip().upper()] = _parse_tolerance(value, currency.strip().upper())
    return tolerances


@dataclass(frozen=True)
class Settings:
    balance_tolerance: Decimal = Decimal("0.01")
    currency_tolerances: dict[str, Decimal] = field(default_factory=dict)
    default_currency: str = "USD"
    page_size: int = 10
    log_level: str = "INFO"
    log_format: str = "json"

    def tolerance_for(self, currency: str | None) -> Decimal:
        code = (currency or self.default_currency).upper()
        return self.currency_tolerances.get(code, self.balance_tolerance)

    @classmethod
    def from_env(cls) -> "Settings":
        page_size = os.getenv("LEDGERCHECK_PAGE_SIZE", "10")
        try:
            page_size_value = int(page_size)
        except ValueError:
            raise ValueError(f"LEDGERCHECK_PAGE_SIZE: not an integer {page_size!r}") from None
        if page_size_value < 1:
            raise ValueError(f"LEDGERCHECK_PAGE_SIZE: must be >= 1, got {page_size_value}")

        return cls(
            balance_tolerance=_parse_tolerance(
                os.getenv("LEDGERCHECK_BALANCE_TOLERANCE", "0.01"),
                "LEDGERCHECK_BALANCE_TOLERANCE",
            ),
            currency_tolerances=parse_currency_tolerances(
                os.getenv("LEDGERCHECK_CURRENCY_TOLERANCES", DEFAULT_CURRENCY_TOLERANCES)
            ),
            default_currency=os.getenv("LEDGERCHECK_DEFAULT_CURRENCY", "USD").upper(),
            page_size=page_size_value,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "json").lower(),
        )


@lru_cache
def get_settings() -> Settings:
    """Dependency - process-wide settings."""
    return Settings.from_env()
