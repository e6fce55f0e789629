"""ISO 4217 minor-unit conversion.

The bookkeeping API reports balances in minor units (cents for USD). The
exponent of a currency is the number of minor-unit digits, so a balance is
converted to major units by dividing by ``10 ** exponent``.
"""

from collections.abc import Iterable
from types import MappingProxyType

from .models import Account

DEFAULT_EXPONENT = 2

# Reference: https://en.wikipedia.org/wiki/ISO_4217
CURRENCY_EXPONENTS = MappingProxyType(
    {
        "USD": 2,
        "EUR": 2,
        "GBP": 2,
        "JPY": 0,
        "CNY": 2,
        "INR": 2,
        "CAD": 2,
        "AUD": 2,
        "HUF": 2,
        "JOD": 3,
        "KWD": 3,
        "OMR": 3,
    }
)


def exponent_for(currency: str) -> int:
    """Minor-unit exponent for a currency code (case-insensitive, default 2)."""
    return CURRENCY_EXPONENTS.get(currency.upper(), DEFAULT_EXPONENT)


def to_major_units(balance: float, currency: str) -> float:
    """Convert a minor-unit balance to major units."""
    return balance / 10 ** exponent_for(currency)


def format_balance(balance: float, currency: str) -> str:
    """
    Render a minor-unit balance as a fixed-point major-unit string.

    The result has exactly as many fractional digits as the currency's
    exponent, e.g. ``format_balance(12345, "KWD") == "12.345"`` and
    ``format_balance(500, "JPY") == "500"``.

    Args:
        balance: Balance in minor units
        currency: ISO 4217 currency code

    Returns:
        Formatted major-unit amount
    """
    exponent = exponent_for(currency)
    return f"{balance / 10 ** exponent:.{exponent}f}"


def sum_major_units_by_currency(accounts: Iterable[Account]) -> dict[str, float]:
    """
    Total account balances per currency, in major units.

    Keys keep the currency code as sent by the API and appear in order of
    first occurrence.
    """
    totals: dict[str, float] = {}
    for account in accounts:
        totals[account.currency] = totals.get(account.currency, 0.0) + to_major_units(
            account.balance, account.currency
        )
    return totals
