"""balance-export - Export bookkeeping account balances to CSV and email."""

__version__ = "0.1.0"

from .config import ExportConfig, resolve_config
from .currency import (
    CURRENCY_EXPONENTS,
    exponent_for,
    format_balance,
    sum_major_units_by_currency,
)
from .models import Account, AccountCategory
from .partition import Buckets, partition_accounts
from .service import BalanceExportService, ExportResult

__all__ = [
    "ExportConfig",
    "resolve_config",
    "CURRENCY_EXPONENTS",
    "exponent_for",
    "format_balance",
    "sum_major_units_by_currency",
    "Account",
    "AccountCategory",
    "Buckets",
    "partition_accounts",
    "BalanceExportService",
    "ExportResult",
]
