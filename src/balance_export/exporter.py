"""CSV export of account buckets."""

import csv
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .currency import format_balance
from .models import Account

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "ID",
    "Name",
    "Currency",
    "Balance",
    "Category",
    "IsAsset",
    "IsLiability",
    "Comment",
]


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def account_rows(accounts: Sequence[Account]) -> list[list[str]]:
    """Build CSV rows (header first) with balances converted to major units."""
    rows = [list(CSV_HEADER)]
    for account in accounts:
        rows.append(
            [
                account.id,
                account.name,
                account.currency,
                format_balance(account.balance, account.currency),
                account.category_label,
                _bool_str(account.is_asset),
                _bool_str(account.is_liability),
                account.comment,
            ]
        )
    return rows


def export_to_csv(
    path: str | Path,
    accounts: Sequence[Account],
    echo: bool = False,
    stream: TextIO | None = None,
) -> bool:
    """
    Write a bucket of accounts to a CSV file.

    A failure to create or write the file is logged rather than raised so
    that the caller can go on with the other bucket.

    Args:
        path: Destination file
        accounts: Accounts to export
        echo: Also print the rows tab-delimited to the console
        stream: Console stream for the echo (defaults to stdout)

    Returns:
        True if the file was written
    """
    path = Path(path)
    rows = account_rows(accounts)

    written = False
    try:
        with path.open("w", newline="", encoding="utf-8") as f:
            csv.writer(f, lineterminator="\n").writerows(rows)
        written = True
        logger.info(f"Successfully wrote {len(accounts)} records to {path}")
    except OSError as e:
        logger.error(f"Could not write {path}: {e}")

    if echo:
        out = stream or sys.stdout
        out.write(f"\n--- Console Output: {path.stem.upper()} ---\n")
        csv.writer(out, delimiter="\t", lineterminator="\n").writerows(rows)
        out.write("-" * 64 + "\n")

    return written
