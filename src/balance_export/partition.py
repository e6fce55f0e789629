"""Split accounts into asset and liability buckets."""

from collections.abc import Iterable
from typing import NamedTuple

from .models import Account


class Buckets(NamedTuple):
    """Accounts grouped for export."""

    assets: list[Account]
    liabilities: list[Account]


def partition_accounts(accounts: Iterable[Account]) -> Buckets:
    """
    Partition accounts by their asset/liability flags.

    Input order is kept within each bucket. The asset flag is checked first,
    and accounts carrying neither flag are left out of both buckets.
    """
    assets: list[Account] = []
    liabilities: list[Account] = []
    for account in accounts:
        if account.is_asset:
            assets.append(account)
        elif account.is_liability:
            liabilities.append(account)
    return Buckets(assets=assets, liabilities=liabilities)
