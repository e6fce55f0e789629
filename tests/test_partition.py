"""Tests for the asset/liability partitioner."""

from balance_export.models import Account
from balance_export.partition import partition_accounts


def make_account(id: str, is_asset: bool = False, is_liability: bool = False) -> Account:
    """Create an Account with only the flags that matter here."""
    return Account(id=id, currency="USD", is_asset=is_asset, is_liability=is_liability)


def test_partition_is_disjoint_and_ordered():
    accounts = [
        make_account("a1", is_asset=True),
        make_account("l1", is_liability=True),
        make_account("a2", is_asset=True),
        make_account("l2", is_liability=True),
        make_account("a3", is_asset=True),
    ]

    buckets = partition_accounts(accounts)

    assert [a.id for a in buckets.assets] == ["a1", "a2", "a3"]
    assert [a.id for a in buckets.liabilities] == ["l1", "l2"]
    assert not {a.id for a in buckets.assets} & {a.id for a in buckets.liabilities}


def test_accounts_without_flags_are_dropped():
    accounts = [
        make_account("neither"),
        make_account("a1", is_asset=True),
        make_account("also-neither"),
    ]

    buckets = partition_accounts(accounts)

    assert [a.id for a in buckets.assets] == ["a1"]
    assert buckets.liabilities == []


def test_account_with_both_flags_counts_as_asset():
    buckets = partition_accounts([make_account("both", is_asset=True, is_liability=True)])

    assert [a.id for a in buckets.assets] == ["both"]
    assert buckets.liabilities == []


def test_empty_input():
    buckets = partition_accounts([])

    assert buckets.assets == []
    assert buckets.liabilities == []


def test_accepts_any_iterable():
    buckets = partition_accounts(
        make_account(str(i), is_liability=True) for i in range(3)
    )

    assert [a.id for a in buckets.liabilities] == ["0", "1", "2"]
