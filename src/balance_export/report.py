"""HTML balance report rendered from the ``report.html`` Jinja2 template."""

from collections.abc import Sequence
from datetime import datetime
from typing import NamedTuple

from jinja2 import Environment, PackageLoader

from .currency import format_balance, sum_major_units_by_currency
from .models import Account

EMPTY_BUCKET_HTML = "<p>No accounts found in this category.</p>"


class CurrencySummary(NamedTuple):
    """Report totals for one currency, in major units."""

    currency: str
    total_assets: float
    total_liabilities: float

    @property
    def net_assets(self) -> float:
        # liability totals are negative
        return self.total_assets + self.total_liabilities


def balance_class(amount: float) -> str:
    """CSS class for an amount: "positive" for >= 0, else "negative"."""
    return "positive" if amount >= 0 else "negative"


env = Environment(
    loader=PackageLoader("balance_export"),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["balance_class"] = balance_class
env.filters["balance"] = format_balance


def summarize_by_currency(
    assets: Sequence[Account], liabilities: Sequence[Account]
) -> list[CurrencySummary]:
    """
    Per-currency asset and liability totals.

    Currencies held only as liabilities are listed after the asset
    currencies, each in order of first appearance.
    """
    asset_totals = sum_major_units_by_currency(assets)
    liability_totals = sum_major_units_by_currency(liabilities)

    currencies = list(asset_totals)
    currencies += [c for c in liability_totals if c not in asset_totals]

    return [
        CurrencySummary(
            currency=currency,
            total_assets=asset_totals.get(currency, 0.0),
            total_liabilities=liability_totals.get(currency, 0.0),
        )
        for currency in currencies
    ]


def generate_html_report(
    assets: Sequence[Account],
    liabilities: Sequence[Account],
    generated_at: datetime | None = None,
) -> str:
    """
    Render the full HTML report for the email body.

    Args:
        assets: Asset bucket
        liabilities: Liability bucket
        generated_at: Report timestamp (defaults to local now)

    Returns:
        HTML document
    """
    generated_at = generated_at or datetime.now().astimezone()
    template = env.get_template("report.html")
    return template.render(
        generated_at=generated_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
        summary=summarize_by_currency(assets, liabilities),
        assets=assets,
        liabilities=liabilities,
    )
