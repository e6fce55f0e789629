"""Service layer that runs the export pipeline.

authenticate -> list accounts -> partition -> export CSVs -> build report ->
optionally email. API failures propagate to the caller; export failures are
recorded on the result and the run goes on.
"""

import logging
import sys
from typing import TextIO

import httpx
from pydantic import BaseModel, ConfigDict
from rich.console import Console

from .clients.bookkeeping import BookkeepingClient
from .config import ExportConfig
from .exporter import export_to_csv
from .mailer import email_ready, send_report_email
from .models import Account
from .partition import Buckets, partition_accounts
from .report import generate_html_report

logger = logging.getLogger(__name__)


class ExportResult(BaseModel):
    """Outcome of one pipeline run."""

    model_config = ConfigDict(frozen=True)

    assets: list[Account]
    liabilities: list[Account]
    assets_written: bool
    liabilities_written: bool
    html_report: str
    email_sent: bool = False


class BalanceExportService:
    """Runs the account export for one resolved configuration."""

    def __init__(
        self,
        config: ExportConfig,
        transport: httpx.BaseTransport | None = None,
        stream: TextIO | None = None,
        console: Console | None = None,
    ):
        """Initialize the export service."""
        self.config = config
        self.transport = transport
        self.stream = stream or sys.stdout
        self.console = console or Console()

    def fetch_accounts(self) -> list[Account]:
        """Authenticate and fetch the full account list."""
        with BookkeepingClient(
            self.config.base_url, debug=self.config.debug, transport=self.transport
        ) as client:
            self.console.print(
                f"Attempting login to {self.config.base_url} "
                f"as user: {self.config.login_name}",
                markup=False,
            )
            token = client.authenticate(self.config.login_name, self.config.password)
            self.console.print("[green]✓ Successfully retrieved token.[/green]")

            accounts = client.list_accounts(token)
            logger.info(f"Fetched {len(accounts)} accounts")
            return accounts

    def export(self, buckets: Buckets) -> tuple[bool, bool]:
        """Write both CSV files; one failing does not stop the other."""
        try:
            self.config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Could not create output directory {self.config.output_dir}: {e}")
        assets_written = export_to_csv(
            self.config.assets_path,
            buckets.assets,
            echo=self.config.print_csv,
            stream=self.stream,
        )
        liabilities_written = export_to_csv(
            self.config.liabilities_path,
            buckets.liabilities,
            echo=self.config.print_csv,
            stream=self.stream,
        )
        return assets_written, liabilities_written

    def deliver_report(self, html_report: str) -> bool:
        """
        Email the report when email settings are complete.

        Returns:
            True if the email was sent, False if it was skipped
        """
        if email_ready(self.config):
            send_report_email(html_report, self.config)
            self.console.print(
                f"[green]✓ Email report successfully sent to {self.config.email_to}[/green]"
            )
            return True
        if self.config.email_to:
            logger.warning(
                "Email flags missing. Not sending email. "
                "Use -smtp-host, -smtp-user, and -email-to."
            )
        return False

    def run(self) -> ExportResult:
        """Run the whole pipeline."""
        accounts = self.fetch_accounts()
        buckets = partition_accounts(accounts)
        dropped = len(accounts) - len(buckets.assets) - len(buckets.liabilities)
        if dropped:
            logger.debug(f"{dropped} accounts are neither assets nor liabilities")

        assets_written, liabilities_written = self.export(buckets)
        html_report = generate_html_report(buckets.assets, buckets.liabilities)
        email_sent = self.deliver_report(html_report)

        return ExportResult(
            assets=buckets.assets,
            liabilities=buckets.liabilities,
            assets_written=assets_written,
            liabilities_written=liabilities_written,
            html_report=html_report,
            email_sent=email_sent,
        )
