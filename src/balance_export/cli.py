"""CLI for balance-export using Typer."""

import logging
import sys

import typer
from rich.console import Console

from .config import DEFAULT_CONFIG_FILE, resolve_config
from .exceptions import (
    AccountListError,
    AuthenticationError,
    BalanceExportError,
    ConfigurationError,
    EmailError,
)
from .service import BalanceExportService

app = typer.Typer(
    name="balance-export",
    help="Export bookkeeping account balances to CSV and an HTML email report",
)

console = Console()
err_console = Console(stderr=True)


def setup_logging(debug: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@app.command()
def export(
    url: str = typer.Option(
        None, "--url", "-url", help="The base URL of the API (e.g., https://domain_name)"
    ),
    user: str = typer.Option(
        None, "--user", "-user", help="The login name for API authorization"
    ),
    password: str = typer.Option(
        None, "--pass", "-pass", help="The password for API authorization"
    ),
    debug: bool = typer.Option(
        False, "--debug", "-debug", help="Enable detailed HTTP request/response logging"
    ),
    print_csv: bool = typer.Option(
        False, "--print", "-print", help="Print CSV data to the console"
    ),
    config_file: str = typer.Option(
        DEFAULT_CONFIG_FILE, "--config", "-config", help="Path to configuration file"
    ),
    email_to: str = typer.Option(
        None, "--email-to", "-email-to", help="Recipient email address for the report"
    ),
    smtp_host: str = typer.Option(
        None, "--smtp-host", "-smtp-host", help="SMTP server host"
    ),
    smtp_port: int = typer.Option(
        None, "--smtp-port", "-smtp-port", help="SMTP server port (default 587)"
    ),
    smtp_user: str = typer.Option(
        None, "--smtp-user", "-smtp-user", help="SMTP username"
    ),
    smtp_pass: str = typer.Option(
        None, "--smtp-pass", "-smtp-pass", help="SMTP password"
    ),
    smtp_from: str = typer.Option(
        None,
        "--smtp-from",
        "-smtp-from",
        help="Sender email address (must match SMTP user for some servers)",
    ),
    output_dir: str = typer.Option(
        ".", "--output-dir", "-output-dir", help="Directory for the CSV files"
    ),
):
    """
    Fetch account balances and export them.

    Writes assets.csv and liabilities.csv, and emails an HTML summary when
    -email-to, -smtp-host and -smtp-user are all given.
    """
    setup_logging(debug)

    try:
        config = resolve_config(
            url=url,
            user=user,
            password=password,
            debug=debug,
            print_csv=print_csv,
            config_file=config_file,
            email_to=email_to,
            smtp_host=smtp_host,
            smtp_port=smtp_port,
            smtp_user=smtp_user,
            smtp_pass=smtp_pass,
            smtp_from=smtp_from,
            output_dir=output_dir,
        )
    except ConfigurationError as e:
        err_console.print(f"\n[bold red]Error:[/bold red] {e}")
        err_console.print(
            "Usage: balance-export -url <base_url> -user <username> "
            "-pass <password> [email flags...]"
        )
        sys.exit(1)

    try:
        result = BalanceExportService(config, console=console).run()
    except AuthenticationError as e:
        err_console.print(f"\n[bold red]Failed to get authentication token:[/bold red] {e}")
        if debug:
            raise
        sys.exit(1)
    except AccountListError as e:
        err_console.print(f"\n[bold red]Failed to fetch account list:[/bold red] {e}")
        if debug:
            raise
        sys.exit(1)
    except EmailError as e:
        err_console.print(f"\n[bold red]Failed to send email:[/bold red] {e}")
        if debug:
            raise
        sys.exit(1)
    except BalanceExportError as e:
        err_console.print(f"\n[bold red]Error:[/bold red] {e}")
        if debug:
            raise
        sys.exit(1)

    console.print(
        f"\n[bold green]✓ Exported {len(result.assets)} assets and "
        f"{len(result.liabilities)} liabilities[/bold green]"
    )
    if not (result.assets_written and result.liabilities_written):
        console.print("[yellow]⚠️  Some CSV files could not be written, see log[/yellow]")


def main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
