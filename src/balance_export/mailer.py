"""SMTP delivery of the HTML report."""

import logging
import smtplib
from email.message import EmailMessage

from .config import ExportConfig
from .exceptions import EmailError

logger = logging.getLogger(__name__)

REPORT_SUBJECT = "Financial Account Balance Report"
SMTPS_PORT = 465


def email_ready(config: ExportConfig) -> bool:
    """True when recipient, SMTP host and SMTP user are all configured."""
    return bool(config.email_to and config.smtp_host and config.smtp_user)


def recipients(config: ExportConfig) -> list[str]:
    """Comma-separated recipients from the config."""
    return [addr.strip() for addr in (config.email_to or "").split(",") if addr.strip()]


def build_message(html_body: str, config: ExportConfig) -> EmailMessage:
    """Compose the report message; the sender defaults to the SMTP user."""
    message = EmailMessage()
    message["From"] = config.smtp_from or config.smtp_user
    message["To"] = ", ".join(recipients(config))
    message["Subject"] = REPORT_SUBJECT
    message.set_content(html_body, subtype="html")
    return message


def send_report_email(html_body: str, config: ExportConfig) -> None:
    """
    Send the HTML report over SMTP.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS when
    the server offers it.

    Raises:
        EmailError: If the SMTP conversation fails
    """
    message = build_message(html_body, config)
    smtp_class = smtplib.SMTP_SSL if config.smtp_port == SMTPS_PORT else smtplib.SMTP

    logger.debug(
        f"Sending report to {message['To']} via {config.smtp_host}:{config.smtp_port}"
    )
    try:
        with smtp_class(config.smtp_host, config.smtp_port, timeout=30) as smtp:
            if smtp_class is smtplib.SMTP:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if config.smtp_user:
                smtp.login(config.smtp_user, config.smtp_pass or "")
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as e:
        raise EmailError(f"Failed to send email: {e}") from e
