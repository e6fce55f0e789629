"""Configuration management for balance-export."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".env"
DEFAULT_SMTP_PORT = 587


class FileSettings(BaseSettings):
    """Values read from a ``KEY=VALUE`` config file (and matching env vars)."""

    model_config = SettingsConfigDict(
        env_file=DEFAULT_CONFIG_FILE,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    # Bookkeeping API
    base_url: str | None = None
    login_name: str | None = None
    password: str | None = None

    # Email report
    email_to: str | None = None
    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from: str | None = None


class ExportConfig(BaseModel):
    """Fully resolved, immutable run configuration."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    login_name: str
    password: str
    debug: bool = False
    print_csv: bool = False

    email_to: str | None = None
    smtp_host: str | None = None
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from: str | None = None

    output_dir: Path = Path(".")

    @property
    def assets_path(self) -> Path:
        return self.output_dir / "assets.csv"

    @property
    def liabilities_path(self) -> Path:
        return self.output_dir / "liabilities.csv"


def load_file_settings(config_file: str | Path) -> FileSettings:
    """Load settings from a config file, raising ConfigurationError on bad values."""
    try:
        return FileSettings(_env_file=config_file)
    except ValidationError as e:
        raise ConfigurationError(
            f"Failed to load config file {config_file}.\nError: {e}"
        ) from e


def _pick(flag_value, file_value):
    """Flag wins when set; empty strings count as unset."""
    if flag_value not in (None, ""):
        return flag_value
    if file_value in (None, ""):
        return None
    return file_value


def resolve_config(
    *,
    url: str | None = None,
    user: str | None = None,
    password: str | None = None,
    debug: bool = False,
    print_csv: bool = False,
    config_file: str | Path = DEFAULT_CONFIG_FILE,
    email_to: str | None = None,
    smtp_host: str | None = None,
    smtp_port: int | None = None,
    smtp_user: str | None = None,
    smtp_pass: str | None = None,
    smtp_from: str | None = None,
    output_dir: str | Path = ".",
) -> ExportConfig:
    """
    Merge command-line flags with the optional config file.

    The config file is only read when one of url/user/password is missing
    from the flags. Flags always take precedence over file values, which in
    turn take precedence over defaults.

    Raises:
        ConfigurationError: If base URL, login name or password is still
            unset after merging, or the config file has invalid values.
    """
    file_settings = FileSettings.model_construct()
    if not (url and user and password):
        config_path = Path(config_file)
        if config_path.is_file():
            logger.info(f"Loading configuration from {config_path}")
            file_settings = load_file_settings(config_path)
        else:
            logger.warning(
                f"No config file found at {config_path}, "
                "using only command-line arguments"
            )

    base_url = _pick(url, file_settings.base_url)
    login_name = _pick(user, file_settings.login_name)
    resolved_password = _pick(password, file_settings.password)

    missing = [
        flag
        for flag, value in (
            ("-url", base_url),
            ("-user", login_name),
            ("-pass", resolved_password),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required API flags or config values: {', '.join(missing)}"
        )

    return ExportConfig(
        base_url=base_url.rstrip("/"),
        login_name=login_name,
        password=resolved_password,
        debug=debug,
        print_csv=print_csv,
        email_to=_pick(email_to, file_settings.email_to),
        smtp_host=_pick(smtp_host, file_settings.smtp_host),
        smtp_port=_pick(smtp_port, file_settings.smtp_port) or DEFAULT_SMTP_PORT,
        smtp_user=_pick(smtp_user, file_settings.smtp_user),
        smtp_pass=_pick(smtp_pass, file_settings.smtp_pass),
        smtp_from=_pick(smtp_from, file_settings.smtp_from),
        output_dir=Path(output_dir),
    )
