"""Custom exceptions for balance-export."""


class BalanceExportError(Exception):
    """Base exception for all balance-export errors."""

    pass


class ConfigurationError(BalanceExportError):
    """Raised when configuration is invalid or missing."""

    pass


class APIError(BalanceExportError):
    """Base class for bookkeeping API errors."""

    def __init__(
        self, message: str, status_code: int | None = None, body: str | None = None
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class AuthenticationError(APIError):
    """Raised when the authorize call fails."""

    pass


class AccountListError(APIError):
    """Raised when the account list cannot be retrieved."""

    pass


class EmailError(BalanceExportError):
    """Raised when the report email cannot be delivered."""

    pass
