"""Bookkeeping API client."""

import logging

import httpx
from pydantic import ValidationError

from ..exceptions import AccountListError, AuthenticationError
from ..models import Account, AccountListResponse, AuthResponse

logger = logging.getLogger(__name__)


def _log_request(request: httpx.Request):
    """Dump an outgoing request at DEBUG level."""
    headers = "\n".join(f"{key}: {value}" for key, value in request.headers.items())
    body = request.content.decode("utf-8", errors="replace")
    logger.debug(
        f"\n--- DEBUG: {request.method} {request.url} ---\n{headers}\n\n{body}\n--- END ---"
    )


def _log_response(response: httpx.Response):
    """Dump response status and headers at DEBUG level."""
    headers = "\n".join(
        f"{key}: {value}" for key, value in response.headers.items()
    )
    logger.debug(
        f"\n--- DEBUG: Response Headers ({response.request.url.path}) ---\n"
        f"Status: {response.status_code} {response.reason_phrase}\n{headers}\n"
        f"--- END Response Headers ---"
    )


class BookkeepingClient:
    """Client for the bookkeeping REST API."""

    AUTHORIZE_PATH = "/api/authorize.json"
    ACCOUNT_LIST_PATH = "/api/v1/accounts/list.json"

    def __init__(
        self,
        base_url: str,
        debug: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the bookkeeping client."""
        self.base_url = base_url.rstrip("/")
        event_hooks = (
            {"request": [_log_request], "response": [_log_response]} if debug else {}
        )
        self.client = httpx.Client(
            base_url=self.base_url,
            event_hooks=event_hooks,
            transport=transport,
            timeout=30.0,
        )

    def close(self):
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def authenticate(self, login_name: str, password: str) -> str:
        """
        Exchange credentials for a bearer token.

        Args:
            login_name: Login name of the bookkeeping user
            password: Password of the bookkeeping user

        Returns:
            The bearer token

        Raises:
            AuthenticationError: On transport failure, a non-200 status or
                an undecodable response body
        """
        try:
            response = self.client.post(
                self.AUTHORIZE_PATH,
                json={"loginName": login_name, "password": password},
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Error executing auth request: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise AuthenticationError(
                f"Authorization failed with status code: {response.status_code}, "
                f"response body: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            auth = AuthResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise AuthenticationError(
                f"Error decoding auth response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        return auth.result.token

    def list_accounts(self, token: str) -> list[Account]:
        """
        Fetch all accounts, including hidden ones.

        Args:
            token: Bearer token from authenticate()

        Returns:
            Accounts in the order the API returned them

        Raises:
            AccountListError: On transport failure, a non-200 status, an
                undecodable body or ``success: false``
        """
        try:
            response = self.client.get(
                self.ACCOUNT_LIST_PATH,
                params={"visible_only": "false"},
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            raise AccountListError(f"Error executing list request: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise AccountListError(
                f"Account list retrieval failed with status code: "
                f"{response.status_code}, response body: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            listing = AccountListResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise AccountListError(
                f"Error decoding account list response: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not listing.success:
            raise AccountListError(
                "Account list API returned success: false",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(f"Fetched {len(listing.result)} accounts")
        return listing.result


def authenticate(
    base_url: str,
    login_name: str,
    password: str,
    debug: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """One-shot helper around BookkeepingClient.authenticate()."""
    with BookkeepingClient(base_url, debug=debug, transport=transport) as client:
        return client.authenticate(login_name, password)


def list_accounts(
    base_url: str,
    token: str,
    debug: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> list[Account]:
    """One-shot helper around BookkeepingClient.list_accounts()."""
    with BookkeepingClient(base_url, debug=debug, transport=transport) as client:
        return client.list_accounts(token)
