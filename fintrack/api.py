"""HTTP clients for the finance tracker API.

Three collaborators share one request helper:
- AuthClient: register and log in, returning session credentials
- TransactionRepository: list/create/update/delete the user's transactions
- MailExporter: hand a base64 PDF to the server for emailing
"""

from typing import Any

import requests

from fintrack.domain.models import Transaction, TransactionInput
from fintrack.errors import ApiError, AuthError
from fintrack.logging_setup import get_logger
from fintrack.session import SessionState

logger = get_logger(__name__)

REQUEST_TIMEOUT = 30


def auth_headers(token: str) -> dict[str, str]:
    """Headers for an authenticated JSON request."""
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/json",
    }


def send_request(
    http: requests.Session,
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    payload: dict[str, Any] | None = None,
) -> requests.Response:
    """Send a request and map failures to fintrack errors.

    Raises:
        AuthError: If the API answers 401 or 403.
        ApiError: For any other HTTP or network failure.
    """
    logger.debug("%s %s", method, url)
    try:
        response = http.request(method, url, headers=headers, json=payload, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.warning("%s %s failed with status %s", method, url, status)
        if status in (401, 403):
            raise AuthError("The server rejected your session. Run 'fintrack login' again.", status) from e
        raise ApiError(f"Request failed ({status}): {e}", status) from e
    except requests.RequestException as e:
        logger.warning("%s %s failed: %s", method, url, e)
        raise ApiError(f"Could not reach the server: {e}") from e
    return response


def response_json(response: requests.Response) -> Any:
    """Decode a JSON body.

    Raises:
        ApiError: If the body is not JSON.
    """
    try:
        return response.json()
    except ValueError as e:
        raise ApiError(f"Server returned invalid JSON: {e}", response.status_code) from e


class AuthClient:
    """Issues session credentials."""

    def __init__(self, base_url: str, http: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()

    def register(self, name: str, email: str, password: str) -> None:
        """Create a new user account.

        Raises:
            ApiError: If registration is rejected.
        """
        send_request(
            self.http,
            "POST",
            f"{self.base_url}/users/register",
            headers={"Accept": "application/json"},
            payload={"name": name, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> SessionState:
        """Exchange credentials for a bearer token and user id.

        Raises:
            AuthError: If the credentials are rejected or no token is returned.
            ApiError: If the request fails.
        """
        response = send_request(
            self.http,
            "POST",
            f"{self.base_url}/users/login",
            headers={"Accept": "application/json"},
            payload={"email": email, "password": password},
        )
        data = response_json(response)
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise AuthError("Login response did not include a token")
        return SessionState(token=str(token), user_id=str(data.get("userId", "")))


class TransactionRepository:
    """The current user's transactions on the server."""

    def __init__(self, base_url: str, session: SessionState, http: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http or requests.Session()

    def _url(self, transaction_id: str | None = None) -> str:
        if transaction_id is None:
            return f"{self.base_url}/expenses"
        return f"{self.base_url}/expenses/{transaction_id}"

    def list(self) -> list[Transaction]:
        """Fetch every transaction of the current user.

        Raises:
            ApiError: If the request fails or a record is malformed.
        """
        response = send_request(self.http, "GET", self._url(), headers=auth_headers(self.session.token))
        data = response_json(response)
        if not isinstance(data, list):
            raise ApiError("Expected a list of transactions from the server")
        try:
            transactions = [Transaction.from_api(item) for item in data]
        except (ValueError, TypeError) as e:
            raise ApiError(f"Server returned an invalid transaction: {e}") from e
        logger.debug("Fetched %d transactions", len(transactions))
        return transactions

    def create(self, transaction: TransactionInput) -> Transaction:
        """Create a transaction; the server assigns its id.

        Raises:
            ApiError: If the request fails.
        """
        response = send_request(
            self.http,
            "POST",
            self._url(),
            headers=auth_headers(self.session.token),
            payload=transaction.to_api(),
        )
        try:
            return Transaction.from_api(response_json(response))
        except (ValueError, TypeError) as e:
            raise ApiError(f"Server returned an invalid transaction: {e}") from e

    def update(self, transaction_id: str, transaction: TransactionInput) -> None:
        """Replace a transaction's fields.

        Raises:
            ApiError: If the request fails.
        """
        send_request(
            self.http,
            "PUT",
            self._url(transaction_id),
            headers=auth_headers(self.session.token),
            payload=transaction.to_api(),
        )

    def delete(self, transaction_id: str) -> None:
        """Delete a transaction by id.

        Raises:
            ApiError: If the request fails.
        """
        send_request(self.http, "DELETE", self._url(transaction_id), headers=auth_headers(self.session.token))


class MailExporter:
    """Asks the server to email a report to the logged-in user."""

    def __init__(self, base_url: str, session: SessionState, http: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http or requests.Session()

    def send_report(self, base64_pdf: str) -> str:
        """Submit a base64-encoded PDF.

        Returns:
            The server's confirmation message.

        Raises:
            ApiError: If the request fails.
        """
        response = send_request(
            self.http,
            "POST",
            f"{self.base_url}/expenses/send-report",
            headers=auth_headers(self.session.token),
            payload={"pdf": base64_pdf},
        )
        data = response_json(response)
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return "Report sent"
