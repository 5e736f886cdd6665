"""
Generic PocketSmith API client implementation.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PATH_PARAM = re.compile(r"\{([^{}/]+)\}")


class PocketSmithError(Exception):
    """Base exception for PocketSmith client errors."""

    pass


class PocketSmithConnectionError(PocketSmithError):
    """Failed to reach the PocketSmith API."""

    pass


class PocketSmithAPIError(PocketSmithError):
    """API returned an error response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_body: Any = None,
    ):
        self.status_code = status_code
        self.message = message
        self.error_body = error_body
        super().__init__(f"PocketSmith API error {status_code}: {message}")


@dataclass
class FetchResponse(Generic[T]):
    """Result of a single API call.

    Exactly one of ``data`` and ``error`` carries the payload: ``error`` is
    None for any 2xx response and ``data`` is None otherwise. A 2xx with an
    empty body leaves both None, so use ``ok`` to branch.
    """

    data: T | None
    error: Any
    response: requests.Response

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def raise_for_error(self) -> T | None:
        """Return ``data``, or raise PocketSmithAPIError for an error result."""
        if self.ok:
            return self.data

        message = self.response.reason or "Request failed"
        if isinstance(self.error, dict) and self.error.get("error"):
            message = str(self.error["error"])
        elif isinstance(self.error, str) and self.error:
            message = self.error

        raise PocketSmithAPIError(
            status_code=self.response.status_code,
            message=message,
            error_body=self.error,
        )


def expand_path(template: str, path_params: dict | None = None) -> str:
    """Substitute ``{name}`` placeholders with URL-quoted values.

    Placeholders without a matching value are left untouched.
    """
    if not path_params:
        return template

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if path_params.get(name) is None:
            return match.group(0)
        return quote(str(path_params[name]), safe="")

    return _PATH_PARAM.sub(_replace, template)


def encode_query(query: dict | None) -> dict:
    """Drop unset values and render booleans the way the API expects."""
    params = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[key] = value
    return params


class ApiClient:
    """
    Generic verb client for the PocketSmith API.

    Every call issues exactly one request. Application errors come back in
    ``FetchResponse.error``; only transport failures raise.
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the client.

        Args:
            base_url: API origin including the version prefix
            headers: Headers sent with every request (authentication etc.)
            session: Optional pre-configured requests session
            timeout: Per-request timeout in seconds, forwarded to requests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {"Accept": "application/json", **(headers or {})}

        # Headers go on each request; a shared session is left untouched
        self.session = session or requests.Session()

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the headers fixed at construction."""
        return dict(self._headers)

    def request(
        self,
        method: str,
        path: str,
        *,
        path_params: dict | None = None,
        query: dict | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> FetchResponse:
        """Make an API request and split the outcome into data or error."""
        method = method.upper()
        url = f"{self.base_url}{expand_path(path, path_params)}"

        logger.debug("API Request: %s %s", method, url)

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=encode_query(query),
                json=body,
                headers={**self._headers, **(headers or {})},
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            logger.error("Connection error to %s: %s", url, e)
            raise PocketSmithConnectionError(
                f"Failed to connect to PocketSmith at {self.base_url}: {e}"
            ) from e
        except requests.exceptions.Timeout as e:
            logger.error("Timeout for %s: %s", url, e)
            raise PocketSmithConnectionError(f"Request to PocketSmith timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error("Request error for %s: %s", url, e)
            raise PocketSmithError(f"Request failed: {e}") from e

        logger.debug("Response status: %s", response.status_code)

        if response.ok:
            return FetchResponse(data=self._parse_body(method, response), error=None, response=response)

        error = self._parse_body(method, response)
        if error is None:
            error = response.text or response.reason or str(response.status_code)
        logger.warning("API error %s for %s %s", response.status_code, method, url)
        return FetchResponse(data=None, error=error, response=response)

    @staticmethod
    def _parse_body(method: str, response: requests.Response) -> Any:
        if (
            method == "HEAD"
            or response.status_code == 204
            or response.headers.get("Content-Length") == "0"
            or not response.content
        ):
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def get(self, path: str, **kwargs) -> FetchResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> FetchResponse:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> FetchResponse:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> FetchResponse:
        return self.request("DELETE", path, **kwargs)

    def patch(self, path: str, **kwargs) -> FetchResponse:
        return self.request("PATCH", path, **kwargs)

    def head(self, path: str, **kwargs) -> FetchResponse:
        return self.request("HEAD", path, **kwargs)

    def options(self, path: str, **kwargs) -> FetchResponse:
        return self.request("OPTIONS", path, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
