"""
Client construction: credential selection and the PocketSmith wrapper.
"""

import logging
from dataclasses import dataclass, field

import requests

from .client import ApiClient, FetchResponse
from .transactions import TransactionsAPI

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.pocketsmith.com/v2"

DEVELOPER_KEY_HEADER = "X-Developer-Key"
AUTHORIZATION_HEADER = "Authorization"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a PocketSmith client.

    If both credentials are set, the developer key is used.
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = field(default=None, repr=False)
    access_token: str | None = field(default=None, repr=False)


def build_auth_headers(
    api_key: str | None = None,
    access_token: str | None = None,
) -> dict[str, str]:
    """
    Pick the single authentication header for a set of credentials.

    Args:
        api_key: Developer key, sent as X-Developer-Key
        access_token: OAuth access token, sent as a Bearer Authorization header

    Returns:
        A dict with at most one entry; empty when no credential is given
    """
    if api_key:
        if access_token:
            logger.debug("Both developer key and access token supplied; using developer key")
        return {DEVELOPER_KEY_HEADER: api_key}
    if access_token:
        return {AUTHORIZATION_HEADER: f"Bearer {access_token}"}
    return {}


class PocketSmithClient:
    """
    PocketSmith API client.

    Wraps an ApiClient, forwarding the generic verbs and adding the
    ``transactions`` shortcuts.
    """

    def __init__(self, api: ApiClient):
        self.api = api
        self.transactions = TransactionsAPI(api)

    @property
    def base_url(self) -> str:
        return self.api.base_url

    @property
    def headers(self) -> dict[str, str]:
        return self.api.headers

    def request(self, method: str, path: str, **kwargs) -> FetchResponse:
        return self.api.request(method, path, **kwargs)

    def get(self, path: str, **kwargs) -> FetchResponse:
        return self.api.get(path, **kwargs)

    def post(self, path: str, **kwargs) -> FetchResponse:
        return self.api.post(path, **kwargs)

    def put(self, path: str, **kwargs) -> FetchResponse:
        return self.api.put(path, **kwargs)

    def delete(self, path: str, **kwargs) -> FetchResponse:
        return self.api.delete(path, **kwargs)

    def patch(self, path: str, **kwargs) -> FetchResponse:
        return self.api.patch(path, **kwargs)

    def head(self, path: str, **kwargs) -> FetchResponse:
        return self.api.head(path, **kwargs)

    def options(self, path: str, **kwargs) -> FetchResponse:
        return self.api.options(path, **kwargs)

    def close(self) -> None:
        self.api.close()

    def __enter__(self) -> "PocketSmithClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def create_pocketsmith_client(
    config: ClientConfig | None = None,
    *,
    session: requests.Session | None = None,
    timeout: float | None = ApiClient.DEFAULT_TIMEOUT,
) -> PocketSmithClient:
    """
    Create a PocketSmith API client.

    No request is made here; bad credentials only show up as an error
    result on the first call.

    Args:
        config: Base URL and credentials (defaults to the public API, anonymous)
        session: Optional requests session to send through
        timeout: Per-request timeout in seconds

    Returns:
        PocketSmithClient bound to one base URL and one auth header
    """
    config = config or ClientConfig()
    base_url = config.base_url or DEFAULT_BASE_URL
    headers = build_auth_headers(config.api_key, config.access_token)

    api = ApiClient(base_url, headers=headers, session=session, timeout=timeout)
    return PocketSmithClient(api)
