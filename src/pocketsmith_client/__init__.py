"""
PocketSmith API Client.

Provides:
- A client factory that attaches a developer key or OAuth bearer token
- Generic verb methods (get/post/put/delete/patch/head/options) returning
  data-or-error results
- Transaction listing shortcuts by account and transaction account
- A never-raising error serializer for logging

Application errors come back as results; only transport failures raise.
"""

from .client import (
    ApiClient,
    FetchResponse,
    PocketSmithAPIError,
    PocketSmithConnectionError,
    PocketSmithError,
)
from .errors import MISSING, serialize_error
from .factory import (
    DEFAULT_BASE_URL,
    ClientConfig,
    PocketSmithClient,
    build_auth_headers,
    create_pocketsmith_client,
)
from .transactions import TransactionQueryOptions, TransactionsAPI

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "FetchResponse",
    "MISSING",
    "PocketSmithAPIError",
    "PocketSmithClient",
    "PocketSmithConnectionError",
    "PocketSmithError",
    "TransactionQueryOptions",
    "TransactionsAPI",
    "build_auth_headers",
    "create_pocketsmith_client",
    "serialize_error",
]
