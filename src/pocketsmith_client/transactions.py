"""
Transaction listing shortcuts.

Each method is a single GET with the identifier dropped into the path and
the options forwarded as the query string. Nothing is validated, filtered
or paginated here; the API is the judge of bad input.
"""

from typing import Literal, TypedDict

from .client import ApiClient, FetchResponse
from .schema import Transaction

ACCOUNT_TRANSACTIONS_PATH = "/accounts/{id}/transactions"
TRANSACTION_ACCOUNT_TRANSACTIONS_PATH = "/transaction_accounts/{id}/transactions"
USER_TRANSACTIONS_PATH = "/users/{id}/transactions"


class TransactionQueryOptions(TypedDict, total=False):
    """Query filters accepted by the transaction listing endpoints."""

    start_date: str
    end_date: str
    updated_since: str
    search: str
    type: Literal["credit", "debit"]
    needs_review: bool
    uncategorised: bool
    only_uncategorised: bool
    page: int


class TransactionsAPI:
    """Convenience accessors for the transaction listing endpoints."""

    def __init__(self, api: ApiClient):
        self._api = api

    def _list(
        self,
        path: str,
        resource_id: int,
        options: TransactionQueryOptions | None,
    ) -> FetchResponse[list[Transaction]]:
        return self._api.get(
            path,
            path_params={"id": resource_id},
            query=dict(options or {}),
        )

    def get_by_account(
        self,
        account_id: int,
        options: TransactionQueryOptions | None = None,
    ) -> FetchResponse[list[Transaction]]:
        """List transactions across every transaction account of an account."""
        return self._list(ACCOUNT_TRANSACTIONS_PATH, account_id, options)

    def get_by_transaction_account(
        self,
        transaction_account_id: int,
        options: TransactionQueryOptions | None = None,
    ) -> FetchResponse[list[Transaction]]:
        """List transactions posted to a single transaction account."""
        return self._list(TRANSACTION_ACCOUNT_TRANSACTIONS_PATH, transaction_account_id, options)

    def get_by_user(
        self,
        user_id: int,
        options: TransactionQueryOptions | None = None,
    ) -> FetchResponse[list[Transaction]]:
        """List transactions across all of a user's accounts."""
        return self._list(USER_TRANSACTIONS_PATH, user_id, options)
