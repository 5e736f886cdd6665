"""
JSON shapes returned by the PocketSmith API.

These describe the payloads for type checkers only; responses are handed
back exactly as decoded from the wire.
"""

from typing import Literal, TypedDict


class Currency(TypedDict, total=False):
    id: str
    name: str
    symbol: str
    minor_unit: int
    separators: dict


class TimeZone(TypedDict, total=False):
    name: str
    utc_offset: int
    formatted_name: str
    formatted_offset: str
    abbreviation: str
    identifier: str


class User(TypedDict, total=False):
    id: int
    login: str
    name: str
    email: str
    avatar_url: str
    beta_user: bool
    time_zone: str
    week_start_day: int
    base_currency_code: str
    always_show_base_currency: bool
    using_multiple_currencies: bool
    available_accounts: int
    available_budgets: int
    forecast_last_updated_at: str
    forecast_last_accessed_at: str
    forecast_start_date: str
    forecast_end_date: str
    created_at: str
    updated_at: str


class Institution(TypedDict, total=False):
    id: int
    title: str
    currency_code: str
    created_at: str
    updated_at: str


class TransactionAccount(TypedDict, total=False):
    id: int
    account_id: int
    name: str
    number: str
    type: str
    currency_code: str
    current_balance: float
    current_balance_date: str
    starting_balance: float
    starting_balance_date: str
    institution: Institution
    created_at: str
    updated_at: str


class Account(TypedDict, total=False):
    id: int
    title: str
    type: str
    is_net_worth: bool
    currency_code: str
    current_balance: float
    current_balance_date: str
    primary_transaction_account: TransactionAccount
    transaction_accounts: list[TransactionAccount]
    created_at: str
    updated_at: str


class Category(TypedDict, total=False):
    id: int
    title: str
    colour: str | None
    parent_id: int | None
    is_transfer: bool
    is_bill: bool
    refund_behaviour: str | None
    children: list["Category"]
    roll_up: bool
    created_at: str
    updated_at: str


class CategoryCreate(TypedDict, total=False):
    title: str
    colour: str
    parent_id: int
    is_transfer: bool
    is_bill: bool
    roll_up: bool
    refund_behaviour: str


class Transaction(TypedDict, total=False):
    id: int
    payee: str
    original_payee: str
    date: str
    upload_source: str
    category: Category | None
    closing_balance: float
    cheque_number: str | None
    memo: str | None
    amount: float
    amount_in_base_currency: float
    type: Literal["credit", "debit"]
    is_transfer: bool | None
    needs_review: bool
    status: Literal["pending", "posted"]
    note: str | None
    labels: list[str]
    transaction_account: TransactionAccount
    created_at: str
    updated_at: str


class ErrorBody(TypedDict):
    error: str
