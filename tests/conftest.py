"""Test fixtures and utilities."""

import pytest

from pocketsmith_client import ClientConfig, create_pocketsmith_client

CUSTOM_BASE_URL = "http://pocketsmith.test/v2"

SAMPLE_USER = {
    "id": 1001,
    "login": "jdoe",
    "name": "J. Doe",
    "email": "jdoe@example.com",
    "base_currency_code": "nzd",
    "time_zone": "Auckland",
}

SAMPLE_TRANSACTIONS = [
    {
        "id": 501,
        "payee": "Countdown",
        "date": "2024-03-02",
        "amount": -84.12,
        "type": "debit",
        "needs_review": False,
        "category": {"id": 12, "title": "Groceries"},
    },
    {
        "id": 502,
        "payee": "Salary",
        "date": "2024-03-15",
        "amount": 4200.0,
        "type": "credit",
        "needs_review": True,
        "category": None,
    },
]


@pytest.fixture(autouse=True)
def clean_pocketsmith_env(monkeypatch):
    """Keep a developer's real credentials out of the tests."""
    for name in (
        "POCKETSMITH_BASE_URL",
        "POCKETSMITH_API_KEY",
        "POCKETSMITH_ACCESS_TOKEN",
        "POCKETSMITH_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client():
    """Client against a test origin, authenticated with a developer key."""
    with create_pocketsmith_client(
        ClientConfig(base_url=CUSTOM_BASE_URL, api_key="test-key")
    ) as c:
        yield c


@pytest.fixture
def sample_user() -> dict:
    return dict(SAMPLE_USER)


@pytest.fixture
def sample_transactions() -> list[dict]:
    return [dict(tx) for tx in SAMPLE_TRANSACTIONS]
