"""Tests for CLI commands.

These tests verify that all CLI commands are properly registered and that
they issue the expected requests against a mocked API.
"""

import json
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from pocketsmith_client import DEFAULT_BASE_URL
from pocketsmith_client.runner.main import create_cli, main


class TestCLICommandRegistry:
    """Tests for CLI command registration."""

    def test_all_commands_registered(self):
        """Verify all expected commands are registered."""
        parser = create_cli()

        subparsers_action = None
        for action in parser._actions:
            if action.dest == "command":
                subparsers_action = action
                break

        assert subparsers_action is not None

        commands = list(subparsers_action.choices.keys())
        for name in (
            "init",
            "check",
            "me",
            "accounts",
            "transactions",
            "categories",
            "create-category",
            "currencies",
            "time-zones",
        ):
            assert name in commands

    def test_transactions_defaults(self):
        args = create_cli().parse_args(["transactions"])

        assert args.account is None
        assert args.transaction_account is None
        assert args.needs_review is None
        assert args.uncategorised is None

    def test_transactions_options(self):
        args = create_cli().parse_args([
            "transactions",
            "--account",
            "42",
            "--start-date",
            "2024-01-01",
            "--type",
            "debit",
            "--needs-review",
            "--page",
            "2",
        ])

        assert args.account == 42
        assert args.start_date == "2024-01-01"
        assert args.type == "debit"
        assert args.needs_review is True
        assert args.page == 2

    def test_account_scopes_are_exclusive(self):
        with pytest.raises(SystemExit):
            create_cli().parse_args(["transactions", "--account", "1", "--transaction-account", "2"])

    def test_create_category_requires_title(self):
        with pytest.raises(SystemExit):
            create_cli().parse_args(["create-category"])


class TestCLICommands:
    """Command behaviour against a mocked API."""

    @pytest.fixture
    def config_path(self, tmp_path: Path) -> Path:
        return tmp_path / "pocketsmith.yaml"

    @pytest.fixture
    def with_api_key(self, monkeypatch):
        monkeypatch.setenv("POCKETSMITH_API_KEY", "cli-key")

    def test_no_command_prints_help(self, config_path):
        assert main(["-c", str(config_path)]) == 1

    def test_init_writes_config(self, config_path, capsys):
        assert main(["-c", str(config_path), "init"]) == 0
        assert config_path.exists()
        assert main(["-c", str(config_path), "init"]) == 1

    def test_check_without_credentials(self, config_path, capsys):
        assert main(["-c", str(config_path), "check"]) == 1
        assert "POCKETSMITH_API_KEY" in capsys.readouterr().out

    @responses.activate
    def test_check_success(self, config_path, with_api_key, sample_user, capsys):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", json=sample_user, status=200)

        assert main(["-c", str(config_path), "check"]) == 0

        assert "Authenticated as jdoe" in capsys.readouterr().out
        assert responses.calls[0].request.headers["X-Developer-Key"] == "cli-key"

    @responses.activate
    def test_check_rejected_key(self, config_path, with_api_key, capsys):
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/me",
            json={"error": "Invalid developer key"},
            status=401,
        )

        assert main(["-c", str(config_path), "check"]) == 1
        assert "Invalid developer key" in capsys.readouterr().out

    @responses.activate
    def test_transactions_by_account(self, config_path, with_api_key, sample_transactions, capsys):
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/accounts/42/transactions",
            json=sample_transactions,
            status=200,
        )

        code = main([
            "-c",
            str(config_path),
            "transactions",
            "--account",
            "42",
            "--start-date",
            "2024-01-01",
            "--end-date",
            "2024-12-31",
        ])

        assert code == 0
        query = parse_qs(urlparse(responses.calls[0].request.url).query)
        assert query == {"start_date": ["2024-01-01"], "end_date": ["2024-12-31"]}
        assert json.loads(capsys.readouterr().out) == sample_transactions

    @responses.activate
    def test_transactions_by_transaction_account(self, config_path, with_api_key):
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/transaction_accounts/77/transactions",
            json=[],
            status=200,
        )

        assert main(["-c", str(config_path), "transactions", "--transaction-account", "77"]) == 0

    @responses.activate
    def test_transactions_for_current_user(self, config_path, with_api_key, sample_user):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", json=sample_user, status=200)
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/users/1001/transactions",
            json=[],
            status=200,
        )

        assert main(["-c", str(config_path), "transactions", "--uncategorised"]) == 0

        query = parse_qs(urlparse(responses.calls[1].request.url).query)
        assert query == {"uncategorised": ["true"]}

    @responses.activate
    def test_accounts(self, config_path, with_api_key, sample_user, capsys):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", json=sample_user, status=200)
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/users/1001/accounts",
            json=[{"id": 3, "title": "Everyday", "currency_code": "nzd"}],
            status=200,
        )

        assert main(["-c", str(config_path), "accounts"]) == 0
        assert json.loads(capsys.readouterr().out)[0]["title"] == "Everyday"

    @responses.activate
    def test_create_category(self, config_path, with_api_key, sample_user, capsys):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", json=sample_user, status=200)
        responses.add(
            responses.POST,
            f"{DEFAULT_BASE_URL}/users/1001/categories",
            json={"id": 88, "title": "API Test Category", "colour": "#FF6B6B"},
            status=201,
        )

        code = main([
            "-c",
            str(config_path),
            "create-category",
            "--title",
            "API Test Category",
            "--colour",
            "#FF6B6B",
        ])

        assert code == 0
        assert json.loads(responses.calls[1].request.body) == {
            "title": "API Test Category",
            "colour": "#FF6B6B",
        }
        assert "id=88" in capsys.readouterr().out

    @responses.activate
    def test_check_empty_body(self, config_path, with_api_key, capsys):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", body="", status=200)

        assert main(["-c", str(config_path), "check"]) == 0
        assert "Authenticated as None" in capsys.readouterr().out

    @responses.activate
    def test_accounts_when_user_body_is_empty(self, config_path, with_api_key, capsys):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", body="", status=200)

        assert main(["-c", str(config_path), "accounts"]) == 1
        assert "did not include a user id" in capsys.readouterr().out
        assert len(responses.calls) == 1

    @responses.activate
    def test_create_category_empty_body(self, config_path, with_api_key, sample_user, capsys):
        responses.add(responses.GET, f"{DEFAULT_BASE_URL}/me", json=sample_user, status=200)
        responses.add(
            responses.POST,
            f"{DEFAULT_BASE_URL}/users/1001/categories",
            status=204,
        )

        code = main(["-c", str(config_path), "create-category", "--title", "Groceries"])

        assert code == 0
        assert "Created category 'Groceries'" in capsys.readouterr().out

    @responses.activate
    def test_currencies_anonymous(self, config_path):
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/currencies",
            json=[{"id": "usd", "name": "United States Dollar", "symbol": "$"}],
            status=200,
        )

        assert main(["-c", str(config_path), "currencies"]) == 0
        assert "X-Developer-Key" not in responses.calls[0].request.headers

    @responses.activate
    def test_time_zones_error(self, config_path, capsys):
        responses.add(
            responses.GET,
            f"{DEFAULT_BASE_URL}/time_zones",
            json={"error": "Service unavailable"},
            status=503,
        )

        assert main(["-c", str(config_path), "time-zones"]) == 1
        assert "Service unavailable" in capsys.readouterr().out

    @responses.activate
    def test_transport_failure(self, config_path, with_api_key, capsys):
        # No registered response: the mock transport refuses the connection
        assert main(["-c", str(config_path), "me"]) == 1
        assert "Failed to connect" in capsys.readouterr().out

    def test_invalid_config(self, config_path, monkeypatch, capsys):
        monkeypatch.setenv("POCKETSMITH_BASE_URL", "not-a-url")

        assert main(["-c", str(config_path), "me"]) == 1
        assert "Failed to load config" in capsys.readouterr().out
