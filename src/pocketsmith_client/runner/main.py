"""
CLI main entry point.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from ..client import FetchResponse, PocketSmithError
from ..config import ConfigValidationError, PocketSmithConfig, create_default_config, load_config
from ..errors import serialize_error
from ..factory import PocketSmithClient, create_pocketsmith_client
from ..transactions import TransactionQueryOptions

logger = logging.getLogger(__name__)

API_KEY_HELP = """
To get a developer key:
  1. Log into PocketSmith
  2. Go to Settings -> Security & Integrations
  3. Create a new developer key
  4. Set it as an environment variable:
       export POCKETSMITH_API_KEY=your_key_here
     or put it in the config file (see `pocketsmith init`)
"""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="pocketsmith",
        description="Query the PocketSmith API from the command line",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("pocketsmith.yaml"),
        help="Path to config file (default: pocketsmith.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("init", help="Write a default config file")
    subparsers.add_parser("check", help="Verify credentials against /me")
    subparsers.add_parser("me", help="Show the authenticated user")
    subparsers.add_parser("accounts", help="List the current user's accounts")

    # transactions command
    tx_parser = subparsers.add_parser("transactions", help="List transactions")
    scope = tx_parser.add_mutually_exclusive_group()
    scope.add_argument(
        "--account",
        type=int,
        help="Account ID (default: all of the current user's transactions)",
    )
    scope.add_argument(
        "--transaction-account",
        type=int,
        help="Transaction account ID",
    )
    tx_parser.add_argument("--start-date", type=str, help="Start date (YYYY-MM-DD)")
    tx_parser.add_argument("--end-date", type=str, help="End date (YYYY-MM-DD)")
    tx_parser.add_argument("--search", type=str, help="Search text")
    tx_parser.add_argument("--type", choices=["credit", "debit"], help="Transaction type")
    tx_parser.add_argument(
        "--needs-review",
        action="store_true",
        default=None,
        help="Only transactions that need review",
    )
    tx_parser.add_argument(
        "--uncategorised",
        action="store_true",
        default=None,
        help="Only uncategorised transactions",
    )
    tx_parser.add_argument("--page", type=int, help="Page number")

    subparsers.add_parser("categories", help="List the current user's categories")

    # create-category command
    category_parser = subparsers.add_parser("create-category", help="Create a category")
    category_parser.add_argument("--title", type=str, required=True, help="Category title")
    category_parser.add_argument("--colour", type=str, help="Colour, e.g. #FF6B6B")

    subparsers.add_parser("currencies", help="List currencies")
    subparsers.add_parser("time-zones", help="List time zones")

    return parser


def _print_result(result: FetchResponse, what: str) -> int:
    if not result.ok:
        print(f"❌ Error fetching {what}: {serialize_error(result.error)}")
        return 1
    print(json.dumps(result.data, indent=2, ensure_ascii=False))
    return 0


def _current_user_id(client: PocketSmithClient) -> int | None:
    result = client.get("/me")
    if not result.ok:
        print(f"❌ Error fetching user: {serialize_error(result.error)}")
        return None
    if not isinstance(result.data, dict) or result.data.get("id") is None:
        print("❌ Error fetching user: response did not include a user id")
        return None
    return result.data["id"]


def cmd_check(config: PocketSmithConfig, client: PocketSmithClient) -> int:
    """Check that the configured credentials are accepted."""
    if not config.has_credentials():
        print("❌ No PocketSmith credentials configured")
        print(API_KEY_HELP)
        return 1

    result = client.get("/me")
    if not result.ok:
        print(f"❌ Authentication failed ({result.status_code}): {serialize_error(result.error)}")
        return 1

    user = result.data if isinstance(result.data, dict) else {}
    print(f"✓ Authenticated as {user.get('login')} (id={user.get('id')})")
    return 0


def cmd_me(client: PocketSmithClient) -> int:
    """Show the authenticated user."""
    return _print_result(client.get("/me"), "user")


def cmd_accounts(client: PocketSmithClient) -> int:
    """List accounts of the authenticated user."""
    user_id = _current_user_id(client)
    if user_id is None:
        return 1
    return _print_result(
        client.get("/users/{id}/accounts", path_params={"id": user_id}),
        "accounts",
    )


def cmd_transactions(
    client: PocketSmithClient,
    options: TransactionQueryOptions,
    account_id: int | None = None,
    transaction_account_id: int | None = None,
) -> int:
    """List transactions for an account, a transaction account or the current user."""
    if account_id is not None:
        result = client.transactions.get_by_account(account_id, options)
    elif transaction_account_id is not None:
        result = client.transactions.get_by_transaction_account(transaction_account_id, options)
    else:
        user_id = _current_user_id(client)
        if user_id is None:
            return 1
        result = client.transactions.get_by_user(user_id, options)

    return _print_result(result, "transactions")


def cmd_categories(client: PocketSmithClient) -> int:
    """List categories of the authenticated user."""
    user_id = _current_user_id(client)
    if user_id is None:
        return 1
    return _print_result(
        client.get("/users/{id}/categories", path_params={"id": user_id}),
        "categories",
    )


def cmd_create_category(client: PocketSmithClient, title: str, colour: str | None = None) -> int:
    """Create a category for the authenticated user."""
    user_id = _current_user_id(client)
    if user_id is None:
        return 1

    body = {"title": title}
    if colour:
        body["colour"] = colour

    result = client.post("/users/{id}/categories", path_params={"id": user_id}, body=body)
    if not result.ok:
        print(f"❌ Error creating category: {serialize_error(result.error)}")
        return 1

    category = result.data if isinstance(result.data, dict) else {}
    print(f"✓ Created category '{category.get('title', title)}' (id={category.get('id')})")
    return 0


def _transaction_options(parsed: argparse.Namespace) -> TransactionQueryOptions:
    options: TransactionQueryOptions = {}
    for key in ("start_date", "end_date", "search", "type", "needs_review", "uncategorised", "page"):
        value = getattr(parsed, key)
        if value is not None:
            options[key] = value
    return options


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init":
        if parsed.config.exists():
            print(f"❌ {parsed.config} already exists")
            return 1
        create_default_config(parsed.config)
        print(f"✓ Wrote {parsed.config}")
        return 0

    # Load config
    try:
        config = load_config(parsed.config)
        client_config = config.to_client_config()
    except (ConfigValidationError, OSError, yaml.YAMLError) as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    with create_pocketsmith_client(client_config, timeout=config.timeout) as client:
        try:
            # Route to command
            if parsed.command == "check":
                return cmd_check(config, client)
            elif parsed.command == "me":
                return cmd_me(client)
            elif parsed.command == "accounts":
                return cmd_accounts(client)
            elif parsed.command == "transactions":
                return cmd_transactions(
                    client,
                    _transaction_options(parsed),
                    account_id=parsed.account,
                    transaction_account_id=parsed.transaction_account,
                )
            elif parsed.command == "categories":
                return cmd_categories(client)
            elif parsed.command == "create-category":
                return cmd_create_category(client, parsed.title, parsed.colour)
            elif parsed.command == "currencies":
                return _print_result(client.get("/currencies"), "currencies")
            elif parsed.command == "time-zones":
                return _print_result(client.get("/time_zones"), "time zones")
            else:
                parser.print_help()
                return 1
        except PocketSmithError as e:
            logger.debug("Request failed", exc_info=True)
            print(f"❌ {e}")
            return 1


if __name__ == "__main__":
    sys.exit(main())
