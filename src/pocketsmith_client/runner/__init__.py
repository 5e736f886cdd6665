"""
CLI runner module.

Provides commands:
- init: Write a default config file
- check: Verify credentials
- me, accounts, categories, currencies, time-zones: Read resources
- transactions: List transactions by account, transaction account or user
- create-category: Create a category
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
