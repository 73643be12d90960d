#!/usr/bin/env python3
"""
Tally CLI - Command-line interface for a shared income and expense ledger.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    workspaces   Create, list and switch workspaces
    accounts     Manage accounts
    categories   Manage categories
    transactions Record and manage transactions
    summary      Month overview
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli workspaces create Household --currency EUR
    python -m cli transactions add expense 12.50 Lunch --category Food --account Wallet
    python -m cli summary --month 2024/03 --chart
"""

import sys
import argparse
from cli import accounts, categories, migrate, summary, transactions, workspaces
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tally - Shared income and expense ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    workspaces.setup_parser(subparsers)
    accounts.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    summary.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            db_manager = DatabaseManager(config)

            # migrate works on the raw database; everything else goes
            # through the services container on a current schema
            if args.command == "migrate":
                args.func(args, db_manager)
            else:
                db_manager.ensure_schema()
                services = Services(config, db_manager=db_manager)
                args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
