#!/usr/bin/env python3

import sys
from cli.common import format_amount, open_session
from logger import get_logger
from services.accounts import AccountInUseError
from tools.aggregation import account_balances, total_balance_across_accounts
from tools.quality import DataQualityReport

logger = get_logger()


def cmd_list(args, services):
    """List the accounts of the current workspace with their balances."""
    session = open_session(services)
    workspace = session.workspace
    accounts = session.accounts

    if not accounts:
        logger.info("No accounts found.")
        logger.info("Use 'python -m cli accounts seed' to create the default accounts.")
        return

    report = DataQualityReport()
    transactions = session.transactions

    logger.info(f"\nAccounts in {workspace.name}:")
    logger.info("=" * 80)
    for entry in account_balances(accounts, transactions, report):
        account = entry.account
        logger.info(f"ID: {account.id}")
        logger.info(f"Name: {account.name}")
        logger.info(f"Type: {account.type}")
        if account.note:
            logger.info(f"Note: {account.note}")
        logger.info(f"Balance: {format_amount(entry.balance, workspace.currency)}")
        logger.info("-" * 80)

    total = total_balance_across_accounts(accounts, transactions, report)
    logger.info(f"\nTotal balance: {format_amount(total, workspace.currency)}")
    if report.count():
        logger.warning(f"{report.count()} data quality issue(s) found; see log for details")


def cmd_create(args, services):
    """Create a new account in the current workspace."""
    session = open_session(services)
    try:
        account = services.accounts.create(
            session.workspace.id,
            services.config.user_id,
            args.name,
            args.type,
            initial_balance=args.initial_balance,
            note=args.note,
        )
    except Exception as e:
        logger.error(f"Error creating account: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Account created successfully with ID: {account.id}")
    logger.info(f"  Name: {account.name}")
    logger.info(f"  Type: {account.type}")
    logger.info(f"  Initial balance: {account.initial_balance}")


def cmd_delete(args, services):
    """Delete an account by ID."""
    session = open_session(services)
    workspace_id = session.workspace.id

    account = services.accounts.find(workspace_id, args.account_id)
    if not account:
        logger.error(f"Account with ID {args.account_id} not found.")
        sys.exit(1)

    confirm = (
        input(f"\nDelete account '{account.name}'? (yes/no): ").strip().lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    try:
        services.accounts.delete(workspace_id, account.id, force=args.force)
    except AccountInUseError as e:
        logger.error(f"Cannot delete account: {e}")
        logger.info("Use --force to delete it anyway; its transactions are kept.")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting account: {e}")
        sys.exit(1)

    logger.info(f"✓ Account '{account.name}' deleted successfully.")


def cmd_seed(args, services):
    """Create the default accounts if the workspace has none."""
    session = open_session(services)
    created = services.accounts.ensure_defaults(
        session.workspace.id, services.config.user_id
    )
    if created:
        logger.info(f"✓ Created {created} default account(s)")
    else:
        logger.info("Workspace already has accounts; nothing seeded.")


def setup_parser(subparsers):
    """Setup accounts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "accounts",
        help="Manage accounts",
        description="Create, list and delete accounts of the current workspace",
    )

    accounts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    list_parser = accounts_subparsers.add_parser(
        "list", help="List accounts with balances"
    )
    list_parser.set_defaults(func=cmd_list)

    create_parser = accounts_subparsers.add_parser("create", help="Create an account")
    create_parser.add_argument("name", help="Account name, e.g. Wallet")
    create_parser.add_argument(
        "--type", choices=["cash", "bank"], default="cash", help="Account type"
    )
    create_parser.add_argument(
        "--initial-balance", default="0", help="Opening balance (default 0)"
    )
    create_parser.add_argument("--note", default="", help="Optional note")
    create_parser.set_defaults(func=cmd_create)

    delete_parser = accounts_subparsers.add_parser(
        "delete", help="Delete an account by ID"
    )
    delete_parser.add_argument("account_id", help="ID of the account to delete")
    delete_parser.add_argument(
        "--force",
        action="store_true",
        help="Delete even if transactions still reference the account",
    )
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = accounts_subparsers.add_parser(
        "seed", help="Create the default accounts in an empty workspace"
    )
    seed_parser.set_defaults(func=cmd_seed)
