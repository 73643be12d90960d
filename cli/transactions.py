#!/usr/bin/env python3

import sys
from datetime import date
from cli.common import format_amount, open_session, parse_month
from logger import get_logger
from tools.periods import filter_by_period, normalize_date, sort_newest_first

logger = get_logger()


def cmd_add(args, services):
    """Record a transaction in the current workspace."""
    session = open_session(services)
    workspace_id = session.workspace.id

    try:
        when = date.fromisoformat(args.date) if args.date else date.today()
    except ValueError:
        logger.error(f"Invalid date '{args.date}'. Use YYYY-MM-DD.")
        sys.exit(1)

    account = services.accounts.find_by_name(workspace_id, args.account)
    if account is None:
        logger.warning(f"Account '{args.account}' does not exist in this workspace")
    category = services.categories.find_by_name(workspace_id, args.category, args.type)
    if category is None:
        logger.warning(
            f"No {args.type} category named '{args.category}' in this workspace"
        )

    try:
        transaction = services.transactions.create(
            workspace_id,
            services.config.user_id,
            args.type,
            args.amount,
            args.description,
            args.category,
            args.account,
            when,
            exclude_from_calculations=args.exclude,
            category_id=category.id if category else None,
            account_id=account.id if account else None,
        )
    except Exception as e:
        logger.error(f"Error recording transaction: {e}")
        sys.exit(1)

    logger.info(f"✓ Transaction recorded with ID: {transaction.id}")


def cmd_list(args, services):
    """List transactions, newest first."""
    session = open_session(services)
    currency = session.workspace.currency

    transactions = session.transactions
    if not args.all:
        try:
            year, month = parse_month(args.month)
        except ValueError:
            logger.error(f"Invalid month '{args.month}'. Use YYYY/MM.")
            sys.exit(1)
        transactions = filter_by_period(
            transactions, year, month, include_excluded=True
        )

    if not transactions:
        logger.info("No transactions found.")
        return

    for t in sort_newest_first(transactions):
        when = normalize_date(t.date)
        sign = "+" if t.type == "income" else "-"
        marker = " [excluded]" if t.is_excluded else ""
        logger.info(
            f"{when.isoformat() if when else '----------'}  "
            f"{sign}{format_amount(t.amount, currency):>16}  "
            f"{t.category:<16} {t.account:<12} {t.description}{marker}"
        )

    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_show(args, services):
    """Show a single transaction."""
    session = open_session(services)
    t = services.transactions.find(session.workspace.id, args.transaction_id)
    if not t:
        logger.error(f"Transaction with ID {args.transaction_id} not found.")
        sys.exit(1)

    logger.info(f"ID: {t.id}")
    logger.info(f"Type: {t.type}")
    logger.info(f"Amount: {format_amount(t.amount, session.workspace.currency)}")
    logger.info(f"Description: {t.description}")
    logger.info(f"Category: {t.category}")
    logger.info(f"Account: {t.account}")
    logger.info(f"Date: {normalize_date(t.date)}")
    logger.info(f"Excluded from calculations: {'yes' if t.is_excluded else 'no'}")


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    session = open_session(services)
    if services.transactions.delete(session.workspace.id, args.transaction_id):
        logger.info(f"✓ Transaction {args.transaction_id} deleted successfully.")
    else:
        logger.error(f"Transaction with ID {args.transaction_id} not found.")
        sys.exit(1)


def _set_excluded(args, services, excluded: bool):
    session = open_session(services)
    try:
        services.transactions.set_excluded(
            session.workspace.id, args.transaction_id, excluded
        )
    except Exception as e:
        logger.error(f"Error updating transaction: {e}")
        sys.exit(1)

    state = "excluded from" if excluded else "included in"
    logger.info(f"✓ Transaction {args.transaction_id} is now {state} calculations")


def cmd_exclude(args, services):
    """Exclude a transaction from all totals."""
    _set_excluded(args, services, True)


def cmd_include(args, services):
    """Count a previously excluded transaction again."""
    _set_excluded(args, services, False)


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and manage transactions",
        description="Record, list and manage transactions of the current workspace",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    add_parser = transactions_subparsers.add_parser("add", help="Record a transaction")
    add_parser.add_argument("type", choices=["income", "expense"])
    add_parser.add_argument("amount", help="Positive amount, e.g. 12.50")
    add_parser.add_argument("description", help="What the transaction was for")
    add_parser.add_argument("--category", required=True, help="Category name")
    add_parser.add_argument("--account", required=True, help="Account name")
    add_parser.add_argument(
        "--date", default=None, help="Date as YYYY-MM-DD (default today)"
    )
    add_parser.add_argument(
        "--exclude",
        action="store_true",
        help="Keep the transaction out of all totals",
    )
    add_parser.set_defaults(func=cmd_add)

    list_parser = transactions_subparsers.add_parser(
        "list", help="List transactions, newest first"
    )
    list_parser.add_argument(
        "--month", default=None, help="Month as YYYY/MM (default current month)"
    )
    list_parser.add_argument(
        "--all", action="store_true", help="List the whole ledger"
    )
    list_parser.set_defaults(func=cmd_list)

    show_parser = transactions_subparsers.add_parser(
        "show", help="Show a transaction by ID"
    )
    show_parser.add_argument("transaction_id")
    show_parser.set_defaults(func=cmd_show)

    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument("transaction_id")
    delete_parser.set_defaults(func=cmd_delete)

    exclude_parser = transactions_subparsers.add_parser(
        "exclude", help="Exclude a transaction from calculations"
    )
    exclude_parser.add_argument("transaction_id")
    exclude_parser.set_defaults(func=cmd_exclude)

    include_parser = transactions_subparsers.add_parser(
        "include", help="Include an excluded transaction again"
    )
    include_parser.add_argument("transaction_id")
    include_parser.set_defaults(func=cmd_include)
