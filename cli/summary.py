#!/usr/bin/env python3

import sys
from cli.common import format_amount, open_session, parse_month
from logger import get_logger
from tools.quality import DataQualityReport

logger = get_logger()

BAR_WIDTH = 40


def cmd_summary(args, services):
    """Show the month overview of the current workspace."""
    try:
        year, month = parse_month(args.month)
    except ValueError:
        logger.error(f"Invalid month '{args.month}'. Use YYYY/MM.")
        sys.exit(1)

    session = open_session(services)
    currency = session.workspace.currency
    report = DataQualityReport()
    summary = session.month_summary(year, month, report)

    logger.info(f"\n{session.workspace.name}: {year:04d}/{month:02d}")
    logger.info("=" * 80)
    logger.info(f"Income:   {format_amount(summary['income_total'], currency)}")
    logger.info(f"Expenses: {format_amount(summary['expense_total'], currency)}")
    logger.info(f"Net:      {format_amount(summary['net'], currency)}")
    logger.info(f"Transactions: {summary['transaction_count']}")

    logger.info("\nTop expense categories:")
    if not summary["top_expense_categories"]:
        logger.info("  (none)")
    for entry in summary["top_expense_categories"]:
        logger.info(
            f"  {entry['category']:<20} {format_amount(entry['amount'], currency)}"
        )
    if summary["more_categories"]:
        logger.info(f"  +{summary['more_categories']} more categories")

    logger.info("\nAccounts:")
    for account, balance in summary["account_balances"]:
        logger.info(f"  {account.name:<20} {format_amount(balance, currency)}")
    logger.info(f"  {'Total':<20} {format_amount(summary['total_balance'], currency)}")

    if args.chart:
        _print_chart(summary["daily_series"])

    if report.count():
        logger.warning(f"Data quality issues: {report.summary()}")


def _print_chart(series):
    peak = max(
        [p.value for p in series.income_points] + [p.value for p in series.expense_points]
    )
    logger.info("\nDaily income (+) and expenses (-):")
    for income, expense in zip(series.income_points, series.expense_points):
        if not income.value and not expense.value:
            continue
        plus = int(BAR_WIDTH * income.value / peak) if peak else 0
        minus = int(BAR_WIDTH * expense.value / peak) if peak else 0
        logger.info(f"  {income.day:>2} {'+' * plus}{'-' * minus}")


def setup_parser(subparsers):
    """Setup summary subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "summary",
        help="Month overview",
        description="Income, expenses, top categories and balances for one month",
    )
    parser.add_argument(
        "--month", default=None, help="Month as YYYY/MM (default current month)"
    )
    parser.add_argument(
        "--chart", action="store_true", help="Also print the daily chart"
    )
    parser.set_defaults(func=cmd_summary)
