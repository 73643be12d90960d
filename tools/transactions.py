"""Transaction analysis tools.

Combine the period filter, aggregation and chart tools into the summaries the
home, transactions and accounts views display.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from models.account import Account
from models.category import Category
from models.transaction import Transaction
from tools.aggregation import (
    account_balances,
    group_by_category_totals,
    top_categories,
    total_balance_across_accounts,
    total_by_type,
)
from tools.charts import build_daily_series
from tools.periods import filter_by_period, shift_month
from tools.quality import DataQualityReport
from tools.resolver import resolve_category_display


def get_month_summary(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    categories: Iterable[Category],
    year: int,
    month: int,
    top_limit: int = 5,
    report: Optional[DataQualityReport] = None,
) -> Dict:
    """Summarize one calendar month of a workspace.

    Args:
        transactions: The full ledger of the workspace.
        accounts: All accounts of the workspace.
        categories: All categories of the workspace.
        year: Calendar year.
        month: Calendar month (1-12).
        top_limit: Number of expense categories to list in the breakdown.
        report: Optional data-quality report.

    Returns:
        Dictionary with:
        - "income_total", "expense_total", "net": month figures (Decimal)
        - "expenses_by_category": Dict mapping category name to amount
        - "top_expense_categories": list of dicts with "category", "amount",
          "icon" and "color", largest first
        - "more_categories": how many expense categories were left out
        - "account_balances": list of (Account, Decimal) over the whole ledger
        - "total_balance": sum of account balances (Decimal)
        - "daily_series": DailySeries for the month
        - "transaction_count": number of counted transactions in the month

    Example:
        {
            "income_total": Decimal("500000"),
            "expense_total": Decimal("20000"),
            "net": Decimal("480000"),
            "expenses_by_category": {"Food": Decimal("20000")},
            "top_expense_categories": [
                {"category": "Food", "amount": Decimal("20000"),
                 "icon": "restaurant-outline", "color": "#e74c3c"},
            ],
            "more_categories": 0,
            ...
        }
    """
    ledger = list(transactions)
    accounts = list(accounts)
    categories = list(categories)
    in_month = filter_by_period(ledger, year, month, report=report)

    income_total = total_by_type(in_month, "income", report)
    expense_total = total_by_type(in_month, "expense", report)

    expenses_by_category = group_by_category_totals(in_month, "expense", report)
    top = top_categories(expenses_by_category, limit=top_limit)
    top_entries = []
    for entry in top.entries:
        display = resolve_category_display(entry.category, "expense", categories)
        top_entries.append(
            {
                "category": entry.category,
                "amount": entry.amount,
                "icon": display.icon,
                "color": display.color,
            }
        )

    # Account balances are all-time figures, not month figures
    balances = account_balances(accounts, ledger, report)

    return {
        "income_total": income_total,
        "expense_total": expense_total,
        "net": income_total - expense_total,
        "expenses_by_category": expenses_by_category,
        "top_expense_categories": top_entries,
        "more_categories": top.overflow,
        "account_balances": [(entry.account, entry.balance) for entry in balances],
        "total_balance": total_balance_across_accounts(accounts, ledger, report),
        "daily_series": build_daily_series(ledger, year, month, report),
        "transaction_count": len(in_month),
    }


def get_period_summary(
    transactions: Iterable[Transaction],
    start_month: date,
    end_month: date,
    report: Optional[DataQualityReport] = None,
) -> Dict[str, Dict[str, Decimal]]:
    """Get summarized transaction data for a range of months.

    Args:
        transactions: The full ledger of the workspace.
        start_month: Start of period (date object, day component ignored).
        end_month: End of period (date object, day component ignored).
        report: Optional data-quality report.

    Returns:
        Dictionary with month keys (format: "YYYY/MM"), in order, mapped to:
        - "income_total": Total income for the month (Decimal)
        - "expense_total": Total expenses for the month (Decimal)
        - "net": Net amount (income - expenses) (Decimal)
        - "expenses_by_category": Dict mapping category name to expense amount

        An empty dict when end_month is before start_month.
    """
    ledger: List[Transaction] = list(transactions)
    result = {}

    year, month = start_month.year, start_month.month
    while (year, month) <= (end_month.year, end_month.month):
        in_month = filter_by_period(ledger, year, month, report=report)
        income_total = total_by_type(in_month, "income", report)
        expense_total = total_by_type(in_month, "expense", report)

        result[f"{year:04d}/{month:02d}"] = {
            "income_total": income_total,
            "expense_total": expense_total,
            "net": income_total - expense_total,
            "expenses_by_category": group_by_category_totals(
                in_month, "expense", report
            ),
        }

        year, month = shift_month(year, month, 1)

    return result
