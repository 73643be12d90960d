"""Daily income/expense series for the monthly chart."""

import calendar
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from models.transaction import Transaction
from tools.aggregation import ZERO, contribution
from tools.periods import check_month, filter_by_period, normalize_date
from tools.quality import UNKNOWN_TYPE, DataQualityReport, record_issue


@dataclass(frozen=True)
class Point:
    day: int
    value: Decimal


@dataclass(frozen=True)
class DailySeries:
    """One point per calendar day for each of income and expense."""

    income_points: List[Point]
    expense_points: List[Point]

    def to_dict(self) -> dict:
        return {
            "income": [(p.day, p.value) for p in self.income_points],
            "expense": [(p.day, p.value) for p in self.expense_points],
        }


def days_in_month(year: int, month: int) -> int:
    check_month(year, month)
    return calendar.monthrange(year, month)[1]


def build_daily_series(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    report: Optional[DataQualityReport] = None,
) -> DailySeries:
    """Bucket a month's transactions into per-day income and expense sums.

    Every day of the month gets a point, zero on days without activity.
    Transactions outside the month, undated ones and excluded ones are ignored.

    Raises:
        ValueError: If month is not 1-12.
    """
    num_days = days_in_month(year, month)
    income = [ZERO] * (num_days + 1)
    expense = [ZERO] * (num_days + 1)

    for transaction in filter_by_period(transactions, year, month, report=report):
        day = normalize_date(transaction.date).day
        if transaction.type == "income":
            income[day] += contribution(transaction, report)
        elif transaction.type == "expense":
            expense[day] += contribution(transaction, report)
        else:
            record_issue(report, UNKNOWN_TYPE, transaction, f"type={transaction.type!r}")

    days = range(1, num_days + 1)
    return DailySeries(
        income_points=[Point(day=d, value=income[d]) for d in days],
        expense_points=[Point(day=d, value=expense[d]) for d in days],
    )
