"""Calendar-month selection of transactions."""

from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Tuple

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from models.transaction import Transaction
from tools.quality import (
    INVALID_DATE,
    MISSING_DATE,
    DataQualityReport,
    record_issue,
)


def normalize_date(value: Any) -> Optional[date]:
    """Reduce a stored date value to a plain calendar date.

    Accepts ``date``, ``datetime``, wrapped server timestamps (anything with
    ``to_datetime()`` or ``to_date()``), ISO 8601 strings and epoch seconds.
    Aware datetimes are converted to local time first, since the calendar day
    a transaction belongs to is the day the user saw on their device.

    Returns:
        The calendar date, or None when the value is missing or unreadable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value

    for method_name in ("to_datetime", "to_date"):
        method = getattr(value, method_name, None)
        if callable(method):
            try:
                return normalize_date(method())
            except (TypeError, ValueError, OverflowError, OSError):
                return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value).date()
        except (ValueError, OverflowError, OSError):
            return None
    if isinstance(value, str):
        try:
            return normalize_date(isoparse(value.strip()))
        except ValueError:
            return None
    return None


def check_month(year: int, month: int) -> None:
    """Raise ValueError unless (year, month) names a calendar month (1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    if not date.min.year <= year <= date.max.year:
        raise ValueError(f"Year out of range: {year}")


def transaction_date(
    transaction: Transaction, report: Optional[DataQualityReport] = None
) -> Optional[date]:
    """Normalized date of a transaction, reporting missing or unreadable values."""
    if transaction.date is None:
        record_issue(report, MISSING_DATE, transaction, "no date")
        return None
    normalized = normalize_date(transaction.date)
    if normalized is None:
        record_issue(report, INVALID_DATE, transaction, f"date={transaction.date!r}")
    return normalized


def filter_by_period(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    include_excluded: bool = False,
    report: Optional[DataQualityReport] = None,
) -> List[Transaction]:
    """Select the transactions dated within one calendar month.

    Args:
        transactions: Any iterable of transactions; not modified.
        year: Calendar year, e.g. 2025.
        month: Calendar month, 1-12.
        include_excluded: Keep transactions flagged ``exclude_from_calculations``.
            Every aggregation leaves this False.
        report: Optional report receiving missing/invalid date issues. Such
            transactions are never counted as belonging to the month.

    Returns:
        Matching transactions, in input order.

    Raises:
        ValueError: If month is not 1-12.
    """
    check_month(year, month)
    selected = []
    for transaction in transactions:
        if transaction.exclude_from_calculations and not include_excluded:
            continue
        day = transaction_date(transaction, report)
        if day is not None and day.year == year and day.month == month:
            selected.append(transaction)
    return selected


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` calendar months from (year, month).

    >>> shift_month(2024, 1, -1)
    (2023, 12)
    """
    check_month(year, month)
    shifted = date(year, month, 1) + relativedelta(months=delta)
    return shifted.year, shifted.month


def sort_newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Order transactions for raw listings: newest date first, undated last."""
    return sorted(
        transactions,
        key=lambda t: normalize_date(t.date) or date.min,
        reverse=True,
    )
