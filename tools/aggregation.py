"""Ledger aggregation: totals, balances and category breakdowns.

All functions are pure and total. A transaction contributes nothing when it is
flagged ``exclude_from_calculations``, and contributes zero (with an issue
recorded on the optional report) when its amount or type is malformed.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from models.account import Account
from models.transaction import TRANSACTION_TYPES, Transaction
from tools.quality import (
    INVALID_AMOUNT,
    INVALID_INITIAL_BALANCE,
    NEGATIVE_AMOUNT,
    UNKNOWN_TYPE,
    DataQualityReport,
    record_issue,
)
from tools.resolver import resolve_account

ZERO = Decimal("0")


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: Decimal


@dataclass(frozen=True)
class TopCategories:
    """The largest categories plus how many were left out."""

    entries: List[CategoryTotal]
    overflow: int


@dataclass(frozen=True)
class AccountBalance:
    account: Account
    balance: Decimal


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a number to a finite Decimal, or None if that is not possible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not number.is_finite():
        return None
    return number


def contribution(
    transaction: Transaction, report: Optional[DataQualityReport] = None
) -> Decimal:
    """The non-negative amount a transaction adds to its type's total."""
    amount = to_decimal(transaction.amount)
    if amount is None:
        record_issue(report, INVALID_AMOUNT, transaction, f"amount={transaction.amount!r}")
        return ZERO
    if amount < 0:
        record_issue(report, NEGATIVE_AMOUNT, transaction, f"amount={amount}")
        return ZERO
    return amount


def signed_amount(
    transaction: Transaction, report: Optional[DataQualityReport] = None
) -> Decimal:
    """Contribution signed by type: positive for income, negative for expense."""
    if transaction.type == "income":
        return contribution(transaction, report)
    if transaction.type == "expense":
        return -contribution(transaction, report)
    record_issue(report, UNKNOWN_TYPE, transaction, f"type={transaction.type!r}")
    return ZERO


def _counted(transactions: Iterable[Transaction]) -> Iterable[Transaction]:
    return (t for t in transactions if not t.exclude_from_calculations)


def total_by_type(
    transactions: Iterable[Transaction],
    transaction_type: str,
    report: Optional[DataQualityReport] = None,
) -> Decimal:
    """Sum of amounts of one type ("income" or "expense"). Zero when empty."""
    total = ZERO
    for transaction in _counted(transactions):
        if transaction.type not in TRANSACTION_TYPES:
            record_issue(report, UNKNOWN_TYPE, transaction, f"type={transaction.type!r}")
            continue
        if transaction.type == transaction_type:
            total += contribution(transaction, report)
    return total


def balance(
    transactions: Iterable[Transaction], report: Optional[DataQualityReport] = None
) -> Decimal:
    """Net saving: income total minus expense total."""
    transactions = list(transactions)
    return total_by_type(transactions, "income", report) - total_by_type(
        transactions, "expense", report
    )


def _initial_balance(account: Account, report: Optional[DataQualityReport]) -> Decimal:
    value = to_decimal(account.initial_balance)
    if value is None:
        record_issue(
            report,
            INVALID_INITIAL_BALANCE,
            account,
            f"initial_balance={account.initial_balance!r}",
        )
        return ZERO
    return value


def _same_account(a: Account, b: Account) -> bool:
    return a is b or (bool(a.id) and a.id == b.id)


def account_balance(
    account: Account,
    transactions: Iterable[Transaction],
    accounts: Optional[Iterable[Account]] = None,
    report: Optional[DataQualityReport] = None,
) -> Decimal:
    """Initial balance plus the signed amounts of the account's transactions.

    A transaction belongs to ``account`` when its reference resolves to it.
    Pass the workspace's ``accounts`` to resolve against all of them, so a
    transaction is attributed to exactly one account even when names repeat.
    Without it the reference is resolved against ``account`` alone, which for
    name-only references means a plain name match. Accounts are matched by id,
    so a copy of an account fetched separately gets the same balance.
    """
    candidates = list(accounts) if accounts is not None else []
    if not any(_same_account(candidate, account) for candidate in candidates):
        candidates.append(account)

    total = _initial_balance(account, report)
    for transaction in _counted(transactions):
        owner = resolve_account(transaction.account, candidates, transaction.account_id)
        if owner is not None and _same_account(owner, account):
            total += signed_amount(transaction, report)
    return total


def account_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    report: Optional[DataQualityReport] = None,
) -> List[AccountBalance]:
    """Balance of every account, in the given account order."""
    accounts = list(accounts)
    transactions = list(transactions)
    return [
        AccountBalance(account, account_balance(account, transactions, accounts, report))
        for account in accounts
    ]


def total_balance_across_accounts(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    report: Optional[DataQualityReport] = None,
) -> Decimal:
    """Sum of all account balances.

    Transactions whose account reference no longer resolves are not part of any
    account and so are not part of this figure.
    """
    return sum(
        (entry.balance for entry in account_balances(accounts, transactions, report)),
        ZERO,
    )


def matched_transactions(
    transactions: Iterable[Transaction], accounts: Iterable[Account]
) -> List[Transaction]:
    """Transactions whose account reference resolves to one of ``accounts``."""
    accounts = list(accounts)
    return [
        t
        for t in transactions
        if resolve_account(t.account, accounts, t.account_id) is not None
    ]


def group_by_category_totals(
    transactions: Iterable[Transaction],
    transaction_type: str,
    report: Optional[DataQualityReport] = None,
) -> Dict[str, Decimal]:
    """Totals of one type keyed by the category name found on each transaction.

    Names are used verbatim, including names of deleted categories and the
    empty string. Keys appear in first-encounter order.
    """
    totals: Dict[str, Decimal] = {}
    for transaction in _counted(transactions):
        if transaction.type != transaction_type:
            continue
        name = transaction.category if transaction.category is not None else ""
        totals[name] = totals.get(name, ZERO) + contribution(transaction, report)
    return totals


def top_categories(
    category_totals: Mapping[str, Decimal], limit: int = 5
) -> TopCategories:
    """Largest categories first, at most ``limit`` of them.

    Equal amounts keep their order in ``category_totals``. Categories beyond the
    limit are only counted in ``overflow``; they are not merged into an extra
    entry.
    """
    limit = max(int(limit), 0)
    ranked = sorted(
        category_totals.items(),
        key=lambda item: to_decimal(item[1]) or ZERO,
        reverse=True,
    )
    entries = [CategoryTotal(category=name, amount=amount) for name, amount in ranked[:limit]]
    return TopCategories(entries=entries, overflow=len(ranked) - len(entries))
