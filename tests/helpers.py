"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from itertools import count
from typing import Any, Optional

from models.account import Account
from models.category import Category
from models.transaction import Transaction

_ids = count(1)


def make_transaction(
    type: str = "expense",
    amount: Any = "10",
    category: str = "Food",
    account: str = "Wallet",
    day: Any = date(2024, 3, 15),
    excluded: bool = False,
    description: str = "",
    account_id: Optional[str] = None,
    category_id: Optional[str] = None,
) -> Transaction:
    """Build an in-memory transaction.

    ``amount`` is passed through unchanged when it is not a str or int, so
    tests can hand in malformed values.
    """
    if isinstance(amount, (str, int)):
        amount = Decimal(str(amount)) if _is_number(amount) else amount
    return Transaction(
        id=f"txn_{next(_ids)}",
        workspace_id="ws_test",
        type=type,
        amount=amount,
        description=description or f"{type} {amount}",
        category=category,
        account=account,
        date=day,
        exclude_from_calculations=excluded,
        account_id=account_id,
        category_id=category_id,
    )


def make_account(
    name: str = "Wallet",
    type: str = "cash",
    initial_balance: Any = "0",
    id: Optional[str] = None,
) -> Account:
    if isinstance(initial_balance, (str, int)) and _is_number(initial_balance):
        initial_balance = Decimal(str(initial_balance))
    return Account(
        id=id or f"acc_{next(_ids)}",
        workspace_id="ws_test",
        name=name,
        type=type,
        initial_balance=initial_balance,
    )


def make_category(
    name: str,
    type: str = "expense",
    icon: str = "pricetag-outline",
    color: str = "#95a5a6",
    id: Optional[str] = None,
) -> Category:
    return Category(
        id=id or f"cat_{next(_ids)}",
        workspace_id="ws_test",
        name=name,
        type=type,
        icon=icon,
        color=color,
    )


def _is_number(value: Any) -> bool:
    try:
        Decimal(str(value))
    except ArithmeticError:
        return False
    return True
