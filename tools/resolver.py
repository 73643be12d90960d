"""Resolution of transaction account/category references.

Transactions name their account and category rather than pointing at them by
id, and may carry a best-effort id as well. All lookups go through this module
so every caller resolves a reference the same way:

1. an id that still exists wins;
2. otherwise the first entity with a matching name (and, for categories, a
   matching type);
3. otherwise nothing, and display lookups fall back to fixed values.

When two accounts share a name the first one in the given order wins.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from models.account import Account
from models.category import Category

FALLBACK_CATEGORY_ICON = "pricetag-outline"
FALLBACK_ACCOUNT_ICON = "wallet-outline"
NEUTRAL_COLOR = "#95a5a6"

TYPE_COLORS = {
    "income": "#27ae60",
    "expense": "#e74c3c",
}

ACCOUNT_ICONS = {
    "cash": "cash-outline",
    "bank": "card-outline",
}

ACCOUNT_COLORS = {
    "cash": "#27ae60",
    "bank": "#3498db",
}


@dataclass(frozen=True)
class Display:
    """Presentation metadata for an account or category."""

    icon: str
    color: str


def resolve_account(
    name: Optional[str],
    accounts: Iterable[Account],
    account_id: Optional[str] = None,
) -> Optional[Account]:
    """Find the account a transaction refers to, or None if it is stale."""
    accounts = list(accounts)
    if account_id:
        for account in accounts:
            if account.id == account_id:
                return account
    if name is None:
        return None
    for account in accounts:
        if account.name == name:
            return account
    return None


def resolve_category(
    name: Optional[str],
    transaction_type: str,
    categories: Iterable[Category],
    category_id: Optional[str] = None,
) -> Optional[Category]:
    """Find the category a transaction refers to.

    The category's type must equal the transaction type; a same-named category
    of the other type does not match.
    """
    candidates = [c for c in categories if c.type == transaction_type]
    if category_id:
        for category in candidates:
            if category.id == category_id:
                return category
    if name is None:
        return None
    for category in candidates:
        if category.name == name:
            return category
    return None


def resolve_category_display(
    name: Optional[str],
    transaction_type: str,
    categories: Iterable[Category],
    category_id: Optional[str] = None,
) -> Display:
    """Icon and color for a transaction's category, with a per-type fallback."""
    fallback_color = TYPE_COLORS.get(transaction_type, NEUTRAL_COLOR)
    category = resolve_category(name, transaction_type, categories, category_id)
    if category is None:
        return Display(icon=FALLBACK_CATEGORY_ICON, color=fallback_color)
    return Display(
        icon=category.icon or FALLBACK_CATEGORY_ICON,
        color=category.color or fallback_color,
    )


def resolve_account_display(
    name: Optional[str],
    accounts: Iterable[Account],
    account_id: Optional[str] = None,
) -> Display:
    """Icon and color for a transaction's account."""
    account = resolve_account(name, accounts, account_id)
    if account is None:
        return Display(icon=FALLBACK_ACCOUNT_ICON, color=NEUTRAL_COLOR)
    return Display(
        icon=ACCOUNT_ICONS.get(account.type, FALLBACK_ACCOUNT_ICON),
        color=ACCOUNT_COLORS.get(account.type, NEUTRAL_COLOR),
    )
