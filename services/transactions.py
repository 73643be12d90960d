"""Transaction service for store operations."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from models.fields import encode_decimal, encode_timestamp, parse_decimal
from models.transaction import TRANSACTION_TYPES, Transaction
from store.base import TRANSACTIONS

_UPDATABLE_FIELDS = {
    "type",
    "amount",
    "description",
    "category",
    "account",
    "date",
    "exclude_from_calculations",
    "category_id",
    "account_id",
}


class TransactionService:
    """Service for managing the transactions of a workspace."""

    def __init__(self, store):
        """Initialize the transaction service.

        Args:
            store: Document store instance.
        """
        self.store = store

    def create(
        self,
        workspace_id: str,
        user_id: str,
        type: str,
        amount,
        description: str,
        category: str,
        account: str,
        date: Any,
        exclude_from_calculations: bool = False,
        category_id: Optional[str] = None,
        account_id: Optional[str] = None,
    ) -> Transaction:
        """Record a transaction.

        Args:
            workspace_id: Workspace to record in.
            user_id: Identity stamped on the record.
            type: "income" or "expense".
            amount: Positive magnitude (number or numeric string).
            description: Free text label.
            category: Category name.
            account: Account name.
            date: date or datetime of the transaction.
            exclude_from_calculations: Keep the record out of all totals.
            category_id: Optional id of the category, kept alongside the name.
            account_id: Optional id of the account, kept alongside the name.

        Returns:
            The created Transaction with id populated.

        Raises:
            ValueError: If a required field is missing or the amount is not a
                positive number.
            WriteRejectedError: If the store rejects the write.
        """
        transaction = Transaction(
            id="",
            workspace_id=workspace_id,
            type=_check_type(type),
            amount=_check_amount(amount),
            description=_required("description", description),
            category=_required("category", category),
            account=_required("account", account),
            date=_check_date(date),
            exclude_from_calculations=bool(exclude_from_calculations),
            category_id=category_id,
            account_id=account_id,
            user_id=user_id,
        )
        doc = self.store.create(workspace_id, TRANSACTIONS, transaction.to_dict())
        return Transaction.from_dict(doc)

    def update(self, workspace_id: str, transaction_id: str, **fields) -> Transaction:
        """Update fields of a single transaction.

        Supported fields: type, amount, description, category, account, date,
        exclude_from_calculations, category_id, account_id.

        Returns:
            The updated Transaction.

        Raises:
            ValueError: If unsupported or invalid fields are provided.
            WriteRejectedError: If the transaction does not exist.
        """
        if not fields:
            raise ValueError("No fields to update")

        invalid_fields = set(fields) - _UPDATABLE_FIELDS
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        patch = dict(fields)
        if "type" in patch:
            patch["type"] = _check_type(patch["type"])
        if "amount" in patch:
            patch["amount"] = encode_decimal(_check_amount(patch["amount"]))
        if "date" in patch:
            patch["date"] = encode_timestamp(_check_date(patch["date"]))
        for field in ("description", "category", "account"):
            if field in patch:
                patch[field] = _required(field, patch[field])
        if "exclude_from_calculations" in patch:
            patch["exclude_from_calculations"] = bool(patch["exclude_from_calculations"])

        self.store.update(workspace_id, TRANSACTIONS, transaction_id, patch)
        return self.find(workspace_id, transaction_id)

    def set_excluded(
        self, workspace_id: str, transaction_id: str, excluded: bool = True
    ) -> Transaction:
        """Flag or unflag a transaction as excluded from calculations."""
        return self.update(
            workspace_id, transaction_id, exclude_from_calculations=excluded
        )

    def delete(self, workspace_id: str, transaction_id: str) -> bool:
        """Delete a transaction.

        Returns:
            True if deleted, False if not found.
        """
        return self.store.delete(workspace_id, TRANSACTIONS, transaction_id)

    def find(self, workspace_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID, including excluded ones."""
        doc = self.store.get(workspace_id, TRANSACTIONS, transaction_id)
        return Transaction.from_dict(doc) if doc else None

    def find_all(self, workspace_id: str) -> List[Transaction]:
        """Get the whole ledger of a workspace, excluded transactions included."""
        return [
            Transaction.from_dict(doc)
            for doc in self.store.list(workspace_id, TRANSACTIONS)
        ]

    def find_by_account(self, workspace_id: str, account_name: str) -> List[Transaction]:
        """Get transactions recorded against an account name."""
        return [t for t in self.find_all(workspace_id) if t.account == account_name]

    def find_by_category(self, workspace_id: str, category_name: str) -> List[Transaction]:
        """Get transactions recorded against a category name."""
        return [t for t in self.find_all(workspace_id) if t.category == category_name]


def _check_type(transaction_type: str) -> str:
    if transaction_type not in TRANSACTION_TYPES:
        raise ValueError(
            f"Invalid transaction type '{transaction_type}'. Must be one of: {', '.join(TRANSACTION_TYPES)}"
        )
    return transaction_type


def _check_amount(value) -> Decimal:
    amount = parse_decimal(value)
    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Please enter a valid amount (got {value!r})")
    return amount


def _check_date(value):
    if not isinstance(value, (date, datetime)):
        raise ValueError(f"Transaction date must be a date or datetime, got {value!r}")
    return value


def _required(field: str, value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"Transaction {field} cannot be empty")
    return value
