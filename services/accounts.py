"""Account service for store operations."""

from decimal import Decimal
from typing import List, Optional

from logger import get_logger
from models.account import ACCOUNT_TYPES, Account
from models.fields import encode_decimal, parse_decimal
from services.defaults import load_defaults
from store.base import ACCOUNTS, TRANSACTIONS

logger = get_logger()

_UPDATABLE_FIELDS = {"name", "type", "initial_balance", "note"}


class AccountInUseError(ValueError):
    """Raised when deleting an account that transactions still reference."""

    def __init__(self, account: Account, count: int):
        super().__init__(
            f"Account '{account.name}' has {count} transaction(s). "
            "Delete or move these transactions first."
        )
        self.account = account
        self.count = count


class AccountService:
    """Service for managing the accounts of a workspace."""

    def __init__(self, store):
        """Initialize the account service.

        Args:
            store: Document store instance.
        """
        self.store = store

    def find_all(self, workspace_id: str) -> List[Account]:
        """Get all accounts of a workspace, in creation order."""
        return [Account.from_dict(doc) for doc in self.store.list(workspace_id, ACCOUNTS)]

    def find(self, workspace_id: str, account_id: str) -> Optional[Account]:
        """Get a single account by ID, or None if not found."""
        doc = self.store.get(workspace_id, ACCOUNTS, account_id)
        return Account.from_dict(doc) if doc else None

    def find_by_name(self, workspace_id: str, name: str) -> Optional[Account]:
        """Get the first account with the given name, or None.

        Names are not unique at the storage layer; the earliest created account
        wins, matching how transaction references are resolved.
        """
        for account in self.find_all(workspace_id):
            if account.name == name:
                return account
        return None

    def create(
        self,
        workspace_id: str,
        user_id: str,
        name: str,
        account_type: str,
        initial_balance=Decimal("0"),
        note: str = "",
    ) -> Account:
        """Create a new account.

        Args:
            workspace_id: Workspace to create the account in.
            user_id: Identity stamped on the record.
            name: Display name. Transactions link to the account by this name.
            account_type: "cash" or "bank".
            initial_balance: Opening balance (number or numeric string).
            note: Optional free text.

        Returns:
            The created Account with its id populated.

        Raises:
            ValueError: If the name is empty, the type unknown or the initial
                balance not numeric.
            WriteRejectedError: If the store rejects the write.
        """
        account = Account(
            id="",
            workspace_id=workspace_id,
            name=_clean_name(name),
            type=_check_type(account_type),
            initial_balance=_check_balance(initial_balance),
            note=note or "",
            user_id=user_id,
        )
        doc = self.store.create(workspace_id, ACCOUNTS, account.to_dict())
        return Account.from_dict(doc)

    def update(self, workspace_id: str, account_id: str, **fields) -> Account:
        """Update fields of an existing account.

        Supported fields: name, type, initial_balance, note. Renaming does not
        touch transactions that reference the old name.

        Raises:
            ValueError: If unsupported or invalid fields are provided.
            WriteRejectedError: If the account does not exist.
        """
        invalid_fields = set(fields) - _UPDATABLE_FIELDS
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        patch = dict(fields)
        if "name" in patch:
            patch["name"] = _clean_name(patch["name"])
        if "type" in patch:
            patch["type"] = _check_type(patch["type"])
        if "initial_balance" in patch:
            patch["initial_balance"] = encode_decimal(
                _check_balance(patch["initial_balance"])
            )

        self.store.update(workspace_id, ACCOUNTS, account_id, patch)
        return self.find(workspace_id, account_id)

    def delete(self, workspace_id: str, account_id: str, force: bool = False) -> bool:
        """Delete an account by ID.

        Transactions referencing the account are never modified. Unless
        ``force`` is set, deletion is refused while any exist.

        Returns:
            True if the account was deleted, False if not found.

        Raises:
            AccountInUseError: If transactions reference the account and
                ``force`` is False.
        """
        account = self.find(workspace_id, account_id)
        if account is None:
            return False

        if not force:
            count = sum(
                1
                for doc in self.store.list(workspace_id, TRANSACTIONS)
                if doc.get("account") == account.name
                or doc.get("account_id") == account.id
            )
            if count:
                raise AccountInUseError(account, count)

        return self.store.delete(workspace_id, ACCOUNTS, account_id)

    def ensure_defaults(self, workspace_id: str, user_id: str) -> int:
        """Seed the default accounts into a workspace that has none.

        Safe to call repeatedly and concurrently: defaults use fixed document
        ids and are only inserted when absent, so they are never duplicated.

        Returns:
            Number of accounts created.
        """
        if self.store.list(workspace_id, ACCOUNTS):
            return 0

        created = 0
        for default in load_defaults(ACCOUNTS):
            account = Account(
                id="",
                workspace_id=workspace_id,
                name=default["name"],
                type=default["type"],
                initial_balance=parse_decimal(
                    default.get("initial_balance"), default=Decimal("0")
                ),
                note=default.get("note", ""),
                user_id=user_id,
            )
            doc = self.store.create(
                workspace_id,
                ACCOUNTS,
                account.to_dict(),
                doc_id=f"acc_default_{default['key']}",
                if_absent=True,
            )
            if doc is not None:
                created += 1

        logger.info(f"Seeded {created} default account(s) in workspace {workspace_id}")
        return created


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Account name cannot be empty")
    return name


def _check_type(account_type: str) -> str:
    if account_type not in ACCOUNT_TYPES:
        raise ValueError(
            f"Invalid account type '{account_type}'. Must be one of: {', '.join(ACCOUNT_TYPES)}"
        )
    return account_type


def _check_balance(value) -> Decimal:
    balance = parse_decimal(value)
    if not balance.is_finite():
        raise ValueError(f"Invalid initial balance: {value!r}")
    return balance
