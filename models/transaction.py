from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from models.fields import (
    decode_timestamp,
    encode_decimal,
    encode_timestamp,
    parse_decimal,
)

TRANSACTION_TYPES = ("income", "expense")


@dataclass
class Transaction:
    id: str
    workspace_id: str
    type: str  # 'income' or 'expense'
    amount: Decimal  # magnitude, always positive when created through the service
    description: str
    category: str  # category name, not id
    account: str  # account name, not id
    date: Any  # date, datetime, ServerTimestamp, ISO string or None
    exclude_from_calculations: bool = False
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Any = None
    updated_at: Any = None

    @property
    def is_excluded(self) -> bool:
        return bool(self.exclude_from_calculations)

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Build a Transaction from a store document."""
        return cls(
            id=data.get("id", ""),
            workspace_id=data.get("workspace_id", ""),
            type=data.get("type", ""),
            amount=parse_decimal(data.get("amount")),
            description=data.get("description", "") or "",
            category=data.get("category", "") or "",
            account=data.get("account", "") or "",
            date=decode_timestamp(data.get("date")),
            exclude_from_calculations=bool(
                data.get("exclude_from_calculations", False)
            ),
            category_id=data.get("category_id"),
            account_id=data.get("account_id"),
            user_id=data.get("user_id"),
            created_at=decode_timestamp(data.get("created_at")),
            updated_at=decode_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict:
        """Convert transaction to a store document (id is the document key)."""
        return {
            "workspace_id": self.workspace_id,
            "type": self.type,
            "amount": encode_decimal(self.amount),
            "description": self.description,
            "category": self.category,
            "account": self.account,
            "date": encode_timestamp(self.date),
            "exclude_from_calculations": self.exclude_from_calculations,
            "category_id": self.category_id,
            "account_id": self.account_id,
            "user_id": self.user_id,
        }
