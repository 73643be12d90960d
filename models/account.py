from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from models.fields import decode_timestamp, encode_decimal, parse_decimal

ACCOUNT_TYPES = ("cash", "bank")


@dataclass
class Account:
    id: str
    workspace_id: str
    name: str  # display name, also the key transactions link by
    type: str  # 'cash' or 'bank'
    initial_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    note: str = ""
    user_id: Optional[str] = None
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        """Build an Account from a store document."""
        return cls(
            id=data.get("id", ""),
            workspace_id=data.get("workspace_id", ""),
            name=data.get("name", ""),
            type=data.get("type", ""),
            initial_balance=_initial_balance(data.get("initial_balance")),
            note=data.get("note", "") or "",
            user_id=data.get("user_id"),
            created_at=decode_timestamp(data.get("created_at")),
            updated_at=decode_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict:
        """Convert account to a store document."""
        return {
            "workspace_id": self.workspace_id,
            "name": self.name,
            "type": self.type,
            "initial_balance": encode_decimal(self.initial_balance),
            "note": self.note,
            "user_id": self.user_id,
        }


def _initial_balance(value: Any) -> Decimal:
    # Missing means no opening balance; anything unparsable stays NaN so the
    # aggregation tools report it
    if value is None:
        return Decimal("0")
    return parse_decimal(value)
