"""Workspace model: the tenant that scopes accounts, categories and transactions."""

from dataclasses import dataclass
from typing import Any

from models.fields import decode_timestamp


@dataclass
class Workspace:
    """Represents one user's workspace.

    Attributes:
        id: Store document id (``<user_id>_<millis>``).
        name: Display name.
        currency: Currency code used for display only.
        user_id: Owner identity.
        is_active: Whether the workspace is in use.
    """

    id: str
    name: str
    currency: str
    user_id: str
    is_active: bool = True
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "Workspace":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            currency=data.get("currency", "USD"),
            user_id=data.get("user_id", ""),
            is_active=bool(data.get("is_active", True)),
            created_at=decode_timestamp(data.get("created_at")),
            updated_at=decode_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "currency": self.currency,
            "user_id": self.user_id,
            "is_active": self.is_active,
        }
