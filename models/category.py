"""Category model for grouping transactions."""

from dataclasses import dataclass
from typing import Any, Optional

from models.fields import decode_timestamp

CATEGORY_TYPES = ("expense", "income")


@dataclass
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Store document id.
        workspace_id: Workspace the category belongs to.
        name: Display name; transactions reference categories by this name.
        type: "expense" or "income". Only transactions of the same type resolve
            to this category.
        icon: Symbolic icon identifier, e.g. "restaurant-outline".
        color: Display color token, e.g. "#e74c3c".
    """

    id: str
    workspace_id: str
    name: str
    type: str
    icon: str = "pricetag-outline"
    color: str = "#95a5a6"
    user_id: Optional[str] = None
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=data.get("id", ""),
            workspace_id=data.get("workspace_id", ""),
            name=data.get("name", ""),
            type=data.get("type", ""),
            icon=data.get("icon") or "pricetag-outline",
            color=data.get("color") or "#95a5a6",
            user_id=data.get("user_id"),
            created_at=decode_timestamp(data.get("created_at")),
            updated_at=decode_timestamp(data.get("updated_at")),
        )

    def to_dict(self) -> dict:
        return {
            "workspace_id": self.workspace_id,
            "name": self.name,
            "type": self.type,
            "icon": self.icon,
            "color": self.color,
            "user_id": self.user_id,
        }
