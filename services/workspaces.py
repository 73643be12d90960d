"""Workspace service for store operations."""

from typing import List, Optional

from models.workspace import Workspace
from store.base import WORKSPACES


class WorkspaceService:
    """Service for managing workspaces."""

    def __init__(self, store, default_currency: str = "USD"):
        """Initialize the workspace service.

        Args:
            store: Document store instance.
            default_currency: Currency for workspaces created without one.
        """
        self.store = store
        self.default_currency = default_currency

    def find_for_user(self, user_id: str) -> List[Workspace]:
        """Get the workspaces owned by a user, in creation order."""
        return [
            Workspace.from_dict(doc)
            for doc in self.store.list(None, WORKSPACES)
            if doc.get("user_id") == user_id
        ]

    def find(self, workspace_id: str) -> Optional[Workspace]:
        """Get a workspace by ID, or None if not found."""
        doc = self.store.get(None, WORKSPACES, workspace_id)
        return Workspace.from_dict(doc) if doc else None

    def create(
        self, user_id: str, name: str, currency: Optional[str] = None
    ) -> Workspace:
        """Create a workspace owned by ``user_id``.

        Raises:
            ValueError: If user_id or name is empty.
            WriteRejectedError: If the store rejects the write.
        """
        if not user_id:
            raise ValueError("No authenticated user")
        name = (name or "").strip()
        if not name:
            raise ValueError("Workspace name cannot be empty")

        workspace = Workspace(
            id="",
            name=name,
            currency=currency or self.default_currency,
            user_id=user_id,
        )
        doc = self.store.create(None, WORKSPACES, workspace.to_dict())
        return Workspace.from_dict(doc)
