"""Category service for store operations."""

from typing import List, Optional

from logger import get_logger
from models.category import CATEGORY_TYPES, Category
from services.defaults import load_defaults
from store.base import CATEGORIES

logger = get_logger()

_UPDATABLE_FIELDS = {"name", "type", "icon", "color"}


class CategoryService:
    """Service for managing the categories of a workspace."""

    def __init__(self, store):
        """Initialize the category service.

        Args:
            store: Document store instance.
        """
        self.store = store

    def find_all(
        self, workspace_id: str, category_type: Optional[str] = None
    ) -> List[Category]:
        """Get all categories of a workspace.

        Args:
            workspace_id: Workspace to read.
            category_type: Optional "expense" or "income" filter.

        Returns:
            List of Category objects, in creation order.
        """
        categories = [
            Category.from_dict(doc) for doc in self.store.list(workspace_id, CATEGORIES)
        ]
        if category_type is not None:
            categories = [c for c in categories if c.type == category_type]
        return categories

    def find(self, workspace_id: str, category_id: str) -> Optional[Category]:
        """Get a single category by ID, or None if not found."""
        doc = self.store.get(workspace_id, CATEGORIES, category_id)
        return Category.from_dict(doc) if doc else None

    def find_by_name(
        self, workspace_id: str, name: str, category_type: str
    ) -> Optional[Category]:
        """Get the first category with the given name and type, or None."""
        for category in self.find_all(workspace_id, category_type):
            if category.name == name:
                return category
        return None

    def create(
        self,
        workspace_id: str,
        user_id: str,
        name: str,
        category_type: str,
        icon: str = "pricetag-outline",
        color: str = "#95a5a6",
    ) -> Category:
        """Create a new category.

        Returns:
            The created Category object with id populated.

        Raises:
            ValueError: If the name is empty or the type unknown.
            WriteRejectedError: If the store rejects the write.
        """
        category = Category(
            id="",
            workspace_id=workspace_id,
            name=_clean_name(name),
            type=_check_type(category_type),
            icon=icon,
            color=color,
            user_id=user_id,
        )
        doc = self.store.create(workspace_id, CATEGORIES, category.to_dict())
        return Category.from_dict(doc)

    def update(self, workspace_id: str, category_id: str, **fields) -> Category:
        """Update an existing category.

        Supported fields: name, type, icon, color. Transactions keep the name
        they were recorded with, so a rename leaves them pointing at the old
        name.

        Raises:
            ValueError: If unsupported or invalid fields are provided.
            WriteRejectedError: If the category does not exist.
        """
        invalid_fields = set(fields) - _UPDATABLE_FIELDS
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        patch = dict(fields)
        if "name" in patch:
            patch["name"] = _clean_name(patch["name"])
        if "type" in patch:
            patch["type"] = _check_type(patch["type"])

        self.store.update(workspace_id, CATEGORIES, category_id, patch)
        return self.find(workspace_id, category_id)

    def delete(self, workspace_id: str, category_id: str) -> bool:
        """Delete a category by ID.

        Returns:
            True if category was deleted, False if not found.
        """
        return self.store.delete(workspace_id, CATEGORIES, category_id)

    def ensure_defaults(self, workspace_id: str, user_id: str) -> int:
        """Seed the default expense and income categories into an empty workspace.

        Idempotent in the same way as ``AccountService.ensure_defaults``.

        Returns:
            Number of categories created.
        """
        if self.store.list(workspace_id, CATEGORIES):
            return 0

        created = 0
        for default in load_defaults(CATEGORIES):
            category = Category(
                id="",
                workspace_id=workspace_id,
                name=default["name"],
                type=default["type"],
                icon=default["icon"],
                color=default["color"],
                user_id=user_id,
            )
            doc = self.store.create(
                workspace_id,
                CATEGORIES,
                category.to_dict(),
                doc_id=f"cat_default_{default['key']}",
                if_absent=True,
            )
            if doc is not None:
                created += 1

        logger.info(f"Seeded {created} default categories in workspace {workspace_id}")
        return created


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Please enter a category name")
    return name


def _check_type(category_type: str) -> str:
    if category_type not in CATEGORY_TYPES:
        raise ValueError(
            f"Invalid category type '{category_type}'. Must be one of: {', '.join(CATEGORY_TYPES)}"
        )
    return category_type
