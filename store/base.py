"""Document store interface used by the services and the ledger session.

The store is the only component that performs I/O. It keeps one collection per
(workspace, kind) and pushes the complete current collection to subscribers
after every acknowledged write.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

WORKSPACES = "workspaces"
ACCOUNTS = "accounts"
CATEGORIES = "categories"
TRANSACTIONS = "transactions"

KINDS = (WORKSPACES, ACCOUNTS, CATEGORIES, TRANSACTIONS)

SnapshotCallback = Callable[[List[dict]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class StoreError(Exception):
    """Base class for document store failures."""


class WriteRejectedError(StoreError):
    """A create, update or delete was not applied."""


class SubscriptionError(StoreError):
    """A subscription could not deliver a snapshot and has been terminated."""


class DocumentStore(ABC):
    """Abstract base class for document stores.

    Documents are plain dicts. Every returned document carries ``id``,
    ``created_at`` and ``updated_at`` alongside its stored fields. Workspace
    documents are top level and use ``workspace_id=None``.
    """

    @abstractmethod
    def subscribe(
        self,
        workspace_id: Optional[str],
        kind: str,
        on_snapshot: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        """Listen to a collection.

        ``on_snapshot`` receives the full current collection right away and
        again after every write to it. If a snapshot cannot be loaded,
        ``on_error`` receives a ``SubscriptionError`` and no further snapshots
        are delivered.

        Returns:
            A function that ends the subscription. Calling it twice is harmless.
        """

    @abstractmethod
    def create(
        self,
        workspace_id: Optional[str],
        kind: str,
        data: dict,
        doc_id: Optional[str] = None,
        if_absent: bool = False,
    ) -> Optional[dict]:
        """Create a document.

        Args:
            workspace_id: Owning workspace, None for workspace documents.
            kind: Collection name, one of ``KINDS``.
            data: Document fields.
            doc_id: Explicit id. Generated when omitted.
            if_absent: When True and ``doc_id`` already exists, do nothing and
                return None instead of failing.

        Returns:
            The stored document, or None when skipped because of ``if_absent``.

        Raises:
            WriteRejectedError: If the write failed.
        """

    @abstractmethod
    def update(
        self, workspace_id: Optional[str], kind: str, doc_id: str, patch: dict
    ) -> dict:
        """Merge ``patch`` into a document.

        Returns:
            The applied patch including the new ``updated_at``.

        Raises:
            WriteRejectedError: If the document does not exist or the write failed.
        """

    @abstractmethod
    def delete(self, workspace_id: Optional[str], kind: str, doc_id: str) -> bool:
        """Delete a document.

        Returns:
            True if a document was deleted, False if it did not exist.

        Raises:
            WriteRejectedError: If the write failed.
        """

    @abstractmethod
    def get(self, workspace_id: Optional[str], kind: str, doc_id: str) -> Optional[dict]:
        """Read a single document, or None if it does not exist."""

    @abstractmethod
    def list(self, workspace_id: Optional[str], kind: str) -> List[dict]:
        """Read a whole collection in creation order."""
