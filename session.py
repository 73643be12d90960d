"""Ledger session: the live view of one workspace.

A session owns the subscriptions to a workspace's transactions, accounts and
categories and keeps the latest snapshot of each. Opening another workspace,
closing or signing out ends those subscriptions. Every subscription is tagged
with the epoch it was opened in, and a snapshot or error arriving for an older
epoch is dropped, so results from a superseded workspace never reach the
session.
"""

from functools import partial
from typing import Callable, Dict, List, Optional

from logger import get_logger
from models.account import Account
from models.category import Category
from models.transaction import Transaction
from models.workspace import Workspace
from store.base import ACCOUNTS, CATEGORIES, TRANSACTIONS
from tools.quality import DataQualityReport
from tools.transactions import get_month_summary

logger = get_logger()

_MODELS = {
    TRANSACTIONS: Transaction,
    ACCOUNTS: Account,
    CATEGORIES: Category,
}

Listener = Callable[[str], None]


class LedgerSession:
    """Live snapshots of the selected workspace for one user.

    Args:
        services: Services container.
        user_id: Identity of the signed-in user.
    """

    def __init__(self, services, user_id: str):
        self.services = services
        self.user_id = user_id
        self.workspace: Optional[Workspace] = None
        self.last_error: Optional[Exception] = None
        self._epoch = 0
        self._unsubscribers: List[Callable[[], None]] = []
        self._snapshots: Dict[str, list] = {kind: [] for kind in _MODELS}
        self._errors: Dict[str, Exception] = {}
        self._listeners: List[Listener] = []

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._snapshots[TRANSACTIONS])

    @property
    def accounts(self) -> List[Account]:
        return list(self._snapshots[ACCOUNTS])

    @property
    def categories(self) -> List[Category]:
        return list(self._snapshots[CATEGORIES])

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def is_open(self) -> bool:
        return self.workspace is not None

    @property
    def is_stale(self) -> bool:
        """True when no workspace is open or a subscription has failed."""
        return not self.is_open or bool(self._errors)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(kind)`` after each applied snapshot or error.

        Returns:
            A function removing the listener.
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def open(self, workspace: Workspace) -> None:
        """Subscribe to ``workspace``, replacing any open subscriptions."""
        self.close()
        self.workspace = workspace
        epoch = self._epoch
        logger.info(f"Opening workspace {workspace.id} (epoch {epoch})")

        for kind in _MODELS:
            unsubscribe = self.services.store.subscribe(
                workspace.id,
                kind,
                partial(self._on_snapshot, epoch, kind),
                partial(self._on_error, epoch, kind),
            )
            self._unsubscribers.append(unsubscribe)

    def reopen(self) -> None:
        """Resubscribe to the current workspace, e.g. after a subscription error."""
        if self.workspace is None:
            raise ValueError("No workspace is open")
        self.open(self.workspace)

    def close(self) -> None:
        """End all subscriptions and discard their snapshots."""
        self._epoch += 1
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._snapshots = {kind: [] for kind in _MODELS}
        self._errors = {}
        self.workspace = None

    def select_initial_workspace(self) -> Optional[Workspace]:
        """Open the last selected workspace, or the user's first one.

        Returns:
            The opened workspace, or None if the user has no workspace.
        """
        workspaces = self.services.workspaces.find_for_user(self.user_id)
        saved_id = self.services.state.current_workspace_id()

        chosen = next((w for w in workspaces if w.id == saved_id), None)
        if chosen is None and workspaces:
            chosen = workspaces[0]
            self.services.state.set_current_workspace_id(chosen.id)

        if chosen is None:
            self.close()
            return None

        self.open(chosen)
        return chosen

    def create_workspace(self, name: str, currency: Optional[str] = None) -> Workspace:
        """Create a workspace and make it the current one."""
        workspace = self.services.workspaces.create(self.user_id, name, currency)
        self.services.state.set_current_workspace_id(workspace.id)
        self.open(workspace)
        return workspace

    def switch_workspace(self, workspace_id: str) -> Workspace:
        """Make another of the user's workspaces the current one.

        Raises:
            ValueError: If the workspace does not exist or belongs to someone else.
        """
        workspace = self.services.workspaces.find(workspace_id)
        if workspace is None or workspace.user_id != self.user_id:
            raise ValueError(f"Workspace '{workspace_id}' not found")

        self.services.state.set_current_workspace_id(workspace.id)
        self.open(workspace)
        return workspace

    def sign_out(self) -> None:
        """Close the session and forget the locally persisted state."""
        self.close()
        self.services.state.clear()
        logger.info("Signed out")

    def ensure_defaults(self) -> int:
        """Seed default accounts and categories into the open workspace if empty.

        Returns:
            Number of documents created.
        """
        workspace = self._require_workspace()
        return self.services.accounts.ensure_defaults(
            workspace.id, self.user_id
        ) + self.services.categories.ensure_defaults(workspace.id, self.user_id)

    def month_summary(
        self, year: int, month: int, report: Optional[DataQualityReport] = None
    ) -> Dict:
        """Summary of one month computed from the latest snapshots.

        A stale session yields the empty-state summary rather than figures from
        a failed or superseded subscription.
        """
        if self.is_stale:
            transactions, accounts, categories = [], [], []
        else:
            transactions, accounts, categories = (
                self.transactions,
                self.accounts,
                self.categories,
            )

        return get_month_summary(
            transactions,
            accounts,
            categories,
            year,
            month,
            top_limit=self.services.config.top_categories_limit,
            report=report,
        )

    def _require_workspace(self) -> Workspace:
        if self.workspace is None:
            raise ValueError("No workspace is open")
        return self.workspace

    def _on_snapshot(self, epoch: int, kind: str, documents: List[dict]) -> None:
        if epoch != self._epoch:
            logger.debug(f"Dropping {kind} snapshot from superseded epoch {epoch}")
            return

        model = _MODELS[kind]
        self._snapshots[kind] = [model.from_dict(doc) for doc in documents]
        self._errors.pop(kind, None)
        self._notify(kind)

    def _on_error(self, epoch: int, kind: str, error: Exception) -> None:
        if epoch != self._epoch:
            logger.debug(f"Dropping {kind} error from superseded epoch {epoch}")
            return

        logger.error(f"{kind} subscription failed: {error}")
        self._snapshots[kind] = []
        self._errors[kind] = error
        self.last_error = error
        self._notify(kind)

    def _notify(self, kind: str) -> None:
        for listener in list(self._listeners):
            listener(kind)
