"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database or a different document store.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing.
        store: Optional document store. Defaults to the SQLite store over
            ``db_manager``.
    """

    def __init__(self, config: Config, db_manager=None, store=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from store.sqlite import SQLiteDocumentStore
        from services.accounts import AccountService
        from services.categories import CategoryService
        from services.transactions import TransactionService
        from services.workspaces import WorkspaceService
        from services.state import LocalStateService

        self.store = store or SQLiteDocumentStore(self.db_manager)
        self.workspaces = WorkspaceService(self.store, config.default_currency)
        self.accounts = AccountService(self.store)
        self.categories = CategoryService(self.store)
        self.transactions = TransactionService(self.store)
        self.state = LocalStateService(config.state_file)
