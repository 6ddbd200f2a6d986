"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, the
            database settings in config are ignored.
        **tracker_options: Extra keyword arguments for BudgetTracker
            (id_factory, color_picker, today).
    """

    def __init__(self, config: Config, db_manager=None, **tracker_options):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.storage import KeyValueStore
        from services.persistence import PersistenceService
        from services.tracker import BudgetTracker

        self.store = KeyValueStore(self.db_manager)
        self.persistence = PersistenceService(self.store, config.storage_key)
        self.tracker = BudgetTracker(self.persistence, **tracker_options)
