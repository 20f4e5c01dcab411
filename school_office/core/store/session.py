import logging

from school_office.core.config import settings
from school_office.core.store.memory import InMemoryStore

logger = logging.getLogger(__name__)

_default_store: InMemoryStore | None = None


def create_store(seed: bool | None = None) -> InMemoryStore:
    """Build a new store, loaded with the demo dataset when ``seed`` is set."""
    store = InMemoryStore()
    if settings.seed_sample_data if seed is None else seed:
        from school_office.core.store.sample_data import load_sample_data

        load_sample_data(store)
        logger.info(
            "Loaded sample data: %d users, %d students, %d invoices",
            len(store.users),
            len(store.students),
            len(store.invoices),
        )
    return store


def get_store() -> InMemoryStore:
    """Dependency returning the process-wide store."""
    global _default_store
    if _default_store is None:
        _default_store = create_store()
    return _default_store
