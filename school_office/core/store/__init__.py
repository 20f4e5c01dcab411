from school_office.core.store.base import Record, Table
from school_office.core.store.memory import InMemoryStore
from school_office.core.store.session import create_store, get_store

__all__ = ["Record", "Table", "InMemoryStore", "create_store", "get_store"]
