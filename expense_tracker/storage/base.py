# expense_tracker/storage/base.py
from abc import ABC, abstractmethod


class StorageError(RuntimeError):
    """Raised when a backend cannot read or write ledger state."""


class BaseStorage(ABC):
    @abstractmethod
    def load(self, key):
        """Return the value stored under *key*, or None when absent."""
        pass

    @abstractmethod
    def save(self, key, value):
        """Store *value* under *key*, replacing any previous value."""
        pass
