# expense_tracker/storage/memory.py
from expense_tracker.storage.base import BaseStorage, StorageError


class MemoryStorage(BaseStorage):
    """Dict-backed storage that lives as long as the process."""

    def __init__(self, config=None):
        self.config = config or {}
        self.values = {}
        self.fail_writes = False

    def load(self, key):
        return self.values.get(key)

    def save(self, key, value):
        if self.fail_writes:
            raise StorageError("Storage quota exceeded")
        self.values[key] = value
