# expense_tracker/outputs/base.py
from abc import ABC, abstractmethod

class BaseOutput(ABC):
    @abstractmethod
    def write(self, ledger):
        """Write a report of the ledger and return the output path."""
        pass
