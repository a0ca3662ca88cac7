# expense_tracker/notifications.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List

import click

ADDED_MESSAGE = "Transaction added successfully!"
DELETED_MESSAGE = "Transaction deleted successfully!"
NOT_FOUND_MESSAGE = "Transaction not found."


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity

    def to_dict(self):
        return {"message": self.message, "severity": self.severity.value}


class BaseNotifier(ABC):
    @abstractmethod
    def notify(self, message: str, severity: Severity = Severity.INFO):
        """Show *message* to the user."""
        pass


class ClickNotifier(BaseNotifier):
    """Print notifications to the terminal, errors on stderr."""

    COLORS = {
        Severity.SUCCESS: "green",
        Severity.ERROR: "red",
        Severity.INFO: "blue",
    }

    def __init__(self):
        self.errors = 0

    def notify(self, message, severity=Severity.INFO):
        severity = Severity(severity)
        if severity is Severity.ERROR:
            self.errors += 1
        click.secho(
            message,
            fg=self.COLORS[severity],
            err=severity is Severity.ERROR,
        )


class RecordingNotifier(BaseNotifier):
    """Keep notifications in memory so a caller can collect them later."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, message, severity=Severity.INFO):
        self.notifications.append(Notification(message, Severity(severity)))

    @property
    def last(self):
        return self.notifications[-1] if self.notifications else None

    def drain(self) -> List[Notification]:
        drained, self.notifications = self.notifications, []
        return drained
