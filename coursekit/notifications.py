"""Transient user-facing notifications (success / error toasts)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

NotificationKind = Literal["success", "error", "info"]


@dataclass
class Notification:
    message: str
    kind: NotificationKind = "success"
    created_at: datetime = field(default_factory=datetime.now)


class NotificationLog:
    """Bounded, newest-first list of notifications for display."""

    def __init__(self, limit: int = 20):
        self.limit = limit
        self._items: list[Notification] = []

    def push(self, message: str, kind: NotificationKind = "success") -> Notification:
        note = Notification(message=message, kind=kind)
        self._items.insert(0, note)
        del self._items[self.limit:]
        return note

    def errors(self) -> list[Notification]:
        return [n for n in self._items if n.kind == "error"]

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
