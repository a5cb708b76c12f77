"""
User-visible notifications.

Stands in for the toast popups of a graphical front end: every notification is
recorded, logged, and handed to whatever listeners the presentation layer
registered (the CLI prints them).
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List

log = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"

_LOG_LEVELS = {SUCCESS: logging.INFO, ERROR: logging.ERROR}


@dataclass(frozen=True)
class Notification:
    level: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    def __init__(self):
        self.history: List[Notification] = []
        self._listeners: List[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]):
        self._listeners.append(listener)

    def notify(self, level: str, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self.history.append(notification)
        log.log(_LOG_LEVELS.get(level, logging.INFO), f"[{level}] {message}")
        for listener in self._listeners:
            listener(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.notify(ERROR, message)

    @property
    def errors(self) -> List[Notification]:
        return [n for n in self.history if n.level == ERROR]
