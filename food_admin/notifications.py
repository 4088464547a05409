# food_admin/notifications.py
import logging
from typing import List

from .schemas import Notification, NotificationLevel

logger = logging.getLogger(__name__)

DEFAULT_AUTO_CLOSE_MS = 3000

_LOG_LEVELS = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.ERROR,
}


class Notifier:
    """Collects toast notifications for the page that triggered them.

    Emitting never blocks and never raises; the browser dismisses each toast
    on its own after ``auto_close_ms``.
    """

    def __init__(self, auto_close_ms: int = DEFAULT_AUTO_CLOSE_MS):
        self.auto_close_ms = auto_close_ms
        self._pending: List[Notification] = []

    def emit(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message, auto_close_ms=self.auto_close_ms)
        self._pending.append(notification)
        logger.log(_LOG_LEVELS[level], "notification[%s]: %s", level.value, message)
        return notification

    def success(self, message: str) -> Notification:
        return self.emit(NotificationLevel.SUCCESS, message)

    def warning(self, message: str) -> Notification:
        return self.emit(NotificationLevel.WARNING, message)

    def error(self, message: str) -> Notification:
        return self.emit(NotificationLevel.ERROR, message)

    @property
    def pending(self) -> List[Notification]:
        return list(self._pending)

    def drain(self) -> List[Notification]:
        drained, self._pending = self._pending, []
        return drained
