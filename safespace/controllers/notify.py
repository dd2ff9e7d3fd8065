# safespace/controllers/notify.py
import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: Optional[str] = None
    variant: str = "default"  # "default" | "destructive"


class Notifier:
    """Transient user-facing messages (toasts)."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def info(self, title: str, description: Optional[str] = None) -> Notification:
        note = Notification(title, description)
        self.notifications.append(note)
        return note

    def error(self, title: str, description: Optional[str] = None) -> Notification:
        note = Notification(title, description, variant="destructive")
        self.notifications.append(note)
        logger.info("user notified: %s (%s)", title, description or "")
        return note

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()
