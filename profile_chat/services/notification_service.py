"""Notification delivery: a local tray and a push-style webhook."""

import random
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Deque, Dict, Any, List, Optional

import requests

from ..config.defaults import SYSTEM_CONSTANTS
from ..logging_config import get_logger
from .interfaces import NotifierInterface

logger = get_logger("notification_service")

PermissionCheck = Callable[[], bool]


def random_notification_id() -> int:
    """Fresh notification id. Collisions are tolerated."""
    return random.getrandbits(31)


def _always_granted() -> bool:
    return True


@dataclass
class NotificationMessage:
    """Represents a delivered notification."""
    notification_id: int
    title: str
    body: str
    channel: str = "basic"
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.notification_id,
            'title': self.title,
            'body': self.body,
            'channel': self.channel,
            'timestamp': self.timestamp.isoformat()
        }


class BaseNotifier(NotifierInterface):
    """Shared permission and enable checks for notifiers."""

    def __init__(self,
                 channel: str = "basic",
                 enabled: bool = True,
                 permission_granted: Optional[PermissionCheck] = None):
        self.channel = channel
        self.enabled = enabled
        self.permission_granted = permission_granted or _always_granted
        self.sent_count = 0
        self.skipped_count = 0

    def notify(self, notification_id: int, title: str, body: str) -> bool:
        """Post a notification unless disabled or not permitted."""
        if not self.enabled:
            logger.debug("Notifications disabled")
            self.skipped_count += 1
            return False

        if not self.permission_granted():
            # Missing permission is not an error; the notification is dropped
            logger.debug(f"Notification permission not granted, skipping {notification_id}")
            self.skipped_count += 1
            return False

        message = NotificationMessage(notification_id, title, body, self.channel)
        delivered = self._deliver(message)
        if delivered:
            self.sent_count += 1
        return delivered

    def _deliver(self, message: NotificationMessage) -> bool:
        raise NotImplementedError

    def get_notification_stats(self) -> Dict[str, Any]:
        return {
            "channel": self.channel,
            "enabled": self.enabled,
            "sent": self.sent_count,
            "skipped": self.skipped_count
        }


class LocalNotifier(BaseNotifier):
    """Keeps the most recent notifications in an in-memory tray."""

    def __init__(self, tray_size: int = SYSTEM_CONSTANTS["NOTIFICATION_TRAY_SIZE"], **kwargs):
        super().__init__(**kwargs)
        self._tray: Deque[NotificationMessage] = deque(maxlen=tray_size)
        self._lock = threading.Lock()

    @property
    def tray(self) -> List[NotificationMessage]:
        with self._lock:
            return list(self._tray)

    def clear(self) -> int:
        """Empty the tray and return the number of cleared notifications."""
        with self._lock:
            cleared = len(self._tray)
            self._tray.clear()
        return cleared

    def _deliver(self, message: NotificationMessage) -> bool:
        with self._lock:
            self._tray.append(message)
        logger.info(f"Notification {message.notification_id}: {message.title} - {message.body}")
        return True


class WebhookNotifier(BaseNotifier):
    """Posts notifications as JSON to an HTTP endpoint."""

    def __init__(self, url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _deliver(self, message: NotificationMessage) -> bool:
        try:
            response = self.session.post(
                self.url,
                json=message.to_dict(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Webhook notification error: {e}")
            return False

        if response.ok:
            logger.info(f"Webhook notification {message.notification_id} sent")
            return True

        logger.error(f"Webhook notification failed: {response.status_code} - {response.text}")
        return False
