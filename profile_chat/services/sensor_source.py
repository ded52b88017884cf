"""In-process accelerometer source fed by pushed readings."""

import threading
from typing import List

from ..logging_config import get_logger
from .interfaces import SensorListener, SensorSourceInterface

logger = get_logger("sensor_source")


class PushedSensorSource(SensorSourceInterface):
    """Fans out readings handed to push() to every registered listener."""

    def __init__(self):
        self._listeners: List[SensorListener] = []
        self._lock = threading.Lock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def register_listener(self, listener: SensorListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unregister_listener(self, listener: SensorListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def push(self, x: float, y: float, z: float) -> int:
        """Deliver one reading; returns how many listeners received it."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(x, y, z)
        if not listeners:
            logger.debug("Reading dropped, no listener registered")
        return len(listeners)
