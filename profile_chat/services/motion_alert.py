"""Motion threshold evaluation and the sensor listener that acts on it."""

import threading
import time
from typing import Callable, Optional

from ..logging_config import get_logger
from ..models.motion import MotionSample
from .interfaces import NotifierInterface, SensorSourceInterface
from .notification_service import random_notification_id

logger = get_logger("motion_alert")

DEFAULT_MOTION_THRESHOLD = 15.0


class MotionAlertGate:
    """Decides whether one motion sample should raise an alert."""

    @staticmethod
    def evaluate(sample: MotionSample, threshold: float = DEFAULT_MOTION_THRESHOLD) -> bool:
        """True iff the sample magnitude is strictly above threshold."""
        return sample.magnitude > threshold


class MotionMonitor:
    """Listens to a sensor while a screen is shown and notifies on strong motion.

    The listener is registered once by start() and removed by stop(); the
    monitor can also be used as a context manager around a screen visit.

    With cooldown_seconds == 0 every reading above threshold produces a
    notification, so a device held in motion keeps notifying. A positive
    cool-down suppresses notifications until it has elapsed since the last one.
    """

    def __init__(self,
                 sensor: SensorSourceInterface,
                 notifier: NotifierInterface,
                 threshold: float = DEFAULT_MOTION_THRESHOLD,
                 title: str = "Basic Notification",
                 body: str = "This is a notification",
                 cooldown_seconds: float = 0.0,
                 clock: Callable[[], float] = time.monotonic):
        self.sensor = sensor
        self.notifier = notifier
        self.threshold = threshold
        self.title = title
        self.body = body
        self.cooldown_seconds = max(0.0, cooldown_seconds)
        self._clock = clock

        self.gate = MotionAlertGate()
        self.last_magnitude = 0.0
        self.alert_count = 0
        self._last_alert_time: Optional[float] = None
        self._registered = False
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._registered

    def start(self) -> None:
        """Register the sensor listener if it is not already registered."""
        with self._lock:
            if self._registered:
                return
            self.sensor.register_listener(self.on_reading)
            self._registered = True
        logger.debug("Motion listener registered")

    def stop(self) -> None:
        """Unregister the sensor listener."""
        with self._lock:
            if not self._registered:
                return
            self.sensor.unregister_listener(self.on_reading)
            self._registered = False
        logger.debug("Motion listener unregistered")

    def __enter__(self) -> "MotionMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def on_reading(self, x: float, y: float, z: float) -> bool:
        """Handle one accelerometer reading; returns whether the gate tripped."""
        sample = MotionSample.from_axes(x, y, z)
        self.last_magnitude = sample.magnitude

        if not self.gate.evaluate(sample, self.threshold):
            return False

        if self._in_cooldown():
            logger.debug(f"Motion {sample.magnitude:.2f} above threshold during cool-down")
            return True

        self._last_alert_time = self._clock()
        self.alert_count += 1
        logger.info(f"Motion {sample.magnitude:.2f} exceeded threshold {self.threshold}")
        self.notifier.notify(random_notification_id(), self.title, self.body)
        return True

    def _in_cooldown(self) -> bool:
        if self.cooldown_seconds <= 0 or self._last_alert_time is None:
            return False
        return self._clock() - self._last_alert_time < self.cooldown_seconds
