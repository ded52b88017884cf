"""Application object that wires the profile chat services together."""

import os
from typing import Any, Dict, List, Optional

from .config_manager import ConfigManager
from .exceptions import ProfileNotInitialized
from .logging_config import get_logger
from .models.message import Message, SAMPLE_CONVERSATION
from .models.motion import MotionSample
from .models.profile import Profile
from .services.image_ingestor import ImageIngestor
from .services.interfaces import (
    ExternalImageHandle,
    NotifierInterface,
    ProfileStoreInterface,
    SensorSourceInterface
)
from .services.motion_alert import MotionAlertGate, MotionMonitor
from .services.notification_service import LocalNotifier, WebhookNotifier, PermissionCheck
from .services.profile_controller import ProfileController
from .services.profile_store import ProfileStore
from .services.sensor_source import PushedSensorSource

logger = get_logger("app")

CHAT_SCREEN = "chat"
PROFILE_SCREEN = "profile"
SCREENS = (CHAT_SCREEN, PROFILE_SCREEN)


class ProfileChatApp:
    """The two-screen profile chat application.

    Owns the profile controller, the picture ingestor and the motion monitor.
    The motion listener is registered while the profile screen is shown and
    released when navigating away from it.
    """

    def __init__(self,
                 config_manager: Optional[ConfigManager] = None,
                 store: Optional[ProfileStoreInterface] = None,
                 notifier: Optional[NotifierInterface] = None,
                 sensor: Optional[SensorSourceInterface] = None,
                 permission_granted: Optional[PermissionCheck] = None,
                 messages: Optional[List[Message]] = None):
        self.config_manager = config_manager or ConfigManager()
        self.config = self.config_manager.get_config()

        os.makedirs(self.config.data_dir, exist_ok=True)

        self.store = store or ProfileStore(
            database_path=self.config.database_file,
            enforce_singleton=self.config.enforce_singleton
        )
        self.controller = ProfileController(self.store)
        self.ingestor = ImageIngestor(
            images_dir=self.config.images_dir,
            image_filename=self.config.image_filename,
            verify_images=self.config.verify_images
        )
        self.notifier = notifier or self._build_notifier(permission_granted)
        self.sensor = sensor or PushedSensorSource()
        self.motion_monitor = MotionMonitor(
            sensor=self.sensor,
            notifier=self.notifier,
            threshold=self.config.motion_threshold,
            title=self.config.notification_title,
            body=self.config.notification_body,
            cooldown_seconds=self.config.motion_cooldown_seconds
        )
        self.messages = list(messages) if messages is not None else list(SAMPLE_CONVERSATION)
        self.current_screen = CHAT_SCREEN

    def _build_notifier(self, permission_granted: Optional[PermissionCheck]) -> NotifierInterface:
        options = dict(
            channel=self.config.notification_channel,
            enabled=self.config.notifications_enabled,
            permission_granted=permission_granted
        )
        if self.config.webhook_url:
            logger.info(f"Delivering notifications to {self.config.webhook_url}")
            return WebhookNotifier(
                self.config.webhook_url,
                timeout=self.config.webhook_timeout_seconds,
                **options
            )
        return LocalNotifier(**options)

    @property
    def profile(self) -> Profile:
        return self.controller.profile

    def start(self) -> Profile:
        """Load (or create) the profile and show the start screen."""
        profile = self.controller.initialize()
        if profile.has_picture and not os.path.isfile(profile.picture_ref):
            logger.warning(f"Profile picture {profile.picture_ref} is missing, "
                           f"the placeholder will be shown")
        self.current_screen = CHAT_SCREEN
        logger.info(f"Profile chat started for profile {profile.id}")
        return profile

    def shutdown(self) -> None:
        self.motion_monitor.stop()
        logger.info("Profile chat stopped")

    def navigate(self, screen: str) -> str:
        """Switch screens, registering the motion listener only on the profile screen."""
        if screen not in SCREENS:
            raise ValueError(f"Unknown screen: {screen}")

        if screen == PROFILE_SCREEN:
            self.motion_monitor.start()
        else:
            self.motion_monitor.stop()

        if screen != self.current_screen:
            logger.debug(f"Navigated from {self.current_screen} to {screen}")
        self.current_screen = screen
        return screen

    def change_name(self, name: str) -> Profile:
        return self.controller.rename_profile(name)

    def on_picture_picked(self, handle: Optional[ExternalImageHandle]) -> Profile:
        """Apply a picker result; None means nothing was selected."""
        if handle is None:
            logger.debug("Picture picker closed without a selection")
            return self.controller.profile

        if not self.controller.initialized:
            raise ProfileNotInitialized("initialize() must complete before a picture is set")
        local_ref = self.ingestor.ingest(handle)
        return self.controller.set_picture(local_ref)

    def handle_motion_reading(self, x: float, y: float, z: float) -> Dict[str, Any]:
        """Feed one accelerometer reading through the sensor source."""
        if not isinstance(self.sensor, PushedSensorSource):
            raise RuntimeError("Readings can only be pushed to an in-process sensor source")

        sample = MotionSample.from_axes(x, y, z)
        alerts_before = self.motion_monitor.alert_count
        listeners = self.sensor.push(x, y, z)

        return {
            'magnitude': sample.magnitude,
            'above_threshold': MotionAlertGate.evaluate(sample, self.motion_monitor.threshold),
            'listening': listeners > 0,
            'alerted': self.motion_monitor.alert_count > alerts_before
        }

    def chat_screen(self) -> Dict[str, Any]:
        """What the chat screen shows: every message under the profile's name and picture."""
        profile = self.controller.profile
        return {
            'screen': CHAT_SCREEN,
            'profile': profile.to_dict(),
            'messages': [
                {
                    'author': message.author,
                    'body': message.body,
                    'display_name': profile.display_name,
                    'picture_ref': profile.picture_ref
                }
                for message in self.messages
            ]
        }

    def profile_screen(self) -> Dict[str, Any]:
        """What the profile screen shows."""
        return {
            'screen': PROFILE_SCREEN,
            'profile': self.controller.profile.to_dict(),
            'sensor_data': self.motion_monitor.last_magnitude,
            'motion_listening': self.motion_monitor.running
        }
