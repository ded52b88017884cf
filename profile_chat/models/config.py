"""Configuration data models."""

import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Application configuration settings."""
    # Storage settings
    data_dir: str = "data"
    database_file: str = "data/profile.db"
    images_dir: str = "data/images"
    image_filename: str = "image.jpg"
    verify_images: bool = True
    enforce_singleton: bool = True

    # Motion alert settings
    motion_threshold: float = 15.0
    motion_cooldown_seconds: float = 0.0  # 0 notifies on every sample above threshold

    # Notification settings
    notifications_enabled: bool = True
    notification_channel: str = "basic"
    notification_title: str = "Basic Notification"
    notification_body: str = "This is a notification"
    webhook_url: str = ""  # empty delivers to the local notification tray
    webhook_timeout_seconds: float = 10.0

    # Logging settings
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Web shell settings
    web_host: str = "127.0.0.1"
    web_port: int = 5000

    @property
    def picture_path(self) -> str:
        """Fixed location of the ingested profile picture."""
        return os.path.join(self.images_dir, self.image_filename)
