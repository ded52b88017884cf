"""Default configuration values and constants."""

from typing import Dict, Any

# Default application configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    # Storage settings
    "data_dir": "data",
    "database_file": "data/profile.db",
    "images_dir": "data/images",
    "image_filename": "image.jpg",
    "verify_images": True,
    "enforce_singleton": True,

    # Motion alert settings
    "motion_threshold": 15.0,
    "motion_cooldown_seconds": 0.0,

    # Notification settings
    "notifications_enabled": True,
    "notification_channel": "basic",
    "notification_title": "Basic Notification",
    "notification_body": "This is a notification",
    "webhook_url": "",
    "webhook_timeout_seconds": 10.0,

    # Logging settings
    "log_level": "INFO",
    "log_dir": "logs",

    # Web shell settings
    "web_host": "127.0.0.1",
    "web_port": 5000
}

# System constants
SYSTEM_CONSTANTS = {
    "SCHEMA_VERSION": 1,
    "COPY_CHUNK_SIZE": 64 * 1024,
    "MAX_UPLOAD_SIZE_MB": 16,
    "NOTIFICATION_TRAY_SIZE": 50,
    "LOG_ROTATION_SIZE_MB": 10,
    "LOG_BACKUP_COUNT": 5
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json",
    "data_dir": "data",
    "images_dir": "data/images",
    "logs_dir": "logs",
    "database_file": "data/profile.db"
}

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
