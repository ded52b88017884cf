"""Configuration management with JSON file persistence and change callbacks."""

import json
import os
from dataclasses import asdict, fields
from typing import Optional, Dict, Any, Callable, List

from .config.defaults import DEFAULT_PATHS, VALID_LOG_LEVELS
from .logging_config import get_logger
from .models.config import AppConfig

logger = get_logger("config_manager")


class ConfigManager:
    """Loads, validates and saves the application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[AppConfig] = None
        self._config_change_callbacks: List[Callable[[AppConfig], None]] = []

        self.load_config()

    def load_config(self) -> AppConfig:
        """Load configuration from file or create the default file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                self._config = self._from_dict(config_dict)
            except (json.JSONDecodeError, TypeError, ValueError) as e:
                logger.warning(f"Error loading config {self.config_path}: {e}. Using defaults.")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(asdict(self._config), f, indent=2)

    def get_config(self) -> AppConfig:
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values, save, and notify callbacks."""
        config = self.get_config()

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        self.save_config()

        for callback in self._config_change_callbacks:
            try:
                callback(config)
            except Exception as e:
                logger.error(f"Error in config change callback: {e}")

    def validate_config(self) -> bool:
        """Validate current configuration."""
        config = self._config
        if config is None:
            return False

        if not config.database_file or not config.images_dir or not config.image_filename:
            return False

        if os.path.basename(config.image_filename) != config.image_filename:
            return False

        if config.motion_threshold != config.motion_threshold:  # NaN
            return False

        if config.motion_cooldown_seconds < 0:
            return False

        if not config.notification_channel:
            return False

        if config.webhook_url and not config.webhook_url.startswith(("http://", "https://")):
            return False

        if config.webhook_timeout_seconds <= 0:
            return False

        if config.log_level.upper() not in VALID_LOG_LEVELS:
            return False

        if not 0 < config.web_port < 65536:
            return False

        return True

    def register_change_callback(self, callback: Callable[[AppConfig], None]) -> None:
        """Register a callback to be called when config changes."""
        if callback not in self._config_change_callbacks:
            self._config_change_callbacks.append(callback)

    def unregister_change_callback(self, callback: Callable[[AppConfig], None]) -> None:
        if callback in self._config_change_callbacks:
            self._config_change_callbacks.remove(callback)

    @staticmethod
    def _from_dict(config_dict: Dict[str, Any]) -> AppConfig:
        if not isinstance(config_dict, dict):
            raise TypeError("Config file must contain a JSON object")

        known = {f.name for f in fields(AppConfig)}
        unknown = set(config_dict) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        return AppConfig(**{k: v for k, v in config_dict.items() if k in known})
