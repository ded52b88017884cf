"""Shared helpers for the test suite."""

import io
import os

from PIL import Image


def make_image_bytes(color: str = "red", size=(4, 4), image_format: str = "PNG") -> bytes:
    """Encode a small solid-color image."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format=image_format)
    return buffer.getvalue()


def write_file(path: str, data: bytes) -> str:
    with open(path, "wb") as f:
        f.write(data)
    return path


def make_config_manager(test_dir: str, **overrides):
    """ConfigManager whose storage lives under test_dir."""
    from profile_chat.config_manager import ConfigManager

    data_dir = os.path.join(test_dir, "data")
    manager = ConfigManager(os.path.join(test_dir, "config.json"))
    manager.update_config(
        data_dir=data_dir,
        database_file=os.path.join(data_dir, "profile.db"),
        images_dir=os.path.join(data_dir, "images"),
        log_dir=os.path.join(test_dir, "logs"),
        **overrides
    )
    return manager
