"""Configuration components for the profile chat application."""

from .defaults import (
    DEFAULT_CONFIG,
    SYSTEM_CONSTANTS,
    DEFAULT_PATHS,
    VALID_LOG_LEVELS
)

__all__ = [
    'DEFAULT_CONFIG',
    'SYSTEM_CONSTANTS',
    'DEFAULT_PATHS',
    'VALID_LOG_LEVELS'
]
