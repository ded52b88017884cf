"""
Profile Chat

A two-screen chat demo with a single persisted user profile (name and
picture) and a motion-triggered local notification.
"""

__version__ = "1.0.0"

from .config_manager import ConfigManager
from .exceptions import (
    ProfileChatError,
    ConstraintViolation,
    NotFound,
    SourceUnavailable,
    InvalidImage,
    DestinationWriteError,
    InvalidDisplayName,
    ProfileNotInitialized
)
from .models import (
    Profile,
    MotionSample,
    Message,
    AppConfig
)
from .services import (
    ProfileStore,
    ProfileController,
    ImageIngestor,
    MotionAlertGate,
    MotionMonitor,
    LocalNotifier,
    WebhookNotifier,
    PushedSensorSource
)
from .app import ProfileChatApp

__all__ = [
    # Application
    'ProfileChatApp',
    'ConfigManager',

    # Data models
    'Profile',
    'MotionSample',
    'Message',
    'AppConfig',

    # Services
    'ProfileStore',
    'ProfileController',
    'ImageIngestor',
    'MotionAlertGate',
    'MotionMonitor',
    'LocalNotifier',
    'WebhookNotifier',
    'PushedSensorSource',

    # Errors
    'ProfileChatError',
    'ConstraintViolation',
    'NotFound',
    'SourceUnavailable',
    'InvalidImage',
    'DestinationWriteError',
    'InvalidDisplayName',
    'ProfileNotInitialized'
]
