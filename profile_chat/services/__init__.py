"""Services for the profile chat application."""

from .interfaces import (
    ProfileStoreInterface,
    ImageIngestorInterface,
    NotifierInterface,
    SensorSourceInterface
)
from .profile_store import ProfileStore
from .profile_controller import ProfileController
from .image_ingestor import ImageIngestor
from .motion_alert import MotionAlertGate, MotionMonitor
from .notification_service import LocalNotifier, WebhookNotifier
from .sensor_source import PushedSensorSource

__all__ = [
    'ProfileStoreInterface',
    'ImageIngestorInterface',
    'NotifierInterface',
    'SensorSourceInterface',
    'ProfileStore',
    'ProfileController',
    'ImageIngestor',
    'MotionAlertGate',
    'MotionMonitor',
    'LocalNotifier',
    'WebhookNotifier',
    'PushedSensorSource'
]
