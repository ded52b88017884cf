"""Data models for the profile chat application."""

from .profile import Profile, default_profile, DEFAULT_PROFILE_ID, DEFAULT_DISPLAY_NAME, NO_PICTURE
from .motion import MotionSample
from .message import Message, SAMPLE_CONVERSATION
from .config import AppConfig

__all__ = [
    'Profile',
    'default_profile',
    'DEFAULT_PROFILE_ID',
    'DEFAULT_DISPLAY_NAME',
    'NO_PICTURE',
    'MotionSample',
    'Message',
    'SAMPLE_CONVERSATION',
    'AppConfig'
]
