"""Service interfaces and abstract base classes."""

import os
from abc import ABC, abstractmethod
from typing import BinaryIO, Callable, List, Protocol, Union

from ..models.profile import Profile


class OpenableImage(Protocol):
    """A picked image that knows how to open itself for reading."""

    def open(self) -> BinaryIO:
        ...


# What a picker hands back: a path, a file:// URI or an openable handle
ExternalImageHandle = Union[str, os.PathLike, OpenableImage]

SensorListener = Callable[[float, float, float], None]


class ProfileStoreInterface(ABC):
    """Interface for durable profile persistence."""

    @abstractmethod
    def get_all(self) -> List[Profile]:
        """Return every stored profile."""
        pass

    @abstractmethod
    def insert(self, profile: Profile) -> None:
        """Insert a new profile."""
        pass

    @abstractmethod
    def update(self, profile: Profile) -> None:
        """Replace the stored profile with the same id."""
        pass

    @abstractmethod
    def delete(self, profile: Profile) -> None:
        """Remove the stored profile with the same id."""
        pass


class ImageIngestorInterface(ABC):
    """Interface for copying picked images into app storage."""

    @abstractmethod
    def ingest(self, source: ExternalImageHandle) -> str:
        """Copy source into local storage and return the local reference."""
        pass


class NotifierInterface(ABC):
    """Interface for posting user-visible notifications."""

    @abstractmethod
    def notify(self, notification_id: int, title: str, body: str) -> bool:
        """Post a notification, returning whether it was delivered."""
        pass


class SensorSourceInterface(ABC):
    """Interface for an accelerometer that pushes (x, y, z) readings."""

    @abstractmethod
    def register_listener(self, listener: SensorListener) -> None:
        """Start delivering readings to listener."""
        pass

    @abstractmethod
    def unregister_listener(self, listener: SensorListener) -> None:
        """Stop delivering readings to listener."""
        pass
