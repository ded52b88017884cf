"""In-memory owner of the current profile."""

import threading
from typing import Callable, List, Optional

from ..exceptions import InvalidDisplayName, ProfileNotInitialized
from ..logging_config import get_logger
from ..models.profile import Profile, default_profile
from .error_handler import global_error_handler
from .interfaces import ProfileStoreInterface

logger = get_logger("profile_controller")

ProfileObserver = Callable[[Profile], None]


class ProfileController:
    """Single source of truth for the running app's profile.

    Reads and writes go through the store; the controller keeps the last
    persisted value and tells subscribers whenever it changes. A failed store
    call leaves the in-memory profile untouched and propagates to the caller.
    """

    def __init__(self, store: ProfileStoreInterface):
        self.store = store
        self._profile: Optional[Profile] = None
        self._observers: List[ProfileObserver] = []
        # Mutations are applied one at a time, in call order
        self._lock = threading.RLock()

        global_error_handler.register_component("profile_controller")

    @property
    def profile(self) -> Profile:
        """The current profile."""
        if self._profile is None:
            raise ProfileNotInitialized("initialize() must complete before the profile is used")
        return self._profile

    @property
    def initialized(self) -> bool:
        return self._profile is not None

    def initialize(self) -> Profile:
        """Load the stored profile, creating the default one on first launch."""
        with self._lock:
            profiles = self.store.get_all()
            if not profiles:
                profile = default_profile()
                self.store.insert(profile)
                logger.info(f"Created default profile {profile.id}")
                profiles = self.store.get_all()

            self._profile = profiles[0]
            logger.debug(f"Loaded profile {self._profile.id}")

        self._notify_observers(self._profile)
        return self._profile

    def rename_profile(self, new_name: str) -> Profile:
        """Change the display name, keeping id and picture."""
        if not new_name or not new_name.strip():
            raise InvalidDisplayName("Display name must not be empty")

        with self._lock:
            updated = self.profile.with_name(new_name)
            self.store.update(updated)
            self._profile = updated

        logger.debug(f"Renamed profile {updated.id}")
        self._notify_observers(updated)
        return updated

    def set_picture(self, local_ref: str) -> Profile:
        """Change the picture reference, keeping id and display name."""
        with self._lock:
            updated = self.profile.with_picture(local_ref)
            self.store.update(updated)
            self._profile = updated

        logger.info(f"Profile {updated.id} picture set to {local_ref or '<placeholder>'}")
        self._notify_observers(updated)
        return updated

    def subscribe(self, observer: ProfileObserver) -> None:
        """Register a callback invoked with the profile after every change."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: ProfileObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_observers(self, profile: Profile) -> None:
        for observer in list(self._observers):
            try:
                observer(profile)
            except Exception as e:
                logger.error(f"Error in profile observer: {e}")
