"""Error kinds raised by the profile chat core."""


class ProfileChatError(Exception):
    """Base class for all profile chat errors."""


class ConstraintViolation(ProfileChatError):
    """A store write would break a table constraint (duplicate id, second profile, empty name)."""


class NotFound(ProfileChatError):
    """The profile targeted by an update or delete does not exist."""


class SourceUnavailable(ProfileChatError):
    """The picked image could not be opened for reading."""


class InvalidImage(SourceUnavailable):
    """The picked file was readable but is not a decodable image."""


class DestinationWriteError(ProfileChatError):
    """Writing the local copy of a picked image failed."""


class InvalidDisplayName(ProfileChatError, ValueError):
    """A display name was empty or whitespace only."""


class ProfileNotInitialized(ProfileChatError, RuntimeError):
    """The controller was used before initialize() completed."""
