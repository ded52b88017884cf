"""Profile data model."""

from dataclasses import dataclass, replace

DEFAULT_PROFILE_ID = 1
DEFAULT_DISPLAY_NAME = "Test Name"

# Stored in place of a path when the placeholder image should be shown
NO_PICTURE = ""


@dataclass(frozen=True)
class Profile:
    """The single user's display name and picture reference."""
    id: int = DEFAULT_PROFILE_ID
    display_name: str = DEFAULT_DISPLAY_NAME
    picture_ref: str = NO_PICTURE

    @property
    def has_picture(self) -> bool:
        """True when a picture has been ingested for this profile."""
        return self.picture_ref != NO_PICTURE

    def with_name(self, display_name: str) -> "Profile":
        return replace(self, display_name=display_name)

    def with_picture(self, picture_ref: str) -> "Profile":
        return replace(self, picture_ref=picture_ref)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'display_name': self.display_name,
            'picture_ref': self.picture_ref,
            'has_picture': self.has_picture,
        }


def default_profile() -> Profile:
    """Profile written on first launch."""
    return Profile(
        id=DEFAULT_PROFILE_ID,
        display_name=DEFAULT_DISPLAY_NAME,
        picture_ref=NO_PICTURE
    )
