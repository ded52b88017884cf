"""SQLite-backed persistence for the profile record."""

import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List

from ..config.defaults import SYSTEM_CONSTANTS
from ..exceptions import ConstraintViolation, NotFound
from ..logging_config import get_logger
from ..models.profile import Profile, DEFAULT_DISPLAY_NAME
from .error_handler import global_error_handler, ErrorSeverity, records_errors
from .interfaces import ProfileStoreInterface

logger = get_logger("profile_store")

SCHEMA_VERSION = SYSTEM_CONSTANTS["SCHEMA_VERSION"]


class ProfileStore(ProfileStoreInterface):
    """Durable CRUD for the profile table.

    Every call opens its own connection and commits before returning, so a
    completed write survives a process restart.
    """

    def __init__(self, database_path: str = "data/profile.db", enforce_singleton: bool = True):
        """
        Initialize the store and create the schema if needed.

        Args:
            database_path: Path to SQLite database file
            enforce_singleton: Reject inserting a second profile with a different id
        """
        self.database_path = database_path
        self.enforce_singleton = enforce_singleton

        global_error_handler.register_component("profile_store")

        self._initialize_database()

    @records_errors("profile_store", ErrorSeverity.LOW)
    def get_all(self) -> List[Profile]:
        """Return every stored profile, ordered by id."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT uid, profile_name, selected_image FROM profile ORDER BY uid"
            ).fetchall()

        return [Profile(id=uid, display_name=name, picture_ref=image) for uid, name, image in rows]

    @records_errors("profile_store", ErrorSeverity.MEDIUM)
    def insert(self, profile: Profile) -> None:
        """Insert profile, failing if its id (or, for a singleton store, any profile) exists."""
        with self._connect() as conn:
            if self.enforce_singleton:
                existing = conn.execute(
                    "SELECT uid FROM profile WHERE uid <> ? LIMIT 1", (profile.id,)
                ).fetchone()
                if existing is not None:
                    raise ConstraintViolation(
                        f"Profile {existing[0]} already exists; only one profile is allowed"
                    )

            try:
                conn.execute(
                    "INSERT INTO profile (uid, profile_name, selected_image) VALUES (?, ?, ?)",
                    (profile.id, profile.display_name, profile.picture_ref)
                )
            except sqlite3.IntegrityError as e:
                raise ConstraintViolation(f"Cannot insert profile {profile.id}: {e}") from e

        logger.info(f"Inserted profile {profile.id}")

    @records_errors("profile_store", ErrorSeverity.MEDIUM)
    def update(self, profile: Profile) -> None:
        """Overwrite the profile with the same id. Last write wins."""
        with self._connect() as conn:
            try:
                cursor = conn.execute(
                    "UPDATE profile SET profile_name = ?, selected_image = ? WHERE uid = ?",
                    (profile.display_name, profile.picture_ref, profile.id)
                )
            except sqlite3.IntegrityError as e:
                raise ConstraintViolation(f"Cannot update profile {profile.id}: {e}") from e

            if cursor.rowcount == 0:
                raise NotFound(f"Profile {profile.id} does not exist")

        logger.debug(f"Updated profile {profile.id}")

    @records_errors("profile_store", ErrorSeverity.MEDIUM)
    def delete(self, profile: Profile) -> None:
        """Remove the profile with the same id."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM profile WHERE uid = ?", (profile.id,))
            if cursor.rowcount == 0:
                raise NotFound(f"Profile {profile.id} does not exist")

        logger.info(f"Deleted profile {profile.id}")

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM profile").fetchone()[0]

    def schema_version(self) -> int:
        with self._connect() as conn:
            return conn.execute("PRAGMA user_version").fetchone()[0]

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success, roll back on error, always close."""
        conn = sqlite3.connect(self.database_path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _initialize_database(self) -> None:
        """Create the profile table and stamp the schema version."""
        directory = os.path.dirname(self.database_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with self._connect() as conn:
            version = conn.execute("PRAGMA user_version").fetchone()[0]

            if version > SCHEMA_VERSION:
                logger.warning(f"Database schema version {version} is newer than "
                               f"supported version {SCHEMA_VERSION}")
                return

            # Single quotes are doubled for the SQL literal
            default_name = DEFAULT_DISPLAY_NAME.replace("'", "''")
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS profile (
                    uid INTEGER PRIMARY KEY NOT NULL,
                    profile_name TEXT NOT NULL DEFAULT '{default_name}'
                        CHECK (length(trim(profile_name)) > 0),
                    selected_image TEXT NOT NULL
                )
            """)
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

        logger.debug(f"Profile database ready at {self.database_path}")
