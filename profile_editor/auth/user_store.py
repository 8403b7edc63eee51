"""JSON-backed persistence for user records."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from ..config.paths import USERS_FILE
from ..models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """
    Persists user records in a single JSON file keyed by user id.

    Reads tolerate a missing or corrupted file (an empty store is returned
    and the problem is logged). Writes replace the whole file and let I/O
    errors propagate so callers never report an unsaved change as saved.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else USERS_FILE

    def load_all(self) -> Dict[str, User]:
        """Load every user record, keyed by id."""
        if not self.path.exists():
            logger.info(f"User file {self.path} does not exist - returning empty user store")
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            users = {user_id: User(**user_data) for user_id, user_data in data.items()}
            logger.debug(f"Loaded {len(users)} users from {self.path}")
            return users
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse user store JSON: {e}")
            return {}
        except ValidationError as e:
            logger.error(f"User store contains an invalid record: {e}")
            return {}

    def save_all(self, users: Dict[str, User]) -> None:
        """Replace the stored records with ``users``."""
        data = {user_id: user.model_dump() for user_id, user in users.items()}
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug(f"Saved {len(users)} users to {self.path}")

    def all(self) -> List[User]:
        return list(self.load_all().values())

    def get(self, user_id: str) -> Optional[User]:
        return self.load_all().get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email address, ignoring case and surrounding whitespace."""
        needle = (email or "").strip().casefold()
        for user in self.load_all().values():
            if user.email.strip().casefold() == needle:
                return user
        return None

    def exists_with_email(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """
        Check whether another record already uses ``email``.

        Args:
            email: Candidate address (compared case-insensitively)
            exclude_id: Id of the record being edited, which never conflicts with itself
        """
        needle = (email or "").strip().casefold()
        return any(
            user.email.strip().casefold() == needle
            for user_id, user in self.load_all().items()
            if user_id != exclude_id
        )

    def save(self, user: User) -> User:
        """Insert or replace a single record."""
        users = self.load_all()
        users[user.id] = user.model_copy()
        self.save_all(users)
        logger.info(f"Saved user {user.id} ({user.email})")
        return user

    def update(self, user_id: str, **changes) -> Optional[User]:
        """
        Write only the given attributes of a stored record.

        Returns:
            The updated record, or None if no record has that id.
        """
        users = self.load_all()
        user = users.get(user_id)
        if user is None:
            logger.warning(f"Cannot update unknown user {user_id}")
            return None
        updated = user.model_copy(update=changes)
        users[user_id] = updated
        self.save_all(users)
        logger.info(f"Updated user {user_id}: {', '.join(sorted(changes))}")
        return updated
