"""User data model."""

import re
import uuid
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

class User(BaseModel):
    """User record persisted in the user store."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    email: str
    avatar: Optional[str] = None
    password_hash: str
    salt: str
    is_admin: bool = False
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())

    def get_initials(self) -> str:
        """Get user initials from name or email."""
        name_to_use = self.name or self.email
        parts = [p for p in re.split(r"\s+|_+|\.+|@", name_to_use) if p]
        return ((parts[0][0] if parts else "U") + (parts[1][0] if len(parts) > 1 else "")).upper()
