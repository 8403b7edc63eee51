"""Validation outcomes reported by components."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ProfileValidationError(Exception):
    """Field-keyed validation failure. Recoverable: show the messages and let the user correct them."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        first = next((messages[0] for messages in errors.values() if messages), "The given data was invalid.")
        super().__init__(first)


class ValidationResult(BaseModel):
    """Outcome of a field update or submission."""
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def first(self, field: str) -> Optional[str]:
        """First message for ``field``, or None if it passed."""
        messages = self.errors.get(field)
        return messages[0] if messages else None
