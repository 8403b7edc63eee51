"""Reactive UI components."""

from .errors import ProfileValidationError, ValidationResult
from .profile import ProfileEditor
