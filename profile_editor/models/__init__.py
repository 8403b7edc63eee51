"""Data models."""

from .user import User
from .profile_form import AvatarUpload, ProfileForm, collect_errors
