"""Authentication module."""

from .auth_manager import AuthManager
from .user_store import UserStore
from .password_utils import generate_salt, hash_password, verify_password
