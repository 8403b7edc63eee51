"""
Authentication Manager - Session Principal and Sign-In

This module provides the authentication context the profile editor relies on.
It validates credentials against the user store, keeps the signed-in user in
Streamlit's session state, and bootstraps a default account on first start.

Key Features:
    - Salted password verification against the JSON user store
    - Session state management via Streamlit
    - Administrative user bootstrap

Security Considerations:
    - Passwords are never stored in plain text
    - Failed sign-ins do not reveal whether the email exists
"""

import streamlit as st
from typing import Optional
import logging

# Internal imports for configuration and utilities
from ..config.settings import DEFAULT_USERS, DEFAULT_PASSWORD
from ..models.user import User
from .password_utils import generate_salt, hash_password, verify_password
from .user_store import UserStore

# Set up module logger
logger = logging.getLogger(__name__)


class AuthManager:
    """
    Central authentication manager for sign-in and session management.

    All methods are static so pages and components can reach the current
    principal without passing a manager instance around. Persistence is
    delegated to ``UserStore``.
    """

    @staticmethod
    def store() -> UserStore:
        """Return the application's user store."""
        return UserStore()

    @staticmethod
    def bootstrap_users_if_needed() -> None:
        """
        Create default administrative users if no users exist in the system.

        Called during application startup so there is always at least one
        account available for sign-in.

        Configuration:
            Uses DEFAULT_USERS and DEFAULT_PASSWORD from config.settings
        """
        store = AuthManager.store()

        if store.all():
            logger.debug("Users already exist - skipping bootstrap")
            return

        logger.info("No users found - bootstrapping default admin accounts")
        new_users = {}

        for name, email in DEFAULT_USERS:
            logger.debug(f"Creating default user: {email}")

            salt = generate_salt()
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(DEFAULT_PASSWORD, salt),
                salt=salt,
                is_admin=True,
            )
            new_users[user.id] = user

        store.save_all(new_users)
        logger.info(f"Successfully bootstrapped {len(new_users)} admin users")

    @staticmethod
    def authenticate(email: str, password: str) -> Optional[User]:
        """
        Authenticate a user with email and password credentials.

        Args:
            email (str): User's email address (case-insensitive)
            password (str): Plain text password provided by user

        Returns:
            Optional[User]: User object if authentication succeeds, None otherwise.

        Example:
            >>> user = AuthManager.authenticate('admin@company.com', 'changeme')
            >>> if user:
            ...     AuthManager.login_user(user)
        """
        email = (email or "").strip()
        user = AuthManager.store().find_by_email(email)

        if user and verify_password(password, user.salt, user.password_hash):
            logger.info(f"Successful authentication for user: {email}")
            return user

        # Don't reveal whether the email exists
        logger.warning(f"Failed authentication attempt for email: {email}")
        return None

    @staticmethod
    def get_current_user() -> Optional[User]:
        """
        Retrieve the currently authenticated user from session state.

        Returns:
            Optional[User]: Currently authenticated user object, or None if not logged in.
        """
        return st.session_state.get("auth_user")

    @staticmethod
    def login_user(user: User) -> None:
        """Log in a user by storing their record in session state."""
        st.session_state.auth_user = user
        logger.info(f"User logged in: {user.email}")

    @staticmethod
    def logout_user() -> None:
        """Log out the current user and drop their per-session editor state."""
        current_user = AuthManager.get_current_user()
        if current_user:
            logger.info(f"User logged out: {current_user.email}")

        st.session_state.auth_user = None
        st.session_state.pop("profile_editor", None)

    @staticmethod
    def is_authenticated() -> bool:
        """Check if there is currently an authenticated user session."""
        return AuthManager.get_current_user() is not None

    @staticmethod
    def refresh_user(user: User) -> None:
        """Replace the session copy of the signed-in user after their record changed."""
        st.session_state.auth_user = user
        logger.debug(f"Session user refreshed: {user.email}")
