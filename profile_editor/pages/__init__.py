"""Pages module for different application views."""

from .profile_page import ProfilePage
