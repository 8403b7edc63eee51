"""Application settings and constants."""

import streamlit as st
from .paths import STORAGE_ROOT

# Visual Theme
BG = "#F4F4F0"       # Paper
POP = "#6C5CE7"      # Accent for active tabs and buttons

def initialize_session_state():
    """Initialize session state defaults. Call after st.set_page_config()."""
    if "lang" not in st.session_state:
        st.session_state.lang = "en"

    if "auth_user" not in st.session_state:
        st.session_state.auth_user = None

    if "notifications" not in st.session_state:
        st.session_state.notifications = []

# Page configuration
PAGE_CONFIG = {
    "page_title": "Profile",
    "page_icon": "👤",
    "layout": "centered",
    "initial_sidebar_state": "expanded",
}

# Default users for bootstrap
DEFAULT_USERS = [
    ("Administrator", "admin@company.com"),
]

DEFAULT_PASSWORD = "changeme"

# File storage disks, selected by name
STORAGE_DISKS = {
    "local": STORAGE_ROOT / "app",
    "public": STORAGE_ROOT / "public",
}

STORAGE_DISK = "public"

# Profile rules
AVATAR_DIRECTORY = "avatars"
AVATAR_EXTENSIONS = ("png", "jpg", "jpeg", "bmp", "gif")
AVATAR_MAX_KILOBYTES = 512

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
