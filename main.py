"""
Profile Editor - Main Application Entry Point

Runs the account settings page for signed-in users as a Streamlit app:

    streamlit run main.py

Flow:
    main() → configure → authenticate → render profile page

Architecture:
    1. Configuration Setup (config/)
    2. Authentication Layer (auth/)
    3. File Storage (storage/)
    4. Profile Component (components/)
    5. UI Components and Pages (ui/, pages/)
"""

import streamlit as st

# Core configuration and setup components
from profile_editor.config import PAGE_CONFIG, setup_logging, initialize_session_state
st.set_page_config(**PAGE_CONFIG)

# Authentication and security components
from profile_editor.auth import AuthManager

# User interface and presentation components
from profile_editor.ui import UIStyles, Sidebar, Header, AuthComponents

# Application pages and views
from profile_editor.pages import ProfilePage


def main():
    """
    Main application function that initializes and runs the profile editor.

    Side Effects:
        - Modifies Streamlit session state
        - Creates log files in assets/logs/
        - May create the user store with a default administrator
    """
    # Must be called after set_page_config() to avoid Streamlit API errors
    initialize_session_state()

    logger = setup_logging()
    logger.info("Profile editor started")

    UIStyles.apply_theme()

    # Creates a default admin user if no users exist
    AuthManager.bootstrap_users_if_needed()

    Sidebar().render()

    header = Header()
    header.render()

    if not AuthComponents.check_authentication():
        logger.info("Authentication failed - stopping execution")
        st.stop()

    ProfilePage.render()


if __name__ == "__main__":
    main()
