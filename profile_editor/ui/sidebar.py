"""Sidebar component for navigation."""

import streamlit as st
from ..config.paths import LOGO_CANDIDATES
from ..utils.file_utils import FileUtils
from ..utils.i18n import Translator
from ..auth.auth_manager import AuthManager

class Sidebar:
    """Application sidebar with the signed-in user and sign-out control."""
    
    def __init__(self):
        self.logo_bytes = FileUtils.load_logo_bytes(LOGO_CANDIDATES)
        self.t = Translator.t
    
    def render(self):
        """Render the logo, the signed-in user and the sign-out button."""
        with st.sidebar:
            logo_tag = FileUtils.create_image_tag(self.logo_bytes, 64, alt="Logo")
            st.markdown(
                f"<div style='display:flex;justify-content:center;margin-bottom:10px'>{logo_tag}</div>",
                unsafe_allow_html=True
            )
            
            user = AuthManager.get_current_user()
            if not user:
                return

            st.markdown("---")
            st.markdown(f"**{user.name}**")
            st.caption(user.email)
            if st.button(self.t("Sign Out", "Sign Out")):
                AuthManager.logout_user()
                st.rerun()
