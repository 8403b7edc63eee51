"""Header component for the application."""

import logging
import streamlit as st
from ..config.paths import LOGO_CANDIDATES
from ..config.settings import STORAGE_DISK
from ..storage.disks import Storage
from ..utils.file_utils import FileUtils
from ..auth.auth_manager import AuthManager

logger = logging.getLogger(__name__)

class Header:
    """Application header component."""
    
    def __init__(self, storage_disk: str = STORAGE_DISK):
        self.logo_bytes = FileUtils.load_logo_bytes(LOGO_CANDIDATES)
        self.disk = Storage.disk(storage_disk)
    
    def render(self):
        """Render the header with logo, title, and user avatar."""
        cl, cm, cr = st.columns([0.18, 0.64, 0.18])
        
        with cl:
            st.markdown(FileUtils.create_image_tag(self.logo_bytes, 64, alt="Logo"), unsafe_allow_html=True)
        
        with cm:
            st.markdown("<div class='brand-title'>Profile</div>", unsafe_allow_html=True)
        
        with cr:
            user = AuthManager.get_current_user()
            if user:
                st.markdown(self.avatar_tag(user, 48), unsafe_allow_html=True)

    def avatar_tag(self, user, size: int) -> str:
        """The user's stored photo, or their initials when there is none."""
        if user.avatar and self.disk.exists(user.avatar):
            return FileUtils.create_image_tag(self.disk.get(user.avatar), size, alt=user.name, rounded=True)
        if user.avatar:
            logger.warning(f"Avatar {user.avatar} for user {user.id} is missing from disk {self.disk.name}")
        return FileUtils.create_initials_tag(user.get_initials(), size)
