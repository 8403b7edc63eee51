"""Profile page: renders the account form and dispatches widget events to the profile editor."""

import logging
import streamlit as st
from ..auth.auth_manager import AuthManager
from ..components.profile import ProfileEditor
from ..config.settings import AVATAR_EXTENSIONS, STORAGE_DISK
from ..ui.notifications import render_notifications
from ..utils.file_utils import FileUtils
from ..utils.i18n import Translator
from ..utils.notifications import Notifier

logger = logging.getLogger(__name__)

EDITOR_KEY = "profile_editor"
UPLOADER_KEY = "profile_avatar_uploader"

class ProfilePage:
    """Account settings page for the signed-in user."""

    @staticmethod
    def _editor() -> ProfileEditor:
        """Return this session's editor, mounting one on first use."""
        editor = st.session_state.get(EDITOR_KEY)
        if editor is None:
            editor = ProfileEditor(
                storage_disk=STORAGE_DISK,
                notifier=Notifier(st.session_state.setdefault("notifications", [])),
            )
            editor.mount()
            st.session_state[EDITOR_KEY] = editor
            ProfilePage._sync_widgets(editor)
        return editor

    @staticmethod
    def _sync_widgets(editor: ProfileEditor):
        """Seed widget values from the editor's working copy."""
        st.session_state.profile_name = editor.user.name
        st.session_state.profile_email = editor.user.email
        st.session_state.profile_password = ""
        st.session_state.profile_password_confirmation = ""
        st.session_state.setdefault(UPLOADER_KEY, 0)

    @staticmethod
    def _reset_uploader():
        # file uploaders cannot be cleared through session state, so swap the widget key
        st.session_state[UPLOADER_KEY] = st.session_state.get(UPLOADER_KEY, 0) + 1

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    @staticmethod
    def _on_name_change():
        ProfilePage._editor().update_name(st.session_state.profile_name)

    @staticmethod
    def _on_email_change():
        ProfilePage._editor().update_email(st.session_state.profile_email)

    @staticmethod
    def _on_avatar_change():
        key = f"profile_avatar_{st.session_state[UPLOADER_KEY]}"
        ProfilePage._editor().update_avatar(st.session_state.get(key))

    @staticmethod
    def _on_password_change():
        ProfilePage._editor().update_password(st.session_state.profile_password)

    @staticmethod
    def _on_confirmation_change():
        ProfilePage._editor().update_password_confirmation(st.session_state.profile_password_confirmation)

    @staticmethod
    def _on_delete_avatar():
        editor = ProfilePage._editor()
        if editor.delete_avatar():
            AuthManager.refresh_user(editor.user)
            ProfilePage._reset_uploader()

    @staticmethod
    def _on_submit():
        editor = ProfilePage._editor()
        # a field still focused when Save is clicked may not have fired its own callback
        editor.user.name = st.session_state.profile_name
        editor.user.email = st.session_state.profile_email
        editor.update_password(st.session_state.profile_password)
        editor.update_password_confirmation(st.session_state.profile_password_confirmation)
        try:
            result = editor.submit()
        except OSError:
            logger.exception("Saving the profile failed")
            editor.notifier.notify(Translator.t("Your profile could not be saved. Please try again."), level="error")
            return

        if result.ok:
            AuthManager.refresh_user(editor.user)
            st.session_state.profile_name = editor.user.name
            st.session_state.profile_email = editor.user.email
            st.session_state.profile_password = ""
            st.session_state.profile_password_confirmation = ""
            ProfilePage._reset_uploader()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @staticmethod
    def _field_errors(editor: ProfileEditor, field: str):
        for message in editor.errors.get(field, []):
            st.error(message)

    @staticmethod
    def _avatar_preview(editor: ProfileEditor) -> str:
        """Pending upload first, then the stored photo, then initials."""
        if editor.avatar is not None:
            return FileUtils.create_image_tag(editor.avatar.content, 96, alt=editor.user.name, rounded=True)
        if editor.user.avatar and editor.disk.exists(editor.user.avatar):
            return FileUtils.create_image_tag(
                editor.disk.get(editor.user.avatar), 96, alt=editor.user.name, rounded=True
            )
        return FileUtils.create_initials_tag(editor.user.get_initials(), 96)

    @staticmethod
    def render():
        """Render the profile page."""
        t = Translator.t
        editor = ProfilePage._editor()

        st.subheader(t("Profile"))
        (account_tab,) = st.tabs([t("Account")])

        with account_tab:
            st.text_input(t("Name"), key="profile_name", on_change=ProfilePage._on_name_change)
            ProfilePage._field_errors(editor, "name")

            st.text_input(
                t("E-Mail Address"),
                key="profile_email",
                autocomplete="email",
                on_change=ProfilePage._on_email_change,
            )
            ProfilePage._field_errors(editor, "email")

            st.markdown(
                f"**{t('User Photo')}** <span class='field-hint'>{t('Optional')}</span>",
                unsafe_allow_html=True,
            )
            preview_col, upload_col = st.columns([0.25, 0.75])
            with preview_col:
                st.markdown(ProfilePage._avatar_preview(editor), unsafe_allow_html=True)
            with upload_col:
                st.file_uploader(
                    t("User Photo"),
                    type=list(AVATAR_EXTENSIONS),
                    key=f"profile_avatar_{st.session_state[UPLOADER_KEY]}",
                    on_change=ProfilePage._on_avatar_change,
                    label_visibility="collapsed",
                )
                if editor.user.avatar:
                    st.button(t("Remove photo"), on_click=ProfilePage._on_delete_avatar)
            ProfilePage._field_errors(editor, "avatar")

            with st.container(border=True):
                st.markdown(f"**{t('Update Password')}**")
                password_col, confirm_col = st.columns(2)
                with password_col:
                    st.text_input(
                        t("Password"),
                        type="password",
                        key="profile_password",
                        autocomplete="new-password",
                        help=t("Leave blank to keep current password."),
                        on_change=ProfilePage._on_password_change,
                    )
                    st.caption(t("Optional"))
                    ProfilePage._field_errors(editor, "password")
                with confirm_col:
                    st.text_input(
                        t("Confirm New Password"),
                        type="password",
                        key="profile_password_confirmation",
                        autocomplete="new-password",
                        on_change=ProfilePage._on_confirmation_change,
                    )
                    st.caption(t("Optional"))

            st.button(
                t("Save"),
                type="primary",
                on_click=ProfilePage._on_submit,
            )

        render_notifications(editor.notifier)
