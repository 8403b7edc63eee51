"""Authentication UI components."""

import streamlit as st
from ..auth.auth_manager import AuthManager
from ..utils.i18n import Translator

class AuthComponents:
    """UI components for authentication."""
    
    @staticmethod
    def render_sign_in():
        """Render the sign-in form."""
        t = Translator.t
        st.markdown(f"### {t('Sign In To Continue.')}")
        
        with st.form("signin_form"):
            email = st.text_input(t("E-Mail Address"), autocomplete="email")
            password = st.text_input(t("Password"), type="password")
            submit = st.form_submit_button(t("Sign In"))
            
            if submit:
                if not email or not password:
                    st.error(t("Please enter both email and password."))
                else:
                    user = AuthManager.authenticate(email, password)
                    if user:
                        AuthManager.login_user(user)
                        st.success(t("Signed in successfully!"))
                        st.rerun()
                    else:
                        st.error(t("Invalid email or password."))
    
    @staticmethod
    def check_authentication() -> bool:
        """Check if user is authenticated and handle sign-in if not."""
        if not AuthManager.is_authenticated():
            AuthComponents.render_sign_in()
            return False
        return True
