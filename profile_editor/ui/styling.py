"""UI styling and theming."""

import streamlit as st
from ..config.settings import BG, POP

class UIStyles:
    """Manages UI styling and theme application."""
    
    @staticmethod
    def apply_theme():
        """Apply the custom theme styling to the Streamlit app."""
        theme_css = f"""
        <style>
          .stApp {{
            background: {BG};
            color: #111;
            font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif;
          }}

          h1, h2, h3, h4, .brand-title, .stTabs [data-baseweb="tab"] p {{
            font-weight: 500 !important;
            letter-spacing: 0.2px;
          }}

          .brand-title {{ font-size: 26px; text-align: center; }}

          .avatar-initials {{
            border-radius: 50%;
            background: {POP};
            color: #fff;
            text-align: center;
            font-weight: 500;
          }}

          .field-hint {{ color: #666; font-size: 0.85rem; }}

          .stTextInput input {{
            border: 1px solid #111;
            background: #fff;
          }}

          .stTabs [data-baseweb="tab-list"] button[aria-selected="true"] {{
            box-shadow: inset 0 -2px 0 0 {POP};
          }}
        </style>
        """
        
        st.markdown(theme_css, unsafe_allow_html=True)
