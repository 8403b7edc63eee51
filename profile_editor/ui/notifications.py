"""Rendering of queued user notifications."""

import streamlit as st
from ..utils.notifications import Notifier

ICONS = {"success": "✅", "info": "ℹ️", "warning": "⚠️", "error": "❌"}

def render_notifications(notifier: Notifier) -> None:
    """Show and clear every queued notification as a toast."""
    for item in notifier.drain():
        st.toast(item["message"], icon=ICONS.get(item["level"]))
