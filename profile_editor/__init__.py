"""Profile editor: a Streamlit component for editing the signed-in user's profile."""

__version__ = "1.0.0"
