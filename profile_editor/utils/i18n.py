"""Internationalization utilities."""

import json
import logging
import streamlit as st
from typing import Optional
from ..config.paths import LANG_FILE_DIR

logger = logging.getLogger(__name__)

class Translator:
    """Handles translation and internationalization."""
    
    @staticmethod
    def t(key: str, default: Optional[str] = None, **replacements) -> str:
        """
        Translate a key to the current language.

        ``:placeholder`` tokens in the translated text are replaced with the
        matching keyword arguments, e.g. ``t("Avatar removed for :name", name="Jo")``.
        """
        text = Translator._lookup(key, default)
        # longest names first so ":name" does not clobber ":name_full"
        for name in sorted(replacements, key=len, reverse=True):
            text = text.replace(f":{name}", str(replacements[name]))
        return text

    @staticmethod
    def _lookup(key: str, default: Optional[str]) -> str:
        lang = Translator.get_language()
        path = LANG_FILE_DIR / f"{lang}.json"
        
        try:
            if path.exists():
                translations = json.loads(path.read_text(encoding="utf-8"))
                return translations.get(key, default or key)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable translation file {path}: {e}")
        
        return default or key
    
    @staticmethod
    def get_language() -> str:
        """Get the current language code."""
        return st.session_state.get("lang", "en")
