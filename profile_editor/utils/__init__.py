"""Utilities module."""

from .file_utils import FileUtils
from .i18n import Translator
from .notifications import Notifier
