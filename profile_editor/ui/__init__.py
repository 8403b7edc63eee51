"""UI components module."""

from .styling import UIStyles
from .sidebar import Sidebar
from .header import Header
from .auth_components import AuthComponents
from .notifications import render_notifications
