"""Path configuration for the profile editor application."""

from datetime import datetime
from pathlib import Path

def ensure_dir(p: Path):
    """Ensure directory exists, handling conflicts by renaming existing files."""
    if p.exists() and not p.is_dir():
        backup = p.with_name(f"{p.name}.conflict.{datetime.now().strftime('%Y%m%d%H%M%S')}")
        p.rename(backup)
    p.mkdir(parents=True, exist_ok=True)

# Base directories
APP_DIR = Path.cwd()
ASSETS = APP_DIR / "assets"
ensure_dir(ASSETS)

# Asset subdirectories
STORAGE_ROOT = ASSETS / "storage"
ensure_dir(STORAGE_ROOT)

LOGS_DIR = ASSETS / "logs"
ensure_dir(LOGS_DIR)

LANG_FILE_DIR = ASSETS / "i18n"
ensure_dir(LANG_FILE_DIR)

# Key files
USERS_FILE = ASSETS / "users.json"

# Logo candidates
LOGO_CANDIDATES = [
    ASSETS / "logo.png",
    Path("logo.png"),
]
