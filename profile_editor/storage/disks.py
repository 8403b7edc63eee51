"""Named file storage disks backed by local directories."""

import logging
import secrets
from pathlib import Path
from typing import Dict, Optional, Union

from ..config.paths import ensure_dir
from ..config.settings import STORAGE_DISKS

logger = logging.getLogger(__name__)


class LocalDisk:
    """
    A storage disk rooted at a local directory.

    Files are addressed by references relative to the root, such as
    ``avatars/3f2a...c1.png``. References that resolve outside the root
    are rejected.
    """

    def __init__(self, root: Union[str, Path], name: str = "local"):
        self.name = name
        self.root = Path(root)
        ensure_dir(self.root)

    def path(self, reference: str) -> Path:
        """Resolve a reference to an absolute path inside the disk root."""
        file_path = (self.root / reference).resolve()
        if self.root.resolve() not in file_path.parents:
            raise ValueError(f"Invalid storage reference: {reference}")
        return file_path

    def store(self, content: bytes, directory: str, extension: Optional[str] = None) -> str:
        """
        Write content under ``directory`` with a random 40 character name.

        Returns:
            The reference of the stored file, relative to the disk root.
        """
        filename = secrets.token_hex(20)
        if extension:
            filename = f"{filename}.{extension}"
        reference = f"{directory.strip('/')}/{filename}" if directory else filename

        file_path = self.path(reference)
        ensure_dir(file_path.parent)
        file_path.write_bytes(content)

        logger.info(f"Stored {len(content)} bytes at {self.name}:{reference}")
        return reference

    def get(self, reference: str) -> bytes:
        return self.path(reference).read_bytes()

    def exists(self, reference: str) -> bool:
        try:
            return self.path(reference).is_file()
        except ValueError:
            return False

    def delete(self, reference: str) -> bool:
        """
        Remove a stored file.

        Returns:
            True if a file was removed, False if nothing was stored there.
        """
        file_path = self.path(reference)
        if not file_path.is_file():
            logger.warning(f"Nothing to delete at {self.name}:{reference}")
            return False
        file_path.unlink()
        logger.info(f"Deleted {self.name}:{reference}")
        return True


class Storage:
    """Registry of named disks configured in ``settings.STORAGE_DISKS``."""

    _disks: Dict[str, LocalDisk] = {}

    @staticmethod
    def disk(name: str) -> LocalDisk:
        """
        Return the disk configured under ``name``.

        Raises:
            ValueError: If no disk with that name is configured.
        """
        if name in Storage._disks:
            return Storage._disks[name]
        if name not in STORAGE_DISKS:
            raise ValueError(f"Storage disk [{name}] is not configured.")
        disk = LocalDisk(STORAGE_DISKS[name], name=name)
        Storage._disks[name] = disk
        return disk

    @staticmethod
    def fake(name: str, root: Union[str, Path]) -> LocalDisk:
        """Replace the disk ``name`` with one rooted at ``root`` (for tests)."""
        disk = LocalDisk(root, name=name)
        Storage._disks[name] = disk
        return disk

    @staticmethod
    def forget(name: Optional[str] = None) -> None:
        """Drop cached disks so the next lookup re-reads the configuration."""
        if name is None:
            Storage._disks.clear()
        else:
            Storage._disks.pop(name, None)
