"""File storage module."""

from .disks import LocalDisk, Storage
