"""In-memory hierarchical filesystem package.

This package models directories and files arranged in a tree: every item has a
name, a writable flag and timestamps, and directories keep their children
sorted by case-insensitive name while refusing to contain themselves.
"""

from filesystem.config import (
    FilesystemSettings,
    configure_settings,
    get_settings,
    reset_settings,
)
from filesystem.directory import Directory
from filesystem.exceptions import (
    DirectoryNotWritableError,
    FileNotWritableError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    NotWritableError,
)
from filesystem.file import File
from filesystem.item import Item

__all__ = [
    "Item",
    "Directory",
    "File",
    "NotWritableError",
    "FileNotWritableError",
    "DirectoryNotWritableError",
    "InvalidArgumentError",
    "IndexOutOfBoundsError",
    "FilesystemSettings",
    "get_settings",
    "configure_settings",
    "reset_settings",
]
