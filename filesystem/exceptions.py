"""Exception classes for filesystem operations.

Every error carries the object it concerns so callers can inspect what was
refused without parsing the message.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from filesystem.directory import Directory
    from filesystem.item import Item


class NotWritableError(Exception):
    """Raised when a mutating operation targets an item that is not writable.

    For structural changes (detaching an item from its directory), the item
    carried is the directory whose writability was refused.

    Args:
        item: The item that could not be modified.
    """

    def __init__(self, item: "Item"):
        self.item = item
        super().__init__(f"{type(item).__name__} '{item.name}' is not writable")


class FileNotWritableError(NotWritableError):
    """Raised when the item that could not be modified is a File."""


class DirectoryNotWritableError(NotWritableError):
    """Raised when the item that could not be modified is a Directory."""


class InvalidArgumentError(ValueError):
    """Raised for name collisions, directory cycles and absent items.

    Args:
        message: Description of what was wrong with the argument.
        item: The offending item, if there is one.
    """

    def __init__(self, message: str, item: Optional[Any] = None):
        self.message = message
        self.item = item
        super().__init__(message)


class IndexOutOfBoundsError(IndexError):
    """Raised when a position lies outside a directory's valid range.

    Args:
        directory: The directory that was indexed.
        index: The requested (1-based) position.
    """

    def __init__(self, directory: "Directory", index: int):
        self.directory = directory
        self.index = index
        super().__init__(
            f"Index {index} out of range for directory '{directory.name}' "
            f"with {directory.get_nb_items()} items"
        )
