"""File model: a leaf item with a size and a type tag."""

import logging
from typing import Any, ClassVar

from pydantic import Field, field_validator

from filesystem.config import get_settings
from filesystem.exceptions import (
    FileNotWritableError,
    InvalidArgumentError,
    NotWritableError,
)
from filesystem.item import Item

logger = logging.getLogger(__name__)


class File(Item):
    """A file with a size in bytes and a fixed type.

    The allowed types, the default type and the maximum size come from the
    shared FilesystemSettings. An unknown type given at construction is
    replaced by the default type instead of being rejected.

    Args:
        directory: Directory to place the new file in (None for a root).
        name: File name (default "new-file" when invalid).
        writable: Whether the file may be modified.
        size: Size in bytes, between 0 and the maximum size.
        file_type: Type tag, one of the allowed types.
    """

    default_name: ClassVar[str] = "new-file"
    not_writable_error: ClassVar[type[NotWritableError]] = FileNotWritableError

    size: int = Field(default=0, frozen=True, description="File size in bytes", ge=0)
    file_type: str = Field(
        default_factory=lambda: get_settings().default_file_type,
        frozen=True,
        description="Type tag of the file",
    )

    @staticmethod
    def get_maximum_size() -> int:
        return get_settings().maximum_file_size

    @classmethod
    def is_valid_size(cls, size: int) -> bool:
        """Check whether size lies between 0 and the maximum size."""
        return 0 <= size <= cls.get_maximum_size()

    @staticmethod
    def can_have_as_type(file_type: Any) -> bool:
        """Check whether file_type is one of the allowed types."""
        return isinstance(file_type, str) and file_type in get_settings().allowed_file_types

    @field_validator("size")
    @classmethod
    def validate_size(cls, v: int) -> int:
        """Ensure size does not exceed the maximum size."""
        if not cls.is_valid_size(v):
            raise ValueError(f"size must be between 0 and {cls.get_maximum_size()}")
        return v

    @field_validator("file_type", mode="before")
    @classmethod
    def substitute_invalid_type(cls, v: Any) -> Any:
        """Replace an unknown type with the default type."""
        if cls.can_have_as_type(v):
            return v
        return get_settings().default_file_type

    def get_size(self) -> int:
        return self.size

    def get_type(self) -> str:
        return self.file_type

    def enlarge(self, delta: int) -> None:
        """Increase the size of this file by delta bytes.

        Raises:
            NotWritableError: If this file is not writable.
            InvalidArgumentError: If delta is not positive or the new size
                would exceed the maximum size.
        """
        self._change_size(delta, 1)

    def shorten(self, delta: int) -> None:
        """Decrease the size of this file by delta bytes.

        Raises:
            NotWritableError: If this file is not writable.
            InvalidArgumentError: If delta is not positive or the new size
                would drop below zero.
        """
        self._change_size(delta, -1)

    def _change_size(self, delta: int, sign: int) -> None:
        if not self.writable:
            raise self.not_writable_error(self)

        if delta <= 0:
            raise InvalidArgumentError(f"Size delta must be positive, got {delta}", self)

        new_size = self.size + sign * delta
        if not self.is_valid_size(new_size):
            raise InvalidArgumentError(
                f"Resizing '{self.name}' by {sign * delta} would give invalid size {new_size}",
                self,
            )

        self._set_field("size", new_size)
        self._set_modification_time()

        logger.debug(f"Resized '{self.name}' to {new_size} bytes")

    def to_dict(self) -> dict[str, Any]:
        """Convert file to dictionary for snapshots.

        Returns:
            Dictionary representation of this file.
        """
        result = super().to_dict()
        result["size"] = self.size
        result["file_type"] = self.file_type
        return result

    def get_summary(self) -> str:
        return f"File '{self.name}' ({self.file_type}, {self.size} bytes)"
