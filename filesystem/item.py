"""Base model shared by every filesystem item."""

import logging
import re
import weakref
from abc import abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from filesystem.exceptions import InvalidArgumentError, NotWritableError

if TYPE_CHECKING:
    from filesystem.directory import Directory

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Item(BaseModel):
    """Base class for directories and files.

    An item has a name, a writable flag gating every mutation, an immutable
    creation time and a modification time that stays None until the first
    successful mutation. Items are created either as roots or already placed
    in a directory; the link back to that directory is a weak reference, the
    directory alone owns its children.

    Items are entities rather than values: equality is identity, so two items
    with identical fields are still distinct members of a tree.

    Args:
        directory: Directory to place the new item in (None for a root).
        name: Item name; invalid names are replaced by the class default.
        writable: Whether the item may be modified.
        creation_time: When the item was created (defaults to now).
        modification_time: When the item was last modified, if ever.

    Raises:
        InvalidArgumentError: If directory cannot accept the new item.
        NotWritableError: If directory is not writable.
    """

    default_name: ClassVar[str] = "new_item"
    not_writable_error: ClassVar[type[NotWritableError]] = NotWritableError

    model_config = {"validate_assignment": True}

    name: str = Field(
        default="",
        validate_default=True,
        frozen=True,
        description="Item name made of letters, digits, dots, hyphens and underscores",
    )
    writable: bool = Field(
        default=True, description="Whether the item may be modified"
    )
    creation_time: datetime = Field(
        default_factory=utc_now,
        frozen=True,
        description="When the item was created",
    )
    modification_time: Optional[datetime] = Field(
        default=None, frozen=True, description="When the item was last modified"
    )

    _directory_ref: Optional[weakref.ReferenceType] = PrivateAttr(default=None)

    def __init__(self, directory: Optional["Directory"] = None, **data: Any):
        super().__init__(**data)
        if directory is not None:
            directory.add_item(self)

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} '{self.name}' belongs to one tree and cannot be copied")

    def __deepcopy__(self, memo: Optional[dict[int, Any]] = None):
        raise TypeError(f"{type(self).__name__} '{self.name}' belongs to one tree and cannot be copied")

    # ===== Validation =====

    @staticmethod
    def is_valid_name(name: Any) -> bool:
        """Check whether name is a non-empty string of legal characters.

        Legal characters are letters, digits, dots, hyphens and underscores.
        """
        return isinstance(name, str) and NAME_PATTERN.fullmatch(name) is not None

    @staticmethod
    def is_valid_creation_time(date: Optional[datetime]) -> bool:
        """Check whether date is a timezone-aware time not in the future."""
        return date is not None and date.tzinfo is not None and date <= utc_now()

    def can_have_as_modification_time(self, date: Optional[datetime]) -> bool:
        """Check whether date may be this item's modification time.

        None is always acceptable. Otherwise the date must be timezone-aware
        and lie between the creation time and now.
        """
        if date is None:
            return True
        if date.tzinfo is None:
            return False
        return self.creation_time <= date <= utc_now()

    @field_validator("name", mode="before")
    @classmethod
    def substitute_invalid_name(cls, v: Any) -> Any:
        """Replace an invalid name with the default name of the class."""
        if cls.is_valid_name(v):
            return v
        return cls.default_name

    @field_validator("creation_time")
    @classmethod
    def validate_creation_time(cls, v: datetime) -> datetime:
        """Ensure creation time is timezone-aware and not in the future."""
        if v.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware (recommend UTC)")
        if not cls.is_valid_creation_time(v):
            raise ValueError(f"creation_time {v} lies in the future")
        return v

    @model_validator(mode="after")
    def validate_modification_time(self) -> "Item":
        """Ensure modification time lies between creation time and now."""
        if self.modification_time is not None:
            if self.modification_time.tzinfo is None:
                raise ValueError("Datetime must be timezone-aware (recommend UTC)")
            if not self.can_have_as_modification_time(self.modification_time):
                raise ValueError(
                    f"modification_time {self.modification_time} must lie between "
                    f"creation_time {self.creation_time} and now"
                )
        return self

    # ===== Queries =====

    def get_name(self) -> str:
        return self.name

    def is_writable(self) -> bool:
        return self.writable

    def get_creation_time(self) -> datetime:
        return self.creation_time

    def get_modification_time(self) -> Optional[datetime]:
        return self.modification_time

    @property
    def directory(self) -> Optional["Directory"]:
        """The directory containing this item, or None for a root."""
        if self._directory_ref is None:
            return None
        return self._directory_ref()

    def get_directory(self) -> Optional["Directory"]:
        return self.directory

    def is_root(self) -> bool:
        """Check whether this item has no containing directory."""
        return self.directory is None

    def get_root(self) -> "Directory":
        """Return the topmost directory above this item.

        Returns:
            The root reached by following directory links upwards.

        Raises:
            InvalidArgumentError: If this item is itself a root.
        """
        parent = self.directory
        if parent is None:
            raise InvalidArgumentError(
                f"'{self.name}' is a root and has no directory to ascend from", self
            )

        while parent.directory is not None:
            parent = parent.directory
        return parent

    def has_overlapping_use_period(self, other: Optional["Item"]) -> bool:
        """Check whether the use periods of this item and other overlap.

        The use period of an item runs from its creation time to its
        modification time. Items that were never modified have no use period.
        A period counts as disjoint only when it starts before the other
        item's creation time and also ends before it.

        Args:
            other: The item to compare with.

        Returns:
            True if both items have a use period and they overlap.
        """
        if other is None:
            return False
        if self.modification_time is None or other.modification_time is None:
            return False

        return not (
            self.creation_time < other.creation_time
            and self.modification_time < other.creation_time
        ) and not (
            other.creation_time < self.creation_time
            and other.modification_time < self.creation_time
        )

    # ===== Mutations =====

    def change_name(self, name: str) -> None:
        """Rename this item.

        An invalid name is ignored: nothing changes and nothing is raised.
        Inside a directory, the new name must not clash with a sibling's name
        (ignoring case) and the directory keeps its children ordered.

        Args:
            name: The new name.

        Raises:
            NotWritableError: If this item is not writable.
            InvalidArgumentError: If a sibling already uses the name.
        """
        if not self.writable:
            raise self.not_writable_error(self)

        if not self.is_valid_name(name):
            logger.debug(f"Ignoring invalid name {name!r} for '{self.name}'")
            return

        old_name = self.name
        parent = self.directory
        if parent is not None:
            parent._rename_child(self, name)
        else:
            self._set_field("name", name)
        self._set_modification_time()

        logger.debug(f"Renamed '{old_name}' to '{name}'")

    def set_writable(self, writable: bool) -> None:
        self.writable = writable

    def make_root(self) -> None:
        """Detach this item from its directory.

        Does nothing for an item that is already a root.

        Raises:
            NotWritableError: If the containing directory is not writable.
        """
        parent = self.directory
        if parent is None:
            return

        if not parent.writable:
            raise parent.not_writable_error(parent)

        if parent.has_as_item(self):
            parent.remove_item(self)
        self._set_directory(None)

        logger.debug(f"'{self.name}' detached from '{parent.name}'")

    # ===== Snapshots =====

    def to_dict(self) -> dict[str, Any]:
        """Convert item to dictionary for snapshots.

        Returns:
            Dictionary representation of this item.
        """
        parent = self.directory
        return {
            "kind": type(self).__name__.lower(),
            "name": self.name,
            "writable": self.writable,
            "creation_time": self.creation_time.isoformat(),
            "modification_time": (
                self.modification_time.isoformat() if self.modification_time else None
            ),
            "directory": parent.name if parent is not None else None,
        }

    @abstractmethod
    def get_summary(self) -> str:
        """Return a one-line human-readable description of this item."""
        pass

    # ===== Internal helpers =====

    def _set_field(self, field: str, value: Any) -> None:
        # Writes a frozen field; callers keep the directory invariants themselves
        self.__dict__[field] = value

    def _set_modification_time(self) -> None:
        self._set_field("modification_time", utc_now())

    def _set_directory(self, directory: Optional["Directory"]) -> None:
        # Only Directory.add_item, Directory.remove_item and make_root call this
        self._directory_ref = weakref.ref(directory) if directory is not None else None
