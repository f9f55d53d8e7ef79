"""Directory model: an ordered, uniquely named collection of items."""

import bisect
import logging
from typing import Any, ClassVar

from pydantic import PrivateAttr

from filesystem.exceptions import (
    DirectoryNotWritableError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    NotWritableError,
)
from filesystem.item import Item

logger = logging.getLogger(__name__)


def _sort_key(item: Item) -> str:
    return item.name.lower()


class Directory(Item):
    """A directory holding files and other directories.

    Children are kept sorted by lowercased name, and no two children may share
    a name when case is ignored, so lookups by name are binary searches. A
    directory can never end up inside itself: adding a directory that is this
    directory or one of its ancestors is refused.

    Positions are 1-based: get_item_at(1) is the first child.

    Args:
        directory: Directory to place the new directory in (None for a root).
        name: Directory name (default "new_directory" when invalid).
        writable: Whether the directory may be modified.
    """

    default_name: ClassVar[str] = "new_directory"
    not_writable_error: ClassVar[type[NotWritableError]] = DirectoryNotWritableError

    _items: list[Item] = PrivateAttr(default_factory=list)

    @property
    def items(self) -> tuple[Item, ...]:
        """Children in order, as a read-only tuple."""
        return tuple(self._items)

    # ===== Lookup =====

    def get_nb_items(self) -> int:
        return len(self._items)

    def exists(self, name: str) -> bool:
        """Check whether a child with the given name exists, ignoring case."""
        return self._find(name) is not None

    def get_item(self, name: str) -> Item:
        """Return the child with the given name, ignoring case.

        Args:
            name: Name of the child to look up.

        Returns:
            The matching child.

        Raises:
            InvalidArgumentError: If no child has that name.
        """
        item = self._find(name)
        if item is None:
            raise InvalidArgumentError(
                f"No item named '{name}' exists in directory '{self.name}'"
            )
        return item

    def get_item_at(self, index: int) -> Item:
        """Return the child at the given 1-based position.

        Raises:
            IndexOutOfBoundsError: If index is not between 1 and get_nb_items().
        """
        if not 1 <= index <= len(self._items):
            raise IndexOutOfBoundsError(self, index)
        return self._items[index - 1]

    def has_as_item(self, item: Item) -> bool:
        """Check whether item itself (not merely its name) is a child."""
        return isinstance(item, Item) and self._find(item.name) is item

    def get_index_of(self, item: Item) -> int:
        """Return the 1-based position of a child.

        Raises:
            InvalidArgumentError: If item is not a child of this directory.
        """
        if not self.has_as_item(item):
            raise InvalidArgumentError(
                f"'{item.name}' is not an item of directory '{self.name}'", item
            )
        return self._search(item.name) + 1

    # ===== Hierarchy =====

    def is_direct_or_indirect_subdirectory_of(self, directory: "Directory") -> bool:
        """Check whether directory is an ancestor of this directory.

        Walks the chain of containing directories up to the root.
        """
        parent = self.directory
        while parent is not None:
            if parent is directory:
                return True
            parent = parent.directory
        return False

    def can_add(self, item: Item) -> bool:
        """Check whether item could be placed in this directory.

        Refused when a child already uses the item's name (ignoring case),
        when item is this directory, or when item is a directory containing
        this one.
        """
        if self.exists(item.name):
            return False

        if item is self:
            return False

        if isinstance(item, Directory) and self.is_direct_or_indirect_subdirectory_of(item):
            return False

        return True

    def add_item(self, item: Item) -> None:
        """Insert item among the children at its sorted position.

        Args:
            item: A root item to place in this directory.

        Raises:
            InvalidArgumentError: If can_add(item) fails or item already
                belongs to a directory.
            NotWritableError: If this directory is not writable.
        """
        if not self.can_add(item):
            raise InvalidArgumentError(
                f"{type(item).__name__} '{item.name}' cannot be added to "
                f"directory '{self.name}'",
                item,
            )

        current = item.directory
        if current is not None:
            raise InvalidArgumentError(
                f"'{item.name}' already belongs to directory '{current.name}'; "
                "detach it with make_root() first",
                item,
            )

        if not self.writable:
            raise self.not_writable_error(self)

        self._items.insert(self._search(item.name), item)
        item._set_directory(self)

        logger.debug(f"Added '{item.name}' to '{self.name}'")

    def remove_item(self, item: Item) -> None:
        """Remove a child from this directory.

        The removed child becomes a root. If this directory is not a root
        itself, it is then detached from its own directory as well, which in
        turn repeats upwards for every non-root ancestor.

        Args:
            item: The child to remove.

        Raises:
            InvalidArgumentError: If item is not a child of this directory.
            NotWritableError: If this directory (or, for the detachment, its
                own directory) is not writable.
        """
        if not self.has_as_item(item):
            raise InvalidArgumentError(
                f"'{item.name}' is not an item of directory '{self.name}'", item
            )

        if not self.writable:
            raise self.not_writable_error(self)

        del self._items[self._search(item.name)]
        item._set_directory(None)

        logger.debug(f"Removed '{item.name}' from '{self.name}'")

        if not self.is_root():
            self.make_root()

    # ===== Consistency =====

    def validate_state(self) -> list[str]:
        """Validate the ordering, uniqueness and links of this subtree.

        Returns:
            List of validation error messages (empty list if valid).
        """
        errors = []

        for i in range(len(self._items) - 1):
            curr = _sort_key(self._items[i])
            next_name = _sort_key(self._items[i + 1])
            if curr == next_name:
                errors.append(f"Duplicate name '{curr}' in '{self.name}'")
            elif curr > next_name:
                errors.append(
                    f"Items not sorted in '{self.name}': item {i + 1} ('{curr}') "
                    f"is after item {i + 2} ('{next_name}')"
                )

        for item in self._items:
            if item.directory is not self:
                errors.append(f"'{item.name}' does not link back to '{self.name}'")
            if item is self or (
                isinstance(item, Directory)
                and self.is_direct_or_indirect_subdirectory_of(item)
            ):
                errors.append(f"'{item.name}' contains '{self.name}' (cycle)")
                continue
            if isinstance(item, Directory):
                errors.extend(
                    f"{item.name}/{error}" for error in item.validate_state()
                )

        return errors

    # ===== Snapshots =====

    def to_dict(self) -> dict[str, Any]:
        """Convert directory and its whole subtree to a dictionary.

        Returns:
            Dictionary representation with children in order.
        """
        result = super().to_dict()
        result["items"] = [item.to_dict() for item in self._items]
        return result

    def get_summary(self) -> str:
        count = len(self._items)
        return f"Directory '{self.name}' ({count} item{'s' if count != 1 else ''})"

    # ===== Internal helpers =====

    def _search(self, name: str) -> int:
        # Leftmost position whose lowercased name is >= name.lower()
        return bisect.bisect_left(self._items, name.lower(), key=_sort_key)

    def _find(self, name: str) -> Item | None:
        index = self._search(name)
        if index < len(self._items) and _sort_key(self._items[index]) == name.lower():
            return self._items[index]
        return None

    def _rename_child(self, item: Item, name: str) -> None:
        """Rename a child and move it to its new sorted position.

        Raises:
            InvalidArgumentError: If another child already uses the name.
        """
        existing = self._find(name)
        if existing is not None and existing is not item:
            raise InvalidArgumentError(
                f"Directory '{self.name}' already contains an item named "
                f"'{existing.name}'",
                item,
            )

        del self._items[self._search(item.name)]
        item._set_field("name", name)
        self._items.insert(self._search(name), item)
