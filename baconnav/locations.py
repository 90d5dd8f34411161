"""Location entries and the navigation state over them.

This module has no filesystem or UI concerns. ``LocationStore`` owns the
current location set and the 1-based selection index, 0 meaning none.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Location:
    """One diagnostic read from the locations file."""

    category: str
    filename: str
    line: int  # 1-based
    column: int  # 1-based
    text: str = ""

    @property
    def path(self) -> Path:
        return Path(self.filename)

    def same_place(self, other: Location | None) -> bool:
        """Return whether both locations point at the same file position."""
        if other is None:
            return False
        return (
            self.filename == other.filename
            and self.line == other.line
            and self.column == other.column
        )


class LocationStore:
    """Ordered locations plus the current selection.

    ``0 <= index <= len(self)`` holds after every operation.
    """

    def __init__(self, locations: Iterable[Location] = ()) -> None:
        self._locations: tuple[Location, ...] = tuple(locations)
        self._index = 0

    @property
    def locations(self) -> tuple[Location, ...]:
        return self._locations

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Location | None:
        if self._index == 0:
            return None
        return self._locations[self._index - 1]

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)

    def reload(self, new_locations: Iterable[Location]) -> None:
        """Replace the location set, keeping the selection when it survives.

        The previously selected location is looked up by position (file, line
        and column); the first equal entry of the new set becomes selected.
        """
        previous = self.current
        self._locations = tuple(new_locations)
        self._index = 0
        if previous is None:
            return
        for idx, location in enumerate(self._locations, start=1):
            if location.same_place(previous):
                self._index = idx
                break

    def clear_selection(self) -> None:
        self._index = 0

    def advance(self, direction: int) -> Location | None:
        """Move the selection by one step, wrapping at both ends.

        Returns the new selection, or ``None`` when there are no locations.
        """
        count = len(self._locations)
        if count == 0:
            return None
        step = 1 if direction >= 0 else -1
        index = self._index + step
        if index < 1:
            index = count
        elif index > count:
            index = 1
        self._index = index
        return self.current

    def next(self) -> Location | None:
        return self.advance(1)

    def previous(self) -> Location | None:
        return self.advance(-1)

    def select(self, index: int) -> Location | None:
        """Select the 1-based ``index``; out-of-range requests are ignored."""
        if index < 1 or index > len(self._locations):
            return None
        self._index = index
        return self.current
