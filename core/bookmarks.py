"""
Bookmarks
Named viewpoints the map view can jump to.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from core.geodesy import is_valid_coordinate
from config import BOOKMARK_NAME_MAX_LENGTH, DEFAULT_BOOKMARKS


class BookmarkError(ValueError):
    """Raised when a bookmark cannot be added."""


@dataclass(frozen=True)
class Viewpoint:
    """
    Where the map looks.

    Attributes:
        lat: Center latitude in degrees
        lon: Center longitude in degrees
        scale: Map scale denominator (6000 means 1:6000)
    """
    lat: float
    lon: float
    scale: float


@dataclass(frozen=True)
class Bookmark:
    name: str
    viewpoint: Viewpoint


class BookmarkList:
    """
    Ordered list of bookmarks with unique, non-empty names.
    """

    def __init__(self, defaults=DEFAULT_BOOKMARKS):
        """
        Initialize bookmark list.

        Args:
            defaults: Iterable of (name, (lat, lon, scale)) seed bookmarks
        """
        self._bookmarks: List[Bookmark] = []

        for name, (lat, lon, scale) in defaults:
            self.add(name, Viewpoint(lat, lon, scale))

    def add(self, name, viewpoint):
        """
        Add a bookmark.

        Args:
            name: Bookmark name (surrounding whitespace is stripped)
            viewpoint: Viewpoint to store

        Returns:
            The new Bookmark

        Raises:
            BookmarkError: If the name is empty or already used, or the
                viewpoint is not a valid location
        """
        name = (name or "").strip()
        if not name or self.find(name) is not None:
            raise BookmarkError("Text name already exist or no text was entered.")
        if len(name) > BOOKMARK_NAME_MAX_LENGTH:
            raise BookmarkError(f"Bookmark name longer than {BOOKMARK_NAME_MAX_LENGTH} characters.")
        if not is_valid_coordinate(viewpoint.lat, viewpoint.lon) or not viewpoint.scale > 0:
            raise BookmarkError(f"Invalid viewpoint: {viewpoint}")

        bookmark = Bookmark(name, viewpoint)
        self._bookmarks.append(bookmark)
        return bookmark

    def get(self, index) -> Bookmark:
        """
        Get bookmark by position.

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= len(self._bookmarks):
            raise IndexError(f"No bookmark at index {index}")
        return self._bookmarks[index]

    def find(self, name) -> Optional[Bookmark]:
        for bookmark in self._bookmarks:
            if bookmark.name == name:
                return bookmark
        return None

    def names(self) -> List[str]:
        return [bookmark.name for bookmark in self._bookmarks]

    def __len__(self):
        return len(self._bookmarks)

    def __iter__(self) -> Iterator[Bookmark]:
        return iter(list(self._bookmarks))
