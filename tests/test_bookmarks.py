"""Tests for core.bookmarks."""

import math

import pytest

from core.bookmarks import BookmarkError, BookmarkList, Viewpoint


def test_default_bookmarks():
    bookmarks = BookmarkList()

    assert bookmarks.names() == ['Tour Eiffel', 'Arc de Triomphe', 'La Bastille', 'Notre Dame']
    eiffel = bookmarks.get(0).viewpoint
    assert (eiffel.lat, eiffel.lon, eiffel.scale) == (48.858201, 2.294653, 6e3)


def test_add_strips_name():
    bookmarks = BookmarkList(defaults=[])
    bookmark = bookmarks.add("  Louvre ", Viewpoint(48.8606, 2.3376, 4e3))

    assert bookmark.name == "Louvre"
    assert bookmarks.find("Louvre") is bookmark
    assert len(bookmarks) == 1


@pytest.mark.parametrize("name", ["", "   ", None, "Notre Dame"])
def test_empty_or_duplicate_name_rejected(name):
    bookmarks = BookmarkList()

    with pytest.raises(BookmarkError, match="already exist or no text"):
        bookmarks.add(name, Viewpoint(48.85, 2.35, 6e3))

    assert len(bookmarks) == 4


def test_overlong_name_rejected():
    with pytest.raises(BookmarkError):
        BookmarkList().add("x" * 200, Viewpoint(48.85, 2.35, 6e3))


@pytest.mark.parametrize("viewpoint", [
    Viewpoint(math.nan, 2.35, 6e3),
    Viewpoint(48.85, 2.35, 0.0),
])
def test_invalid_viewpoint_rejected(viewpoint):
    with pytest.raises(BookmarkError):
        BookmarkList().add("Somewhere", viewpoint)


def test_bookmark_error_is_value_error():
    assert issubclass(BookmarkError, ValueError)


def test_get_out_of_range():
    bookmarks = BookmarkList()
    with pytest.raises(IndexError):
        bookmarks.get(4)
    with pytest.raises(IndexError):
        bookmarks.get(-1)


def test_iteration_is_a_snapshot():
    bookmarks = BookmarkList()
    for bookmark in bookmarks:
        if bookmark.name == 'Tour Eiffel':
            bookmarks.add('Trocadero', Viewpoint(48.8616, 2.2893, 6e3))

    assert bookmarks.names()[-1] == 'Trocadero'
