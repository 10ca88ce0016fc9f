"""In-memory bookmark store partitioned by search type."""

import copy
import logging
from collections.abc import Callable

from .errors import InvalidBookmarkType
from .models import Result, SearchType

logger = logging.getLogger(__name__)


def _partition_key(bookmark_type) -> SearchType | None:
    try:
        return SearchType(bookmark_type)
    except ValueError:
        return None


class BookmarkStore:
    """Two ordered bookmark lists, one for repositories and one for users.

    Unknown types are rejected by save() but tolerated by remove() and
    is_bookmarked(), which treat them as an empty partition.
    Saving the same id twice keeps both copies; remove() drops all of them.
    """

    def __init__(self):
        self._partitions: dict[SearchType, tuple[Result, ...]] = {
            SearchType.REPOSITORIES: (),
            SearchType.USERS: (),
        }
        self._listeners: list[Callable[[], None]] = []

    @property
    def repositories(self) -> tuple[Result, ...]:
        return self._partitions[SearchType.REPOSITORIES]

    @property
    def users(self) -> tuple[Result, ...]:
        return self._partitions[SearchType.USERS]

    def bookmarks(self, bookmark_type) -> tuple[Result, ...]:
        key = _partition_key(bookmark_type)
        if key is None:
            return ()
        return self._partitions[key]

    def save(self, bookmark_type, item: Result) -> None:
        """Append a shallow copy of item to the partition for bookmark_type."""
        key = _partition_key(bookmark_type)
        if key is None:
            raise InvalidBookmarkType(bookmark_type)
        self._partitions[key] = (*self._partitions[key], copy.copy(item))
        logger.debug("Bookmarked %s %s", key.value, item.id)
        self._notify()

    def remove(self, bookmark_type, bookmark_id: int) -> None:
        """Drop entries with bookmark_id from the partition; missing ids are ignored."""
        key = _partition_key(bookmark_type)
        if key is None:
            logger.debug("Ignoring remove for unknown bookmark type %r", bookmark_type)
            return
        current = self._partitions[key]
        survivors = tuple(b for b in current if b.id != bookmark_id)
        if len(survivors) == len(current):
            return
        self._partitions[key] = survivors
        logger.debug("Removed bookmark %s %s", key.value, bookmark_id)
        self._notify()

    def is_bookmarked(self, bookmark_type, bookmark_id: int) -> bool:
        return any(b.id == bookmark_id for b in self.bookmarks(bookmark_type))

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call callback after every change. Returns a function that unsubscribes."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    def __len__(self) -> int:
        return sum(len(p) for p in self._partitions.values())
