"""Debounced search lifecycle: term/type changes -> timer -> fetch -> results."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from ..bookmarks import BookmarkStore
from ..errors import SearchFailed
from ..models import SETTLED_STATES, Result, SearchSession, SearchState, SearchType

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.5  # seconds

Fetcher = Callable[[SearchType, str], Awaitable[list[Result]]]


class SearchController:
    """Owns the search term, type, results and state of one search view.

    Every term or type change cancels the pending timer and bumps a sequence
    number; a fetch only applies its results if no change happened since it
    was issued, so the last issued request always wins regardless of the
    order responses arrive in.

    Scheduling needs a running event loop; clearing the term does not.
    """

    def __init__(
        self,
        fetch: Fetcher,
        debounce: float = DEFAULT_DEBOUNCE,
        search_type: SearchType | str = SearchType.REPOSITORIES,
    ):
        self._fetch = fetch
        self._debounce = debounce
        self._term = ""
        self._search_type = SearchType(search_type)
        self._results: tuple[Result, ...] = ()
        self._state = SearchState.IDLE
        self._error: str | None = None

        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()
        self._sequence = 0

        self._settled = asyncio.Event()
        self._settled.set()
        self._listeners: list[Callable[[], None]] = []

    @property
    def term(self) -> str:
        return self._term

    @property
    def search_type(self) -> SearchType:
        return self._search_type

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def results(self) -> tuple[Result, ...]:
        return self._results

    @property
    def session(self) -> SearchSession:
        return SearchSession(
            term=self._term,
            search_type=self._search_type,
            results=self._results,
            state=self._state,
            error=self._error,
        )

    def set_term(self, term: str) -> None:
        self._term = term
        self._schedule()

    def set_type(self, search_type: SearchType | str) -> None:
        self._search_type = SearchType(search_type)
        self._schedule()

    def retry(self) -> None:
        """Search again with the current term and type."""
        self._schedule()

    def is_bookmarked(self, store: BookmarkStore, result: Result) -> bool:
        return store.is_bookmarked(self._search_type, result.id)

    async def wait_settled(self) -> SearchSession:
        """Wait until the controller is idle or has a search outcome."""
        while self._state not in SETTLED_STATES:
            await self._settled.wait()
        return self.session

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call callback on every state change. Returns a function that unsubscribes."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def close(self) -> None:
        """Cancel the pending timer and any in-flight fetch."""
        self._sequence += 1
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._listeners.clear()

    def _cancel_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _schedule(self) -> None:
        self._sequence += 1
        self._cancel_timer()

        if not self._term:
            self._results = ()
            self._error = None
            self._set_state(SearchState.IDLE)
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce, self._fire)
        self._set_state(SearchState.PENDING)

    def _fire(self) -> None:
        self._timer = None
        sequence = self._sequence
        self._set_state(SearchState.LOADING)

        task = asyncio.get_running_loop().create_task(
            self._run(sequence, self._search_type, self._term)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, sequence: int, search_type: SearchType, term: str) -> None:
        logger.debug("Searching %s for %r (request %d)", search_type.value, term, sequence)
        try:
            results = await self._fetch(search_type, term)
        except (SearchFailed, httpx.HTTPError) as e:
            self._fail(sequence, str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error searching for %r", term)
            self._fail(sequence, f"Unexpected error: {e}")
            return

        if sequence != self._sequence:
            logger.debug("Dropping stale results for request %d", sequence)
            return

        self._results = tuple(results)
        self._error = None
        self._set_state(SearchState.READY if self._results else SearchState.EMPTY)

    def _fail(self, sequence: int, message: str) -> None:
        if sequence != self._sequence:
            logger.debug("Dropping stale failure for request %d: %s", sequence, message)
            return
        logger.warning("Search request %d failed: %s", sequence, message)
        self._results = ()
        self._error = message
        self._set_state(SearchState.ERROR)

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        if state in SETTLED_STATES:
            self._settled.set()
        else:
            self._settled.clear()
        for callback in list(self._listeners):
            callback()
