"""Plain-text rendering of the search and bookmarks views."""

from .bookmarks import BookmarkStore
from .models import RepositoryResult, SearchSession, SearchState, SearchType
from .search.presenter import ResultView, present_session

PROMPT_MESSAGE = "Search for something!"
LOADING_MESSAGE = "Loading..."
BOOKMARKED_MARK = "✅"


def search_message(session: SearchSession) -> str:
    """The status line shown above (or instead of) the results."""
    if session.state is SearchState.IDLE or not session.term:
        return PROMPT_MESSAGE
    if session.loading:
        return LOADING_MESSAGE
    if session.state is SearchState.ERROR:
        return f'Search for "{session.term}" failed: {session.error} (press ctrl+r to retry)'
    if session.state is SearchState.EMPTY:
        return f'No Results for "{session.term}"'
    return f'Search results for "{session.term}"'


def format_result(view: ResultView) -> str:
    title = f"{BOOKMARKED_MARK} {view.title}" if view.bookmarked else view.title
    lines = [title]
    if view.description:
        lines.append(f"  {view.description}")
    if view.byline:
        lines.append(f"  {view.byline}")
    if view.avatar_url:
        lines.append(f"  Avatar: {view.avatar_url}")
    for label, url in view.links:
        lines.append(f"  {label}: {url}")
    info = ", ".join(f"{label}: {value}" for label, value in view.info)
    if info:
        lines.append(f"  {info}")
    lines.append(f"  [{view.action}]")
    return "\n".join(lines)


def _bookmark_label(bookmark) -> str:
    if isinstance(bookmark, RepositoryResult):
        return bookmark.name
    if bookmark.avatar_url:
        return f"{bookmark.login} ({bookmark.avatar_url})"
    return bookmark.login


def bookmark_sections(store: BookmarkStore) -> list[tuple[str, list[str]]]:
    return [
        ("Repositories", [_bookmark_label(b) for b in store.bookmarks(SearchType.REPOSITORIES)]),
        ("Users", [_bookmark_label(b) for b in store.bookmarks(SearchType.USERS)]),
    ]


def render_search(session: SearchSession, store: BookmarkStore) -> str:
    lines = [f"Search {session.search_type.value}", search_message(session)]
    if session.state is SearchState.READY:
        for view in present_session(session, store):
            lines.append("")
            lines.append(format_result(view))
    return "\n".join(lines)


def render_bookmarks(store: BookmarkStore) -> str:
    lines = ["My Bookmarks"]
    for title, labels in bookmark_sections(store):
        lines.append("")
        lines.append(title)
        lines.extend(f"  {label}" for label in labels)
    return "\n".join(lines)
