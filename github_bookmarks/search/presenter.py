"""Presentation of a single search result and its bookmark toggle."""

from dataclasses import dataclass, field

from ..bookmarks import BookmarkStore
from ..models import RepositoryResult, Result, SearchSession, SearchType, UserResult


@dataclass(frozen=True)
class ResultView:
    """Display fields for one result, independent of how they are drawn."""

    id: int
    kind: SearchType
    title: str
    bookmarked: bool
    description: str | None = None
    byline: str | None = None
    avatar_url: str | None = None
    links: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    info: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def action(self) -> str:
        return "Remove" if self.bookmarked else "Bookmark"


def _check_kind(result: Result, search_type: SearchType) -> None:
    if result.kind is not search_type:
        raise TypeError(
            f"Cannot present a {result.kind.value} result as {search_type.value}"
        )


def _present_repository(result: RepositoryResult, bookmarked: bool) -> ResultView:
    links = []
    if result.html_url:
        links.append(("Repo", result.html_url))
    if result.homepage:
        links.append(("Homepage", result.homepage))
    return ResultView(
        id=result.id,
        kind=SearchType.REPOSITORIES,
        title=result.name,
        bookmarked=bookmarked,
        description=result.description,
        byline=f"By {result.owner.login}" if result.owner else None,
        links=tuple(links),
        info=(
            ("Language", result.language or ""),
            ("Stars", str(result.stargazers_count)),
            ("Open Issues", str(result.open_issues_count)),
        ),
    )


def _present_user(result: UserResult, bookmarked: bool) -> ResultView:
    return ResultView(
        id=result.id,
        kind=SearchType.USERS,
        title=result.login,
        bookmarked=bookmarked,
        avatar_url=result.avatar_url,
        links=(("Profile", result.html_url),) if result.html_url else (),
        info=(("Type", result.type or ""),),
    )


def present(result: Result, search_type: SearchType | str, is_bookmarked: bool) -> ResultView:
    """Build the view of result for the given search type."""
    search_type = SearchType(search_type)
    _check_kind(result, search_type)
    if isinstance(result, RepositoryResult):
        return _present_repository(result, is_bookmarked)
    return _present_user(result, is_bookmarked)


def present_session(session: SearchSession, store: BookmarkStore) -> list[ResultView]:
    """Present every result of session, looking up bookmark status in store."""
    return [
        present(r, session.search_type, store.is_bookmarked(session.search_type, r.id))
        for r in session.results
    ]


def toggle(
    store: BookmarkStore,
    search_type: SearchType | str,
    result: Result,
    is_bookmarked: bool,
) -> bool:
    """Bookmark or un-bookmark result. Returns the new bookmarked status."""
    if is_bookmarked:
        store.remove(search_type, result.id)
        return False
    store.save(search_type, result)
    return True
