"""Data models and constants for GitHub search results and search sessions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from .errors import MalformedResponse


class SearchType(str, Enum):
    """Kind of search; the value is the REST path segment."""

    REPOSITORIES = "repositories"
    USERS = "users"


class SearchState(str, Enum):
    IDLE = "idle"  # empty term
    PENDING = "pending"  # debounce timer running
    LOADING = "loading"  # request in flight
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


SETTLED_STATES = frozenset(
    {SearchState.IDLE, SearchState.READY, SearchState.EMPTY, SearchState.ERROR}
)


@dataclass(frozen=True)
class Owner:
    login: str
    avatar_url: str | None = None
    html_url: str | None = None


@dataclass(frozen=True)
class RepositoryResult:
    """A repository returned by search/repositories."""

    kind: ClassVar[SearchType] = SearchType.REPOSITORIES

    id: int
    name: str
    full_name: str | None = None
    description: str | None = None
    html_url: str | None = None
    homepage: str | None = None
    language: str | None = None
    owner: Owner | None = None
    stargazers_count: int = 0
    open_issues_count: int = 0


@dataclass(frozen=True)
class UserResult:
    """A user or organization returned by search/users."""

    kind: ClassVar[SearchType] = SearchType.USERS

    id: int
    login: str
    avatar_url: str | None = None
    html_url: str | None = None
    type: str | None = None


Result = RepositoryResult | UserResult


def _require_id(item) -> int:
    if not isinstance(item, dict):
        raise MalformedResponse(f"Expected an object in items, got {type(item).__name__}")
    result_id = item.get("id")
    # bool is an int subclass but never a valid id
    if not isinstance(result_id, int) or isinstance(result_id, bool):
        raise MalformedResponse(f"Result is missing an integer id: {result_id!r}")
    return result_id


def parse_result(search_type: SearchType | str, item: dict) -> Result:
    """Build the result variant for one entry of a search response's items."""
    search_type = SearchType(search_type)
    result_id = _require_id(item)

    if search_type is SearchType.REPOSITORIES:
        owner_data = item.get("owner") or {}
        if not isinstance(owner_data, dict):
            raise MalformedResponse(f"Result {result_id} has a non-object owner: {owner_data!r}")
        owner = None
        if owner_data.get("login"):
            owner = Owner(
                login=owner_data["login"],
                avatar_url=owner_data.get("avatar_url"),
                html_url=owner_data.get("html_url"),
            )
        return RepositoryResult(
            id=result_id,
            name=item.get("name") or "",
            full_name=item.get("full_name"),
            description=item.get("description"),
            html_url=item.get("html_url"),
            homepage=item.get("homepage") or None,
            language=item.get("language"),
            owner=owner,
            stargazers_count=item.get("stargazers_count") or 0,
            open_issues_count=item.get("open_issues_count") or 0,
        )

    return UserResult(
        id=result_id,
        login=item.get("login") or "",
        avatar_url=item.get("avatar_url"),
        html_url=item.get("html_url"),
        type=item.get("type"),
    )


@dataclass(frozen=True)
class SearchSession:
    """Snapshot of the search view's state."""

    term: str = ""
    search_type: SearchType = SearchType.REPOSITORIES
    results: tuple[Result, ...] = field(default_factory=tuple)
    state: SearchState = SearchState.IDLE
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.state in (SearchState.PENDING, SearchState.LOADING)


@dataclass
class ApiResponse:
    """Response from the GitHub REST search endpoint."""

    status: int
    body: dict | list
