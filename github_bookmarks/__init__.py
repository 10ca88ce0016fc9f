"""Search GitHub repositories and users, and bookmark results in memory.

Searches are debounced and only the most recently issued request may update
what is shown; bookmarks live for the lifetime of the process.
"""

from .bookmarks import BookmarkStore
from .cli import main
from .models import RepositoryResult, SearchSession, SearchState, SearchType, UserResult
from .search import SearchController
from .search_client import SearchClient, get_search_client

__all__ = [
    "main",
    "BookmarkStore",
    "RepositoryResult",
    "SearchClient",
    "SearchController",
    "SearchSession",
    "SearchState",
    "SearchType",
    "UserResult",
    "get_search_client",
]

if __name__ == "__main__":
    main()
