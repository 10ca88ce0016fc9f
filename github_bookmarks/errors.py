"""Exceptions raised by the bookmark store and the search client."""


class GitHubBookmarksError(Exception):
    pass


class InvalidBookmarkType(GitHubBookmarksError, ValueError):
    """Raised when a bookmark type is not one of the known partitions."""

    def __init__(self, bookmark_type):
        super().__init__(f'Cannot bookmark type "{bookmark_type}"')
        self.bookmark_type = bookmark_type


class SearchFailed(GitHubBookmarksError):
    """The search request could not be completed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class MalformedResponse(SearchFailed):
    """The search endpoint answered with a body we cannot read."""
