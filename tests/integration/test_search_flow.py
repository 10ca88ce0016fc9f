"""Integration tests for search -> present -> bookmark.

Real controller, store, presenter and SearchClient. Only HTTP is mocked,
with an httpx.MockTransport standing in for api.github.com.
"""

import asyncio

import httpx
import pytest

from github_bookmarks.bookmarks import BookmarkStore
from github_bookmarks.models import SearchState, SearchType
from github_bookmarks.search import SearchController, present_session, toggle
from github_bookmarks.search_client import SearchClient
from github_bookmarks.views import render_bookmarks, render_search

REPOS = {
    "react": [
        {"id": 10270250, "name": "react", "owner": {"login": "facebook"}, "stargazers_count": 230000},
        {"id": 29028775, "name": "react-native", "owner": {"login": "facebook"}},
    ],
}
USERS = {
    "octo": [{"id": 583231, "login": "octocat", "type": "User"}],
}


class FakeGitHub:
    """Answers search requests from canned items and records queries."""

    def __init__(self):
        self.queries = []
        self.fail_next = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        search_type = request.url.path.rsplit("/", 1)[-1]
        term = request.url.params["q"]
        self.queries.append((search_type, term))
        if self.fail_next:
            self.fail_next = False
            return httpx.Response(500, json={"message": "Server Error"})
        canned = REPOS if search_type == "repositories" else USERS
        items = canned.get(term, [])
        return httpx.Response(200, json={"total_count": len(items), "items": items})


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def client(github):
    return SearchClient(transport=httpx.MockTransport(github.handler), max_retries=0)


def describe_search_flow():
    def it_searches_and_bookmarks(github, client):
        store = BookmarkStore()

        async def scenario():
            controller = SearchController(client.search, debounce=0.05)
            for term in ["r", "re", "react"]:
                controller.set_term(term)
            session = await controller.wait_settled()

            first = session.results[0]
            toggle(store, session.search_type, first, controller.is_bookmarked(store, first))
            controller.close()
            await client.aclose()
            return session

        session = asyncio.run(scenario())

        assert github.queries == [("repositories", "react")]
        assert session.state is SearchState.READY
        assert [v.bookmarked for v in present_session(session, store)] == [True, False]
        assert "✅ react" in render_search(session, store)
        assert "  react" in render_bookmarks(store)

    def it_shows_no_results(github, client):
        async def scenario():
            controller = SearchController(client.search, debounce=0)
            controller.set_term("no-such-repo")
            return await controller.wait_settled()

        session = asyncio.run(scenario())

        assert session.state is SearchState.EMPTY
        assert 'No Results for "no-such-repo"' in render_search(session, BookmarkStore())

    def it_shows_the_prompt_without_network(github, client):
        controller = SearchController(client.search)

        controller.set_term("")

        assert github.queries == []
        assert "Search for something!" in render_search(controller.session, BookmarkStore())

    def it_switches_to_user_search(github, client):
        store = BookmarkStore()

        async def scenario():
            controller = SearchController(client.search, debounce=0)
            controller.set_term("octo")
            await controller.wait_settled()
            controller.set_type(SearchType.USERS)
            return await controller.wait_settled()

        session = asyncio.run(scenario())
        user = session.results[0]
        toggle(store, session.search_type, user, store.is_bookmarked("users", user.id))

        assert github.queries == [("repositories", "octo"), ("users", "octo")]
        assert store.is_bookmarked("users", 583231)
        assert not store.is_bookmarked("repositories", 583231)

    def it_settles_in_error_for_malformed_items():
        def handler(request):
            return httpx.Response(200, json={"items": [{"id": 1, "name": "x", "owner": "facebook"}]})

        client = SearchClient(transport=httpx.MockTransport(handler), max_retries=0)

        async def scenario():
            controller = SearchController(client.search, debounce=0)
            controller.set_term("react")
            return await asyncio.wait_for(controller.wait_settled(), 1)

        session = asyncio.run(scenario())

        assert session.state is SearchState.ERROR
        assert "non-object owner" in session.error

    def it_surfaces_errors_and_retries(github, client):
        github.fail_next = True

        async def scenario():
            controller = SearchController(client.search, debounce=0)
            controller.set_term("react")
            failed = await controller.wait_settled()
            controller.retry()
            return failed, await controller.wait_settled()

        failed, recovered = asyncio.run(scenario())

        assert failed.state is SearchState.ERROR
        assert "failed" in render_search(failed, BookmarkStore())
        assert recovered.state is SearchState.READY
        assert len(recovered.results) == 2
