"""Unit tests for result parsing."""

import pytest

from .errors import MalformedResponse
from .models import (
    Owner,
    RepositoryResult,
    SearchSession,
    SearchState,
    SearchType,
    UserResult,
    parse_result,
)

REPO_ITEM = {
    "id": 10270250,
    "name": "react",
    "full_name": "facebook/react",
    "description": "The library for web and native user interfaces.",
    "html_url": "https://github.com/facebook/react",
    "homepage": "https://react.dev",
    "language": "JavaScript",
    "owner": {
        "login": "facebook",
        "avatar_url": "https://avatars.githubusercontent.com/u/69631?v=4",
        "html_url": "https://github.com/facebook",
    },
    "stargazers_count": 230000,
    "open_issues_count": 900,
    "forks_count": 47000,
}

USER_ITEM = {
    "id": 583231,
    "login": "octocat",
    "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
    "html_url": "https://github.com/octocat",
    "type": "User",
    "score": 1.0,
}


def describe_parse_result():
    def it_builds_repository_results():
        result = parse_result("repositories", REPO_ITEM)

        assert isinstance(result, RepositoryResult)
        assert result.id == 10270250
        assert result.name == "react"
        assert result.owner == Owner(
            login="facebook",
            avatar_url="https://avatars.githubusercontent.com/u/69631?v=4",
            html_url="https://github.com/facebook",
        )
        assert result.stargazers_count == 230000
        assert result.kind is SearchType.REPOSITORIES

    def it_builds_user_results():
        result = parse_result(SearchType.USERS, USER_ITEM)

        assert isinstance(result, UserResult)
        assert result.login == "octocat"
        assert result.type == "User"
        assert result.kind is SearchType.USERS

    def it_defaults_missing_display_fields():
        result = parse_result("repositories", {"id": 1})

        assert result.name == ""
        assert result.owner is None
        assert result.homepage is None
        assert result.stargazers_count == 0

    def it_treats_empty_homepage_as_missing():
        result = parse_result("repositories", {**REPO_ITEM, "homepage": ""})

        assert result.homepage is None

    @pytest.mark.parametrize("item", [{}, {"id": "12"}, {"id": None}, {"id": True}, ["id", 1]])
    def it_rejects_items_without_integer_id(item):
        with pytest.raises(MalformedResponse):
            parse_result("users", item)

    @pytest.mark.parametrize("owner", ["facebook", ["facebook"], 7])
    def it_rejects_non_object_owners(owner):
        with pytest.raises(MalformedResponse, match="non-object owner"):
            parse_result("repositories", {**REPO_ITEM, "owner": owner})

    def it_rejects_unknown_search_types():
        with pytest.raises(ValueError):
            parse_result("gists", USER_ITEM)


def describe_SearchSession():
    def it_defaults_to_idle_repository_search():
        session = SearchSession()

        assert session.state is SearchState.IDLE
        assert session.search_type is SearchType.REPOSITORIES
        assert session.results == ()
        assert not session.loading

    @pytest.mark.parametrize("state", [SearchState.PENDING, SearchState.LOADING])
    def it_is_loading_while_pending_or_in_flight(state):
        assert SearchSession(term="x", state=state).loading
