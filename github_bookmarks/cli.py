"""CLI commands for searching and bookmarking GitHub results."""

import argparse
import asyncio
import logging
import sys

from .bookmarks import BookmarkStore
from .models import SearchSession, SearchState, SearchType
from .search import SearchController
from .search_client import get_search_client
from .settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str, log_file=None, handler: logging.Handler | None = None) -> None:
    """Configure the root logger and quiet the HTTP libraries."""
    handlers = None
    if handler is not None:
        handlers = [handler]
    elif log_file is not None:
        handlers = [logging.FileHandler(log_file, encoding="utf-8")]
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def search_once(term: str, search_type: SearchType | str, settings: Settings) -> SearchSession:
    """Run one search cycle without debounce and return the settled session."""
    async with get_search_client(settings) as client:
        controller = SearchController(client.search, debounce=0, search_type=search_type)
        controller.set_term(term)
        try:
            return await controller.wait_settled()
        finally:
            controller.close()


def main():
    parser = argparse.ArgumentParser(
        description="Search GitHub repositories and users, and bookmark results",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: GITHUB_BOOKMARKS_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tui subcommand
    tui_parser = subparsers.add_parser(
        "tui",
        help="Open the interactive search and bookmarks app (default)",
    )
    tui_parser.add_argument(
        "--debounce",
        type=float,
        default=None,
        help="Seconds of quiet typing before a search fires (default: 0.5)",
    )

    # search subcommand
    search_parser = subparsers.add_parser(
        "search",
        help="Search once and print the results",
    )
    search_parser.add_argument(
        "term",
        help="Search term (e.g., react)",
    )
    search_parser.add_argument(
        "--type",
        choices=[t.value for t in SearchType],
        default=SearchType.REPOSITORIES.value,
        help="What to search for (default: repositories)",
    )

    args = parser.parse_args()
    settings = get_settings()
    log_level = args.log_level or settings.log_level

    if args.command == "search":
        from .views import render_search

        configure_logging(log_level, settings.log_file)
        session = asyncio.run(search_once(args.term, args.type, settings))
        print(render_search(session, BookmarkStore()))
        if session.state is SearchState.ERROR:
            sys.exit(1)
    elif args.command in (None, "tui"):
        from textual.logging import TextualHandler

        from .app import BookmarksApp

        handler = None if settings.log_file else TextualHandler()
        configure_logging(log_level, settings.log_file, handler=handler)
        debounce = getattr(args, "debounce", None)
        if debounce is None:
            debounce = settings.search_debounce
        app = BookmarksApp(get_search_client(settings), store=BookmarkStore(), debounce=debounce)
        app.run()
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
