"""Textual app with a search tab and a bookmarks tab."""

import logging

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Footer, Header, Input, Label, OptionList, TabbedContent, TabPane
from textual.widgets.option_list import Option

from .bookmarks import BookmarkStore
from .models import SearchState, SearchType
from .search import DEFAULT_DEBOUNCE, SearchController, present_session, toggle
from .search_client import SearchClient
from .views import PROMPT_MESSAGE, bookmark_sections, format_result, search_message

logger = logging.getLogger(__name__)

APP_CSS = """
#type-toggle {
    height: auto;
}
#type-toggle Button {
    margin-right: 1;
}
#search-status {
    margin: 1 0;
}
#search-results, #bookmark-list {
    height: 1fr;
}
"""


class BookmarksApp(App):
    """Search GitHub and keep an in-memory list of bookmarked results."""

    TITLE = "GitHub Bookmarks"
    CSS = APP_CSS
    BINDINGS = [
        Binding("ctrl+r", "retry", "Retry search"),
        Binding("ctrl+t", "toggle_type", "Repos/Users"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, client: SearchClient, store: BookmarkStore | None = None, debounce: float = DEFAULT_DEBOUNCE):
        super().__init__()
        self.store = store if store is not None else BookmarkStore()
        self._client = client
        self._debounce = debounce
        self.controller: SearchController | None = None
        self._unsubscribers = []
        # (type, id) per option in the bookmark list; None for section headers
        self._bookmark_entries: list[tuple[SearchType, int] | None] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with TabbedContent(initial="search-tab"):
            with TabPane("Search", id="search-tab"):
                with Horizontal(id="type-toggle"):
                    yield Button("Repos", id="type-repositories", variant="primary")
                    yield Button("Users", id="type-users")
                yield Label("Search repositories", id="search-label")
                yield Input(placeholder="Search GitHub", id="search-input")
                yield Label(PROMPT_MESSAGE, id="search-status")
                yield OptionList(id="search-results")
            with TabPane("Bookmarks", id="bookmarks-tab"):
                yield Label("My Bookmarks")
                yield OptionList(id="bookmark-list")
        yield Footer()

    def on_mount(self) -> None:
        self.controller = SearchController(self._client.search, debounce=self._debounce)
        self._unsubscribers = [
            self.controller.subscribe(self._refresh_search),
            self.store.subscribe(self._refresh_all),
        ]
        self.call_after_refresh(self._refresh_all)

    async def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        if self.controller is not None:
            self.controller.close()
        await self._client.aclose()

    def _refresh_all(self) -> None:
        self._refresh_search()
        self._refresh_bookmarks()

    def _refresh_search(self) -> None:
        session = self.controller.session
        self.query_one("#search-status", Label).update(Text(search_message(session)))
        self.query_one("#search-label", Label).update(f"Search {session.search_type.value}")
        for search_type in SearchType:
            button = self.query_one(f"#type-{search_type.value}", Button)
            button.variant = "primary" if search_type is session.search_type else "default"

        results = self.query_one("#search-results", OptionList)
        highlighted = results.highlighted
        results.clear_options()
        if session.state is SearchState.READY:
            results.add_options(
                [Option(Text(format_result(view))) for view in present_session(session, self.store)]
            )
            if highlighted is not None and highlighted < len(session.results):
                results.highlighted = highlighted

    def _refresh_bookmarks(self) -> None:
        bookmark_list = self.query_one("#bookmark-list", OptionList)
        bookmark_list.clear_options()
        self._bookmark_entries = []
        sections = zip(SearchType, bookmark_sections(self.store))
        for search_type, (title, labels) in sections:
            bookmark_list.add_option(Option(Text(title, style="bold"), disabled=True))
            self._bookmark_entries.append(None)
            for bookmark, label in zip(self.store.bookmarks(search_type), labels):
                bookmark_list.add_option(Option(Text(f"  {label}  [remove]")))
                self._bookmark_entries.append((search_type, bookmark.id))

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.controller.set_term(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if not (event.button.id or "").startswith("type-"):
            return
        search_type = SearchType(event.button.id.removeprefix("type-"))
        if search_type is not self.controller.search_type:
            self.controller.set_type(search_type)

    @on(OptionList.OptionSelected, "#search-results")
    def on_result_selected(self, event: OptionList.OptionSelected) -> None:
        session = self.controller.session
        if not 0 <= event.option_index < len(session.results):
            return
        result = session.results[event.option_index]
        toggle(self.store, session.search_type, result, self.controller.is_bookmarked(self.store, result))

    @on(OptionList.OptionSelected, "#bookmark-list")
    def on_bookmark_selected(self, event: OptionList.OptionSelected) -> None:
        if not 0 <= event.option_index < len(self._bookmark_entries):
            return
        entry = self._bookmark_entries[event.option_index]
        if entry is not None:
            self.store.remove(*entry)

    def action_retry(self) -> None:
        if self.controller.state is SearchState.ERROR:
            self.controller.retry()

    def action_toggle_type(self) -> None:
        if self.controller.search_type is SearchType.REPOSITORIES:
            self.controller.set_type(SearchType.USERS)
        else:
            self.controller.set_type(SearchType.REPOSITORIES)
