from .controller import DEFAULT_DEBOUNCE, SearchController
from .presenter import ResultView, present, present_session, toggle

__all__ = [
    "DEFAULT_DEBOUNCE",
    "ResultView",
    "SearchController",
    "present",
    "present_session",
    "toggle",
]
