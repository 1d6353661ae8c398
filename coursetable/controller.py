"""
View controller.

State machine:

    LOADING --fetch ok--> LOADED --search / year--> FILTERED (re-entrant)
    LOADING --fetch failed--> ERROR (terminal)

The transition functions are pure: they take a ViewState and return a new
one. ViewController owns the current state and re-renders the sink in full
after every transition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Protocol

from coursetable.fetch import FetchError
from coursetable.filters import ALL_YEARS, apply_filters, year_options
from coursetable.model import CourseSet, Row, Summary
from coursetable.ordering import build_rows, sort_courses
from coursetable.summary import summarize

log = logging.getLogger(__name__)


class ViewStatus(Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FILTERED = "filtered"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    status: ViewStatus = ViewStatus.LOADING
    courses: CourseSet = ()
    search: str = ""
    year: str = ALL_YEARS
    error: Optional[str] = None


class RenderSink(Protocol):
    def render(self, rows: List[Row], summary: Summary) -> None: ...

    def render_error(self, message: str) -> None: ...


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def initial_state() -> ViewState:
    return ViewState()


def fetch_succeeded(state: ViewState, courses: CourseSet) -> ViewState:
    if state.status is not ViewStatus.LOADING:
        log.debug("ignoring fetch result in state %s", state.status.value)
        return state
    return ViewState(status=ViewStatus.LOADED, courses=tuple(courses))


def fetch_failed(state: ViewState, message: str) -> ViewState:
    if state.status is not ViewStatus.LOADING:
        log.debug("ignoring fetch failure in state %s", state.status.value)
        return state
    return ViewState(status=ViewStatus.ERROR, error=message)


def _accepts_input(state: ViewState) -> bool:
    if state.status in (ViewStatus.LOADED, ViewStatus.FILTERED):
        return True
    log.debug("ignoring input in state %s", state.status.value)
    return False


def search_changed(state: ViewState, term: str) -> ViewState:
    if not _accepts_input(state):
        return state
    return replace(state, status=ViewStatus.FILTERED, search=term or "")


def year_selected(state: ViewState, token: str) -> ViewState:
    if not _accepts_input(state):
        return state
    return replace(state, status=ViewStatus.FILTERED, year=token)


def _with_filters(state: ViewState, term: str, token: str) -> ViewState:
    return search_changed(year_selected(state, token), term)


def visible_courses(state: ViewState) -> CourseSet:
    """
    Currently displayed records, always derived from the full fetched set.
    """
    return sort_courses(apply_filters(state.courses, state.search, state.year))


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------


class ViewController:
    """
    Holds the current ViewState and pushes a full re-render to the sink
    after each transition.
    """

    def __init__(self, sink: RenderSink) -> None:
        self.sink = sink
        self.state = initial_state()

    def load(self, loader: Callable[[], CourseSet], search: str = "", year: str = ALL_YEARS) -> ViewState:
        """
        Fetch and render once. Initial filters, if any, are applied before
        the first render.
        """
        try:
            courses = loader()
        except FetchError as exc:
            log.error("fetching courses failed: %s", exc)
            self.state = fetch_failed(self.state, str(exc))
        else:
            self.state = fetch_succeeded(self.state, courses)
            if search or year != ALL_YEARS:
                self.state = _with_filters(self.state, search, year)
        self.refresh()
        return self.state

    def set_filters(self, term: str, token: str) -> ViewState:
        self.state = _with_filters(self.state, term, token)
        self.refresh()
        return self.state

    def search(self, term: str) -> ViewState:
        self.state = search_changed(self.state, term)
        self.refresh()
        return self.state

    def select_year(self, token: str) -> ViewState:
        self.state = year_selected(self.state, token)
        self.refresh()
        return self.state

    def year_options(self) -> List[str]:
        return year_options(self.state.courses)

    def refresh(self) -> None:
        if self.state.status is ViewStatus.LOADING:
            return
        if self.state.status is ViewStatus.ERROR:
            self.sink.render_error(self.state.error or "Failed to load courses.")
            return

        courses = visible_courses(self.state)
        self.sink.render(build_rows(courses), summarize(courses))
