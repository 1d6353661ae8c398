"""
Search and year filters.

Both filters always run over the full fetched course set, never over an
already filtered one, so search-then-filter and filter-then-search agree.
"""

from __future__ import annotations

from typing import Iterable, List

from coursetable.model import CourseRecord, CourseSet
from coursetable.ordering import sort_courses

ALL_YEARS = "all"


def _matches_text(course: CourseRecord, needle: str) -> bool:
    hay = (course.code, course.description, course.year_level, course.sem)
    return any(needle in field.lower() for field in hay)


def filter_by_text(courses: Iterable[CourseRecord], term: str) -> CourseSet:
    """
    Case-insensitive substring search in code, description, year_level and sem.
    An empty term matches everything; whitespace is part of the term.
    """
    needle = (term or "").lower()
    if not needle:
        return tuple(courses)
    return tuple(c for c in courses if _matches_text(c, needle))


def filter_by_year(courses: Iterable[CourseRecord], token: str) -> CourseSet:
    """
    Keep records whose year_level equals token exactly; ALL_YEARS keeps all.
    """
    if token == ALL_YEARS:
        return tuple(courses)
    return tuple(c for c in courses if c.year_level == token)


def apply_filters(courses: Iterable[CourseRecord], term: str = "", token: str = ALL_YEARS) -> CourseSet:
    return filter_by_text(filter_by_year(courses, token), term)


def year_options(courses: Iterable[CourseRecord]) -> List[str]:
    """
    Filter-button tokens: ALL_YEARS followed by each distinct year label
    in display order.
    """
    out: List[str] = [ALL_YEARS]
    for c in sort_courses(courses):
        if c.year_level not in out:
            out.append(c.year_level)
    return out
