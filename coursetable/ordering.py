"""
Ordering and grouping of course records.

Year and semester labels are ordinals like "1st" or "2nd"; their order is
taken from the embedded digits, not from the text. Labels without any digit
sort after all numbered labels.
"""

from __future__ import annotations

import re
from itertools import groupby
from typing import Iterable, List, Optional, Tuple

from coursetable.model import CourseRecord, CourseRow, CourseSet, DividerRow, Row, YearSegment

_NON_DIGITS = re.compile(r"\D")


def label_number(label: str) -> Optional[int]:
    """
    Extract the number embedded in a label ('1st' -> 1, 'Year 10' -> 10).
    Returns None if the label holds no digit.
    """
    digits = _NON_DIGITS.sub("", label or "")
    if not digits:
        return None
    return int(digits)


def _label_rank(label: str) -> Tuple[int, int]:
    n = label_number(label)
    # (0, n) for numbered labels, (1, 0) puts digit-less labels last
    return (0, n) if n is not None else (1, 0)


def sort_key(course: CourseRecord) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    return (_label_rank(course.year_level), _label_rank(course.sem))


def sort_courses(courses: Iterable[CourseRecord]) -> CourseSet:
    """
    Return a new tuple ordered by year level, then semester.
    The sort is stable, so equal keys keep their input order.
    """
    return tuple(sorted(courses, key=sort_key))


def group_by_year(courses: Iterable[CourseRecord]) -> List[YearSegment]:
    """
    Split an already sorted sequence into contiguous year_level runs.
    """
    return [YearSegment(label=label, courses=tuple(run)) for label, run in groupby(courses, key=lambda c: c.year_level)]


def build_rows(courses: Iterable[CourseRecord]) -> List[Row]:
    """
    Flatten year segments into render rows: one divider before each segment.
    """
    rows: List[Row] = []
    for segment in group_by_year(courses):
        rows.append(DividerRow(label=segment.label))
        for c in segment.courses:
            rows.append(
                CourseRow(
                    term=c.term,
                    code=c.code,
                    description=c.description,
                    credit=c.credit_display,
                )
            )
    return rows
