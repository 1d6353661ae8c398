"""
Central data model definitions used across the project.

This module defines the canonical structure of course records and of the
values derived from them, so that:
- all modules share the same field names
- loading, filtering, summarizing and rendering agree on one shape
- derived values (rows, summaries) can never be mutated behind a render
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

log = logging.getLogger(__name__)


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x).strip()


def coerce_credit(raw: Any) -> Optional[float]:
    """
    Convert a credit value (number or numeric string) to a float.

    Returns None for missing values and for anything that is not a
    non-negative finite number. Callers treat None as 0 in sums.
    """
    if raw is None or isinstance(raw, bool):
        return None

    text = raw if isinstance(raw, (int, float)) else str(raw).strip()
    if text == "":
        return None
    try:
        value = float(text)
    except ValueError:
        log.debug("credit %r is not numeric", raw)
        return None
    except OverflowError:
        log.debug("credit %r is too large", raw)
        return None

    if not math.isfinite(value) or value < 0:
        log.debug("credit %r is out of range", raw)
        return None
    return value


def format_credit(value: Optional[float]) -> str:
    """
    Display form of a single credit value: '3' for 3.0, '1.5' for 1.5,
    blank when unknown.
    """
    if value is None:
        return ""
    return f"{value:g}"


@dataclass(frozen=True)
class CourseRecord:
    """
    One curriculum entry as found in the "courses" list of the JSON document.
    """

    year_level: str
    sem: str
    code: str
    description: str
    credit: Optional[float]
    # credit as given in the document, shown when it is not a number
    raw_credit: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CourseRecord":
        # missing fields become blank cells, never errors
        return cls(
            year_level=_safe_str(raw.get("year_level")),
            sem=_safe_str(raw.get("sem")),
            code=_safe_str(raw.get("code")),
            description=_safe_str(raw.get("description")),
            credit=coerce_credit(raw.get("credit")),
            raw_credit=_safe_str(raw.get("credit")),
        )

    @property
    def credit_value(self) -> float:
        """Credit as used in sums (unknown counts as 0)."""
        return self.credit if self.credit is not None else 0.0

    @property
    def credit_display(self) -> str:
        """Cell text: the parsed credit, else the raw text ("3 (lec)"), else blank."""
        if self.credit is not None:
            return format_credit(self.credit)
        return self.raw_credit

    @property
    def term(self) -> str:
        """Composite year/semester label, e.g. '1st Year / 2nd Sem'."""
        bits = []
        if self.year_level:
            bits.append(f"{self.year_level} Year")
        if self.sem:
            bits.append(f"{self.sem} Sem")
        return " / ".join(bits)


CourseSet = Tuple[CourseRecord, ...]


@dataclass(frozen=True)
class YearSegment:
    """
    A contiguous run of records sharing one year_level label.
    """

    label: str
    courses: CourseSet


@dataclass(frozen=True)
class DividerRow:
    label: str


@dataclass(frozen=True)
class CourseRow:
    term: str
    code: str
    description: str
    credit: str


Row = Union[DividerRow, CourseRow]


@dataclass(frozen=True)
class Summary:
    """
    Counts and credits for whatever course set is currently displayed.

    total_credits and credits_by_year keep full precision; use
    summary.format_credits() for the one-decimal display form.
    """

    total_courses: int = 0
    total_credits: float = 0.0
    courses_by_year: dict[str, int] = field(default_factory=dict)
    credits_by_year: dict[str, float] = field(default_factory=dict)
