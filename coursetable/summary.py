"""
Summary aggregation (counts and credits, overall and per year level).
"""

from __future__ import annotations

from typing import Iterable, List

from coursetable.model import CourseRecord, Summary


def summarize(courses: Iterable[CourseRecord]) -> Summary:
    """
    Aggregate any course set, filtered or not.

    Year groups appear in order of first encounter. Credits that could not
    be parsed count as 0; nothing here raises.
    """
    total_courses = 0
    total_credits = 0.0
    courses_by_year: dict[str, int] = {}
    credits_by_year: dict[str, float] = {}

    for c in courses:
        total_courses += 1
        total_credits += c.credit_value
        courses_by_year[c.year_level] = courses_by_year.get(c.year_level, 0) + 1
        credits_by_year[c.year_level] = credits_by_year.get(c.year_level, 0.0) + c.credit_value

    return Summary(
        total_courses=total_courses,
        total_credits=total_credits,
        courses_by_year=courses_by_year,
        credits_by_year=credits_by_year,
    )


def format_credits(value: float) -> str:
    """
    One-decimal display form of a credit sum.
    """
    return f"{value:.1f}"


def summary_lines(summary: Summary) -> List[str]:
    """
    Plain-text summary, one line per fact (used by the CLI and HTML sink).
    """
    lines = [
        f"Total courses: {summary.total_courses}",
        f"Total credits: {format_credits(summary.total_credits)}",
    ]
    for label, count in summary.courses_by_year.items():
        credits = format_credits(summary.credits_by_year.get(label, 0.0))
        name = f"{label} Year" if label else "(no year)"
        lines.append(f"{name}: {count} courses, {credits} credits")
    return lines
