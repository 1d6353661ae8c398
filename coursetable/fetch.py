"""
Loading the course list (JSON -> CourseRecord tuple).

The source is either an http(s) URL (fetched with requests) or a local
JSON file. Expected document shape:

    {"courses": [{"year_level": "1st", "sem": "2nd", "code": "CS102",
                  "description": "Intro", "credit": 3}, ...]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from coursetable.model import CourseRecord, CourseSet

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_COURSES_URL = "https://lyle-medina.github.io/first-repo/courses.json"
REQUEST_TIMEOUT = 30


class FetchError(Exception):
    """
    The course list could not be loaded (network, HTTP status, JSON or shape).
    """


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def parse_course_document(doc: Any) -> CourseSet:
    """
    Turn a decoded JSON document into course records, in document order.

    Entries that are not JSON objects are skipped with a warning; fields
    inside an entry are never validated.
    """
    if not isinstance(doc, dict):
        raise FetchError("course document is not a JSON object")

    raw_courses = doc.get("courses")
    if not isinstance(raw_courses, list):
        raise FetchError("course document has no 'courses' list")

    out: list[CourseRecord] = []
    for i, raw in enumerate(raw_courses):
        if not isinstance(raw, dict):
            log.warning("skipping courses[%d]: not an object", i)
            continue
        out.append(CourseRecord.from_dict(raw))
    return tuple(out)


def fetch_course_document(url: str, timeout: float = REQUEST_TIMEOUT) -> Any:
    """
    GET the JSON document at url. Non-success statuses raise FetchError.
    """
    log.info("fetching courses from %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to load courses from {url}: {exc}") from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise FetchError(f"Response from {url} is not valid JSON") from exc


def read_course_document(path: str | Path) -> Any:
    p = Path(path)
    log.info("reading courses from %s", p)
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(f"Failed to read {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise FetchError(f"{p} is not valid JSON: {exc}") from exc


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_courses(source: str = DEFAULT_COURSES_URL, timeout: float = REQUEST_TIMEOUT) -> CourseSet:
    """
    Load course records from a URL or a local path.
    """
    if is_url(source):
        doc = fetch_course_document(source, timeout=timeout)
    else:
        doc = read_course_document(source)

    courses = parse_course_document(doc)
    log.info("fetched %d courses", len(courses))
    return courses
