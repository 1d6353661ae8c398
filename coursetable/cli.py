"""
CLI (Command Line Interface).

Commands:

    coursetable show [--search TEXT] [--year LABEL]
    coursetable summary [--search TEXT] [--year LABEL]
    coursetable html <out.html> [--template FILE]
    coursetable interactive

Every command accepts --source (URL or local JSON file, defaults to the
published courses.json), --timeout and --verbose.

Note:
- The interactive prompt loop lives in coursetable/interactive.py
- Exit code 1 means the course list could not be loaded or rendered
"""

from __future__ import annotations

import argparse
import logging
from functools import partial
from pathlib import Path

from coursetable.controller import ViewController, ViewStatus
from coursetable.fetch import DEFAULT_COURSES_URL, REQUEST_TIMEOUT, load_courses
from coursetable.filters import ALL_YEARS
from coursetable.model import Row, Summary
from coursetable.render import ConsoleSink, HtmlTableSink, RenderError
from coursetable.summary import summary_lines


class SummaryPrinter:
    """
    Minimal sink that prints only the summary lines.
    """

    def render(self, rows: list[Row], summary: Summary) -> None:
        for line in summary_lines(summary):
            print(line)

    def render_error(self, message: str) -> None:
        print(f"Error: {message}")


def _run_view(args: argparse.Namespace, controller: ViewController) -> int:
    """
    Load with the command-line filters applied; renders exactly once.
    """
    loader = partial(load_courses, args.source, timeout=args.timeout)
    controller.load(loader, search=args.search, year=args.year)
    if controller.state.status is ViewStatus.ERROR:
        return 1
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    return _run_view(args, ViewController(ConsoleSink()))


def _cmd_summary(args: argparse.Namespace) -> int:
    return _run_view(args, ViewController(SummaryPrinter()))


def _cmd_html(args: argparse.Namespace) -> int:
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .html path.")
        return 1

    template = None
    if args.template:
        try:
            template = Path(args.template).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Cannot read template: {exc}")
            return 1

    sink = HtmlTableSink(template=template, out_path=out_path)
    try:
        code = _run_view(args, ViewController(sink))
    except RenderError as exc:
        print(f"Cannot render page: {exc}")
        return 1

    print(f"Wrote: {out_path}")
    return code


def _cmd_interactive(args: argparse.Namespace) -> int:
    from coursetable.interactive import run_interactive

    controller = ViewController(ConsoleSink())
    controller.load(partial(load_courses, args.source, timeout=args.timeout))
    if controller.state.status is ViewStatus.ERROR:
        return 1
    run_interactive(controller)
    return 0


def _add_source_args(p: argparse.ArgumentParser, filters: bool = True) -> None:
    p.add_argument("--source", type=str, default=DEFAULT_COURSES_URL, help="URL or path of courses.json")
    p.add_argument("--timeout", type=float, default=REQUEST_TIMEOUT, help="HTTP timeout in seconds")
    if filters:
        p.add_argument("--search", type=str, default="", help="Search text (code, description, year, sem)")
        p.add_argument("--year", type=str, default=ALL_YEARS, help="Year level label (e.g. 1st) or 'all'")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursetable", description="Course table viewer")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="Print the course table and summary")
    _add_source_args(p_show)

    p_summary = sub.add_parser("summary", help="Print only the summary")
    _add_source_args(p_summary)

    p_html = sub.add_parser("html", help="Write the course table as an HTML page")
    p_html.add_argument("out", type=str, help="Output file path (e.g. courses.html)")
    p_html.add_argument("--template", type=str, default=None, help="HTML page with <tbody id='subjects-table'>")
    _add_source_args(p_html)

    p_inter = sub.add_parser("interactive", help="Interactive search/filter mode")
    _add_source_args(p_inter, filters=False)

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s  %(name)s  %(message)s",
    )

    if args.command == "show":
        raise SystemExit(_cmd_show(args))
    if args.command == "summary":
        raise SystemExit(_cmd_summary(args))
    if args.command == "html":
        raise SystemExit(_cmd_html(args))
    if args.command == "interactive":
        raise SystemExit(_cmd_interactive(args))

    raise SystemExit(2)
