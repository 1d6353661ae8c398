"""
Render sinks.

A sink receives the complete row list and summary on every state change
(no incremental updates):

- HtmlTableSink fills <tbody id="subjects-table"> of an HTML page
- ConsoleSink prints a rich table to the terminal
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coursetable.model import CourseRow, DividerRow, Row, Summary
from coursetable.summary import format_credits, summary_lines

TABLE_BODY_SELECTOR = "tbody#subjects-table"

DEFAULT_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Courses</title>
</head>
<body>
<h1>Courses</h1>
<p id="error" class="error"></p>
<table>
<thead>
<tr><th>Year / Sem</th><th>Code</th><th>Description</th><th>Credit</th></tr>
</thead>
<tbody id="subjects-table"></tbody>
</table>
<div id="summary"></div>
</body>
</html>
"""


class RenderError(Exception):
    """
    The page template cannot host the course table.
    """


def _divider_text(label: str) -> str:
    return f"{label} Year" if label else "(no year)"


class HtmlTableSink:
    """
    Render into an HTML page template. The resulting page is kept in
    self.html and, if out_path is given, written to disk on every render.
    """

    def __init__(self, template: Optional[str] = None, out_path: str | Path | None = None) -> None:
        self.template = template if template is not None else DEFAULT_PAGE
        self.out_path = Path(out_path) if out_path is not None else None
        self.html = ""

    def _new_page(self) -> BeautifulSoup:
        return BeautifulSoup(self.template, "html.parser")

    def render(self, rows: List[Row], summary: Summary) -> None:
        soup = self._new_page()
        tbody = soup.select_one(TABLE_BODY_SELECTOR)
        if tbody is None:
            raise RenderError(f"template has no {TABLE_BODY_SELECTOR!r} element")

        tbody.clear()
        for row in rows:
            tr = soup.new_tag("tr")
            if isinstance(row, DividerRow):
                tr["class"] = "year-divider"
                td = soup.new_tag("td", colspan="4")
                td.string = _divider_text(row.label)
                tr.append(td)
            else:
                for value in (row.term, row.code, row.description, row.credit):
                    td = soup.new_tag("td")
                    td.string = value
                    tr.append(td)
            tbody.append(tr)

        self._fill_summary(soup, summary)
        self._write(soup)

    def render_error(self, message: str) -> None:
        soup = self._new_page()
        tbody = soup.select_one(TABLE_BODY_SELECTOR)
        if tbody is not None:
            tbody.clear()

        target = soup.select_one("#error")
        if target is None:
            target = soup.new_tag("p", id="error")
            target["class"] = "error"
            (soup.body or soup).append(target)
        target.string = message
        self._write(soup)

    def _fill_summary(self, soup: BeautifulSoup, summary: Summary) -> None:
        box_el = soup.select_one("#summary")
        if box_el is None:
            box_el = soup.new_tag("div", id="summary")
            (soup.body or soup).append(box_el)

        box_el.clear()
        ul = soup.new_tag("ul")
        for line in summary_lines(summary):
            li = soup.new_tag("li")
            li.string = line
            ul.append(li)
        box_el.append(ul)

    def _write(self, soup: BeautifulSoup) -> None:
        self.html = str(soup)
        if self.out_path is not None:
            self.out_path.parent.mkdir(parents=True, exist_ok=True)
            self.out_path.write_text(self.html, encoding="utf-8")


class ConsoleSink:
    """
    Print the course table and summary with rich.
    """

    def __init__(self, console: Optional[Console] = None, show_table: bool = True) -> None:
        self.console = console if console is not None else Console()
        self.show_table = show_table

    def render(self, rows: List[Row], summary: Summary) -> None:
        if self.show_table:
            self.console.print(self._course_table(rows))
        self.console.print(self._summary_table(summary))

    def render_error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/] {escape(message)}")

    def _course_table(self, rows: List[Row]) -> Table:
        table = Table(title="Courses", box=box.SIMPLE)
        table.add_column("Year / Sem")
        table.add_column("Code", style="bold cyan")
        table.add_column("Description")
        table.add_column("Credit", justify="right")

        if not rows:
            table.add_row("", "", "No matching courses.", "")
            return table

        for row in rows:
            if isinstance(row, DividerRow):
                table.add_row(f"[bold magenta]{escape(_divider_text(row.label))}[/]", "", "", "")
            elif isinstance(row, CourseRow):
                table.add_row(escape(row.term), escape(row.code), escape(row.description), row.credit)
        return table

    def _summary_table(self, summary: Summary) -> Table:
        table = Table(title="Summary", box=box.SIMPLE)
        table.add_column("Year")
        table.add_column("Courses", justify="right")
        table.add_column("Credits", justify="right")

        for label, count in summary.courses_by_year.items():
            credits = format_credits(summary.credits_by_year.get(label, 0.0))
            table.add_row(escape(_divider_text(label)), str(count), credits)
        table.add_row(
            "[bold]Total[/]",
            f"[bold]{summary.total_courses}[/]",
            f"[bold]{format_credits(summary.total_credits)}[/]",
        )
        return table
