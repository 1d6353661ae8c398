"""
Tests for CLI entry points.

These tests focus on:
- argument validation (unknown commands exit nonzero)
- running commands against a temporary local courses.json
  (no network access during tests)
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from bs4 import BeautifulSoup

from coursetable.cli import build_parser, main

DOC = {
    "courses": [
        {"year_level": "2nd", "sem": "1st", "code": "CS201", "description": "Data", "credit": "3"},
        {"year_level": "1st", "sem": "2nd", "code": "CS102", "description": "Intro", "credit": 3},
    ]
}


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.source = self.dir / "courses.json"
        self.source.write_text(json.dumps(DOC), encoding="utf-8")

    def _run(self, argv: list[str]) -> tuple[int, str]:
        buf = io.StringIO()
        with redirect_stdout(buf):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code, buf.getvalue()

    def test_requires_command(self) -> None:
        with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args(["show"])
        self.assertEqual(args.year, "all")
        self.assertEqual(args.search, "")
        self.assertTrue(args.source.startswith("https://"))

    def test_summary_command(self) -> None:
        code, out = self._run(["summary", "--source", str(self.source)])
        self.assertEqual(code, 0)
        self.assertIn("Total courses: 2", out)
        self.assertIn("Total credits: 6.0", out)

    def test_summary_with_filters(self) -> None:
        code, out = self._run(["summary", "--source", str(self.source), "--search", "DATA"])
        self.assertEqual(code, 0)
        self.assertIn("Total courses: 1", out)
        self.assertIn("2nd Year: 1 courses, 3.0 credits", out)

    def test_filters_render_once(self) -> None:
        code, out = self._run(["summary", "--source", str(self.source), "--year", "2nd", "--search", "data"])
        self.assertEqual(code, 0)
        self.assertEqual(
            out,
            "Total courses: 1\nTotal credits: 3.0\n2nd Year: 1 courses, 3.0 credits\n",
        )

    def test_unfiltered_summary_is_exact(self) -> None:
        code, out = self._run(["summary", "--source", str(self.source)])
        self.assertEqual(code, 0)
        self.assertEqual(out.count("Total courses:"), 1)

    def test_missing_source_exits_1(self) -> None:
        code, out = self._run(["summary", "--source", str(self.dir / "nope.json")])
        self.assertEqual(code, 1)
        self.assertIn("Error:", out)

    def test_html_command(self) -> None:
        out_path = self.dir / "courses.html"
        code, out = self._run(["html", str(out_path), "--source", str(self.source), "--year", "1st"])
        self.assertEqual(code, 0)
        soup = BeautifulSoup(out_path.read_text(encoding="utf-8"), "html.parser")
        codes = [tr.find_all("td")[1].get_text() for tr in soup.select("tbody#subjects-table tr") if len(tr.find_all("td")) == 4]
        self.assertEqual(codes, ["CS102"])

    def test_html_bad_template(self) -> None:
        template = self.dir / "page.html"
        template.write_text("<html><body></body></html>", encoding="utf-8")
        code, out = self._run(
            ["html", str(self.dir / "out.html"), "--source", str(self.source), "--template", str(template)]
        )
        self.assertEqual(code, 1)
        self.assertIn("Cannot render page", out)


if __name__ == "__main__":
    unittest.main()
