import unittest

from coursetable.model import CourseRecord, coerce_credit, format_credit


class TestCoerceCredit(unittest.TestCase):
    def test_numbers_and_numeric_strings(self) -> None:
        self.assertEqual(coerce_credit(3), 3.0)
        self.assertEqual(coerce_credit("3"), 3.0)
        self.assertEqual(coerce_credit(" 1.5 "), 1.5)
        self.assertEqual(coerce_credit(0), 0.0)

    def test_failures_return_none(self) -> None:
        huge = 10**400
        for raw in (None, "", "abc", -1, "-1", float("nan"), "inf", True, [3], huge, str(huge), "1e400"):
            with self.subTest(raw=raw):
                self.assertIsNone(coerce_credit(raw))

    def test_huge_integer_in_document(self) -> None:
        c = CourseRecord.from_dict({"code": "X", "credit": 10**400})
        self.assertIsNone(c.credit)
        self.assertEqual(c.credit_value, 0.0)

    def test_format_credit(self) -> None:
        self.assertEqual(format_credit(3.0), "3")
        self.assertEqual(format_credit(1.5), "1.5")
        self.assertEqual(format_credit(None), "")


class TestCourseRecord(unittest.TestCase):
    def test_from_dict(self) -> None:
        c = CourseRecord.from_dict(
            {"year_level": "1st", "sem": "2nd", "code": " CS102 ", "description": "Intro", "credit": "3"}
        )
        self.assertEqual(c.code, "CS102")
        self.assertEqual(c.credit, 3.0)
        self.assertEqual(c.term, "1st Year / 2nd Sem")

    def test_missing_fields_are_blank(self) -> None:
        c = CourseRecord.from_dict({"code": "CS999"})
        self.assertEqual((c.year_level, c.sem, c.description), ("", "", ""))
        self.assertIsNone(c.credit)
        self.assertEqual(c.credit_value, 0.0)
        self.assertEqual(c.term, "")

    def test_credit_display_keeps_raw_text(self) -> None:
        self.assertEqual(CourseRecord.from_dict({"credit": "3 (lec)"}).credit_display, "3 (lec)")
        self.assertEqual(CourseRecord.from_dict({"credit": "3"}).credit_display, "3")
        self.assertEqual(CourseRecord.from_dict({"credit": 1.5}).credit_display, "1.5")
        self.assertEqual(CourseRecord.from_dict({}).credit_display, "")

    def test_immutable(self) -> None:
        c = CourseRecord.from_dict({"code": "CS999"})
        with self.assertRaises(AttributeError):
            c.code = "OTHER"  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
