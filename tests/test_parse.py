"""
Unit tests for timetable HTML parsing.

Rules checked here:
- one ExamGroup per <table>, even without rows
- table i gets the i-th <h3> as heading, "" if there is none
- columns are mapped by position and trimmed
"""

import unittest

from proftafla.model import ExamRecord
from proftafla.parse import parse_exam_groups, parse_student_cells


def _row(*cells: str) -> str:
    return "<tr>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"


def _table(*rows: str) -> str:
    return "<table><thead><tr><th>Námskeið</th></tr></thead><tbody>" + "".join(rows) + "</tbody></table>"


class TestParseExamGroups(unittest.TestCase):
    def test_row_columns_are_trimmed_and_mapped_by_position(self) -> None:
        html = "<div><h3> Hagfræðideild </h3></div>" + _table(
            _row(" HAG101G ", "Rekstrarhagfræði\n", "Skriflegt", " 120 ", "12.12.2026 09:00")
        )
        groups = parse_exam_groups(html)

        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].heading, "Hagfræðideild")
        self.assertEqual(
            groups[0].tests,
            [ExamRecord("HAG101G", "Rekstrarhagfræði", "Skriflegt", "120", "12.12.2026 09:00")],
        )

    def test_two_tables_three_headings_map_by_position(self) -> None:
        html = (
            "<div><h3>A</h3><h3>B</h3><h3>C</h3></div>"
            + _table(_row("X1", "x", "t", "1", "d"))
            + _table(_row("Y1", "y", "t", "2", "d"), _row("Y2", "y", "t", "3", "d"))
        )
        groups = parse_exam_groups(html)

        self.assertEqual([g.heading for g in groups], ["A", "B"])
        self.assertEqual([len(g.tests) for g in groups], [1, 2])
        self.assertEqual(groups[1].tests[1].course, "Y2")

    def test_table_without_heading_gets_empty_string(self) -> None:
        html = "<div><h3>Only</h3></div>" + _table(_row("A", "", "", "1", "")) + _table(_row("B", "", "", "2", ""))
        groups = parse_exam_groups(html)

        self.assertEqual([g.heading for g in groups], ["Only", ""])

    def test_empty_table_keeps_group_and_heading(self) -> None:
        html = "<div><h3>Tóm</h3><h3>Full</h3></div>" + _table() + _table(_row("A", "a", "t", "5", "d"))
        groups = parse_exam_groups(html)

        self.assertEqual(len(groups), 2)
        self.assertEqual(groups[0].heading, "Tóm")
        self.assertEqual(groups[0].tests, [])
        self.assertEqual(groups[1].heading, "Full")

    def test_short_row_yields_empty_cells(self) -> None:
        groups = parse_exam_groups(_table(_row("A", "Name")))
        rec = groups[0].tests[0]

        self.assertEqual(rec.course, "A")
        self.assertEqual(rec.name, "Name")
        self.assertEqual(rec.students, "")
        self.assertEqual(rec.date, "")

    def test_header_rows_outside_tbody_are_ignored(self) -> None:
        html = "<table><tr><td>not</td><td>an</td><td>exam</td></tr></table>"
        groups = parse_exam_groups(html)

        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].tests, [])

    def test_no_tables(self) -> None:
        self.assertEqual(parse_exam_groups("<div><h3>Nothing</h3></div>"), [])


class TestParseStudentCells(unittest.TestCase):
    def test_collects_column_four_across_tables(self) -> None:
        html = (
            "<h3>A</h3>"
            + _table(_row("A", "a", "t", "10", "d"))
            + _table(_row("B", "b", "t", " 20 ", "d"), _row("C", "c", "t", "30", "d"))
        )
        self.assertEqual(parse_student_cells(html), ["10", "20", "30"])

    def test_missing_column_is_empty(self) -> None:
        self.assertEqual(parse_student_cells(_table(_row("A", "a"))), [""])


if __name__ == "__main__":
    unittest.main()
