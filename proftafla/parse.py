"""
Parsing (timetable HTML -> structured exam records).

The upstream page is a sequence of <h3> headings and <table>s:

    <h3>Hagfræðideild</h3>
    <table><tbody><tr><td>HAG101G</td><td>Rekstrarhagfræði</td>...</tr></tbody></table>

Important rules (DO NOT CHANGE):
- 1 <table> = 1 ExamGroup, in document order, even when it has no rows
- table i gets the i-th <h3> of the document as heading ("" if there is none)
- only <tbody> rows are exam rows
- columns are mapped by position, see parse_exam_row()
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from proftafla.model import ExamGroup, ExamRecord

# Column positions inside an exam row
COLUMNS = ("course", "name", "type", "students", "date")
STUDENTS_COLUMN = COLUMNS.index("students")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _cell_texts(row: Tag) -> List[str]:
    """
    Return the trimmed text of the row's own <td> cells (no nested tables).
    """
    return [td.get_text().strip() for td in row.find_all("td", recursive=False)]


def _cell(cells: List[str], index: int) -> str:
    return cells[index] if index < len(cells) else ""


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# Row parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_exam_row(row: Tag) -> ExamRecord:
    """
    Map one <tr> to an ExamRecord by fixed column position.

    Missing cells become empty strings, nothing is validated.
    """
    cells = _cell_texts(row)
    values = {name: _cell(cells, i) for i, name in enumerate(COLUMNS)}
    return ExamRecord(**values)


def parse_exam_groups(html: str) -> List[ExamGroup]:
    """
    Parse a department page into one ExamGroup per table.
    """
    soup = _soup(html)

    headings = [h3.get_text().strip() for h3 in soup.find_all("h3")]

    groups: List[ExamGroup] = []
    for i, table in enumerate(soup.find_all("table")):
        tests = [parse_exam_row(row) for row in table.select("tbody tr")]
        heading = headings[i] if i < len(headings) else ""
        groups.append(ExamGroup(heading=heading, tests=tests))

    return groups


def parse_student_cells(html: str) -> List[str]:
    """
    Return the students column of every body row in the page, ignoring tables and headings.
    """
    soup = _soup(html)
    return [_cell(_cell_texts(row), STUDENTS_COLUMN) for row in soup.select("tbody tr")]
