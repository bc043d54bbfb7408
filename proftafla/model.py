"""
Central data model definitions used across the project.

This module defines the canonical structure of departments, exam rows and
statistics so that:
- scraping, caching and the CLI share the same field names
- the JSON stored in the cache always has the same shape

The JSON field names follow the upstream/web format (camelCase for stats),
the Python attribute names are snake_case.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Department:
    """
    One university department ("svið"). Reference data, never changes at runtime.
    """

    name: str
    slug: str
    id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "slug": self.slug, "id": self.id}


@dataclass(frozen=True)
class ExamRecord:
    """
    One row of an exam table. All values are the raw trimmed cell texts.
    """

    course: str
    name: str
    type: str
    students: str
    date: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "course": self.course,
            "name": self.name,
            "type": self.type,
            "students": self.students,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExamRecord":
        return cls(
            course=str(data.get("course", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            students=str(data.get("students", "")),
            date=str(data.get("date", "")),
        )


@dataclass
class ExamGroup:
    """
    One table of the timetable together with the heading shown above it.
    """

    heading: str
    tests: List[ExamRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"heading": self.heading, "tests": [t.to_dict() for t in self.tests]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExamGroup":
        return cls(
            heading=str(data.get("heading", "")),
            tests=[ExamRecord.from_dict(t) for t in data.get("tests", [])],
        )


@dataclass
class Stats:
    """
    Aggregate statistics over the students column of every exam.

    average_students is already formatted with two decimals ("20.00").
    In the JSON form, numbers that are not finite (a nan sum, an inf minimum)
    become null and read back as nan.
    """

    min: Number
    max: Number
    num_tests: int
    num_students: Number
    average_students: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min": _json_number(self.min),
            "max": _json_number(self.max),
            "numTests": self.num_tests,
            "numStudents": _json_number(self.num_students),
            "averageStudents": self.average_students,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stats":
        return cls(
            min=_from_json_number(data["min"]),
            max=_from_json_number(data["max"]),
            num_tests=int(data["numTests"]),
            num_students=_from_json_number(data["numStudents"]),
            average_students=str(data["averageStudents"]),
        )

    def __eq__(self, other: object) -> bool:
        # nan != nan, so compare the JSON form
        if not isinstance(other, Stats):
            return NotImplemented
        return self.to_dict() == other.to_dict()


def _json_number(value: Number) -> Optional[Number]:
    """
    nan and inf are not valid JSON; they are written as null.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _from_json_number(value: Optional[Number]) -> Number:
    return math.nan if value is None else value
