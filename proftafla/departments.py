"""
The fixed list of departments ("svið") served by the exam timetable.

Each department has a slug used as lookup key and cache key, and the
numeric id the upstream endpoint expects. Id 0 means "all departments"
and is only used for statistics.
"""

from __future__ import annotations

from typing import List, Optional

from proftafla.model import Department

ALL_DEPARTMENTS_ID = 0

DEPARTMENTS: tuple[Department, ...] = (
    Department(name="Félagsvísindasvið", slug="felagsvisindasvid", id=1),
    Department(name="Heilbrigðisvísindasvið", slug="heilbrigdisvisindasvid", id=2),
    Department(name="Hugvísindasvið", slug="hugvisindasvid", id=3),
    Department(name="Menntavísindasvið", slug="menntavisindasvid", id=4),
    Department(name="Verkfræði- og náttúruvísindasvið", slug="verkfraedi-og-natturuvisindasvid", id=5),
)


def list_departments() -> List[Department]:
    """
    Return all departments in id order.
    """
    return list(DEPARTMENTS)


def find_department(slug: str) -> Optional[Department]:
    """
    Return the department with the given slug, or None if there is none.
    """
    for department in DEPARTMENTS:
        if department.slug == slug:
            return department
    return None
