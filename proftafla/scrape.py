"""
Scraping (upstream endpoint -> ExamGroups / Stats).

The timetable endpoint answers with a JSON envelope whose "html" field holds
the markup for one department (svidID=1..5) or for all of them (svidID=0).

Every function that talks to the network takes a `fetch` callable so the
transport can be replaced in tests:

    fetch(department_id) -> html
"""

from __future__ import annotations

import logging
from typing import Callable, List

import requests

from proftafla.departments import ALL_DEPARTMENTS_ID
from proftafla.errors import UpstreamUnavailable
from proftafla.model import Department, ExamGroup, Stats
from proftafla.parse import parse_exam_groups, parse_student_cells
from proftafla.stats import summarize_students

logger = logging.getLogger(__name__)

Fetcher = Callable[[int], str]


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

TIMETABLE_URL = "https://ugla.hi.is/Proftafla/View/ajax.php"
TIMETABLE_PARAMS = {"sid": "2027", "a": "getProfSvids", "proftaflaID": "37"}

DEFAULT_TIMEOUT = 30.0


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


def fetch_html(department_id: int, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Fetch the timetable markup for one department id (0 = all).

    Raises UpstreamUnavailable for network errors, HTTP errors and
    envelopes without an "html" string. No retries.
    """
    params = dict(TIMETABLE_PARAMS, svidID=str(department_id))
    try:
        resp = requests.get(TIMETABLE_URL, params=params, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        logger.warning("Fetching department %s failed: %s", department_id, e)
        raise UpstreamUnavailable(f"Could not fetch timetable for department {department_id}: {e}") from e
    except ValueError as e:
        logger.warning("Department %s returned invalid JSON: %s", department_id, e)
        raise UpstreamUnavailable(f"Timetable for department {department_id} is not valid JSON") from e

    html = payload.get("html") if isinstance(payload, dict) else None
    if not isinstance(html, str):
        logger.warning("Department %s returned no html field", department_id)
        raise UpstreamUnavailable(f"Timetable for department {department_id} has no html field")

    return html


def make_fetcher(timeout: float = DEFAULT_TIMEOUT) -> Fetcher:
    """
    Return a fetch callable bound to the given request timeout.
    """

    def fetch(department_id: int) -> str:
        return fetch_html(department_id, timeout=timeout)

    return fetch


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def fetch_department_exams(department: Department, fetch: Fetcher = fetch_html) -> List[ExamGroup]:
    """
    Fetch and parse all exam tables of one department.
    """
    html = fetch(department.id)
    groups = parse_exam_groups(html)
    logger.debug(
        "Parsed %d tables / %d exams for %s",
        len(groups),
        sum(len(g.tests) for g in groups),
        department.slug,
    )
    return groups


def compute_stats(fetch: Fetcher = fetch_html) -> Stats:
    """
    Fetch the timetable of all departments and compute student statistics.
    """
    html = fetch(ALL_DEPARTMENTS_ID)
    return summarize_students(parse_student_cells(html))
