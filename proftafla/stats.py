"""
Exam statistics.

Reduces the "students" column of every exam row to min / max / count /
sum / average. Cell texts are coerced to numbers like a browser would:

    ""     -> 0
    "12"   -> 12
    "1.5"  -> 1.5
    "n/a"  -> nan   (propagates into the sum, never becomes min or max)
"""

from __future__ import annotations

import math
import re
from typing import Iterable

from proftafla.model import Number, Stats

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def to_number(text: str) -> Number:
    """
    Convert a cell text to a number. Never raises.
    """
    s = text.strip()
    if not s:
        return 0
    if _INT_RE.fullmatch(s):
        return int(s)
    if _FLOAT_RE.fullmatch(s):
        return float(s)
    return math.nan


def format_average(total: Number, count: int) -> str:
    """
    total / count with two decimals; "NaN" when the total is not a number.
    """
    if count == 0:
        return "0.00"
    avg = total / count
    if math.isnan(avg):
        return "NaN"
    return f"{avg:.2f}"


def summarize_students(cells: Iterable[str]) -> Stats:
    """
    Build Stats from the raw students cells of all exam rows.

    With no rows at all every number is 0 and the average is "0.00".
    """
    total: Number = 0
    max_value: Number = 0
    min_value: Number = math.inf
    count = 0

    for text in cells:
        num = to_number(text)
        total += num
        # comparisons with nan are False, so nan never wins
        if max_value < num:
            max_value = num
        if min_value > num:
            min_value = num
        count += 1

    if count == 0:
        min_value = 0

    return Stats(
        min=min_value,
        max=max_value,
        num_tests=count,
        num_students=total,
        average_students=format_average(total, count),
    )
