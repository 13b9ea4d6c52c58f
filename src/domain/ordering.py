"""Value helpers shared by filtering, sorting and metrics

ERP dates arrive as ISO strings ("2023-10-26T00:00:00") and are compared at
day granularity. Text is compared with a collation key that ignores case and
accents and orders embedded numbers numerically ("INV-9" < "INV-10").
"""

import re
import unicodedata
from datetime import date, datetime
from typing import Any, Optional, Tuple, Union

_DIGIT_RUN = re.compile(r"(\d+)")


def parse_day(value: Union[str, date, datetime, None]) -> Optional[date]:
    """
    Parse a date-like value to a calendar day

    Args:
        value: ISO date/datetime string, date or datetime

    Returns:
        The calendar day, or None when the value is empty or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    day_part = str(value).strip().split("T")[0].split(" ")[0]
    if not day_part:
        return None
    try:
        return date.fromisoformat(day_part)
    except ValueError:
        return None


def fold_text(value: Optional[str]) -> str:
    """Lowercase and strip accents for case/accent-insensitive matching"""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def collation_key(value: Optional[str]) -> Tuple[Tuple[int, int, str], ...]:
    """
    Build a sort key for locale-style text comparison

    Digit runs become integers so that numbers embedded in text compare by
    value. Each chunk is tagged so integers and text never compare directly.
    """
    chunks = []
    for chunk in _DIGIT_RUN.split(fold_text(value)):
        if not chunk:
            continue
        if chunk.isdigit():
            chunks.append((0, int(chunk), ""))
        else:
            chunks.append((1, 0, chunk))
    return tuple(chunks)


def compare(a: Any, b: Any, descending: bool = False) -> int:
    """
    Three-way comparison with missing values last

    None sorts after every present value whatever the direction; the
    direction only flips the order of present values.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    result = (a > b) - (a < b)
    return -result if descending else result
