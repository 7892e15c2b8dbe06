"""
Cell coercion: locale-tolerant decimals, group numbers, driver name identity and collation.
"""
import math
import re
import unicodedata
from typing import Any, Optional, Tuple

# Leading numeric prefix, e.g. "12.5 km" -> 12.5 (comma already swapped for a period)
NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Letters NFKD does not decompose; collate next to their base letter
_COLLATION_FOLD = str.maketrans({"ł": "l", "Ł": "l", "ø": "o", "Ø": "o", "đ": "d", "Đ": "d", "ß": "ss"})


def to_number(value: Any) -> float:
    """Parse a cell as a decimal. Accepts comma or period separator. Anything unparseable -> 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        num = float(value)
        return num if math.isfinite(num) else 0.0
    if value is None:
        return 0.0
    s = str(value).replace(",", ".", 1)
    m = NUMBER_RE.match(s)
    if not m:
        return 0.0
    num = float(m.group(0))
    return num if math.isfinite(num) else 0.0


def to_distance(value: Any) -> float:
    """Distance cell: like to_number but never negative."""
    return max(0.0, to_number(value))


def cell_text(value: Any) -> str:
    """Trimmed text of a cell; empty for None and for the spreadsheet default 0."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return ""
    return str(value).strip()


def group_number_text(value: Any) -> str:
    """Crew group number as text. Integral floats from spreadsheets render as integers (1.0 -> "1")."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def group_number_sort_key(nr: str) -> Tuple[int, float]:
    """Ascending numeric order; non-numeric numbers go last."""
    try:
        num = float(nr.replace(",", "."))
    except ValueError:
        return (1, 0.0)
    if not math.isfinite(num):
        return (1, 0.0)
    return (0, num)


def name_key(name: Optional[str]) -> str:
    """Canonical identity of a driver: names differing only in case are the same driver."""
    return (name or "").strip().casefold()


def collation_key(name: str) -> Tuple[str, str, str]:
    """
    Locale-style sort key: accents sort with their base letter ("Ł" next to "L"),
    then case-insensitive, then exact text as a final tie-break.
    """
    folded = unicodedata.normalize("NFKD", name.translate(_COLLATION_FOLD))
    base = "".join(c for c in folded if not unicodedata.combining(c))
    return (base.casefold(), name.casefold(), name)
