"""
Column classification: sniff headers once per row set into a typed schema.
Driver/total/partner columns match case-insensitively by substring or prefix.
"""
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .records import ValidationError

DRIVER_ALIASES = ("driver", "kierowca")
# Preferred first: the "all" column is the full distance, "solo" is the fallback
TOTAL_ALIASES = ("total", "kilometry all")
TOTAL_FALLBACK_ALIASES = ("solo", "kilometry solo")
# "distance with Bob", "Km distance with Bob", "Kilometry z Bob"; the partner is the text after the phrase
PARTNER_RE = re.compile(r"\b(?:distance with|kilometry z)(?:\s+|$)", re.IGNORECASE)
GROUP_NUMBER_HEADER = "nr"

MISSING_COLUMNS_REASON = (
    "Missing columns: need a 'Driver' column, a 'Total' (or 'Solo') distance column "
    "and at least one 'Distance with <partner>' column."
)
EMPTY_SHEET_REASON = "The sheet is empty."


@dataclass(frozen=True)
class ColumnSchema:
    name_column: str
    total_column: str
    partner_columns: List[Tuple[str, str]] = field(default_factory=list)  # (header, partner name or "")


def headers_of(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    """Every header seen across the rows, in first-seen order."""
    seen = {}
    for row in rows:
        for h in row.keys():
            if h is not None and h not in seen:
                seen[h] = None
    return [str(h) for h in seen]


def partner_name_from_header(header: str) -> Optional[str]:
    """'Km distance with Bob' -> 'Bob'. None if the header is not a partner column; '' when no name follows."""
    m = PARTNER_RE.search(header)
    if not m:
        return None
    return header[m.end():].strip()


def _find(headers: List[str], aliases: Tuple[str, ...]) -> Optional[str]:
    for h in headers:
        hl = h.lower()
        if any(a in hl for a in aliases):
            return h
    return None


def find_name_column(headers: List[str]) -> Optional[str]:
    return _find(headers, DRIVER_ALIASES)


def find_group_number_column(headers: List[str]) -> Optional[str]:
    """Exact (case-insensitive) 'nr' header."""
    for h in headers:
        if h.strip().lower() == GROUP_NUMBER_HEADER:
            return h
    return None


def classify_columns(rows: Sequence[Mapping[str, Any]]) -> ColumnSchema:
    """Build the schema or raise ValidationError with a readable reason."""
    if not rows:
        raise ValidationError(EMPTY_SHEET_REASON)
    headers = headers_of(rows)
    partner_columns = []
    other = []
    for h in headers:
        partner = partner_name_from_header(h)
        if partner is None:
            other.append(h)
        else:
            partner_columns.append((h, partner))
    name_column = find_name_column(other)
    rest = [h for h in other if h != name_column]
    total_column = _find(rest, TOTAL_ALIASES) or _find(rest, TOTAL_FALLBACK_ALIASES)
    if not name_column or not total_column or not partner_columns:
        raise ValidationError(MISSING_COLUMNS_REASON)
    return ColumnSchema(
        name_column=name_column,
        total_column=total_column,
        partner_columns=partner_columns,
    )
