"""
Spreadsheet loading: XLSX (first sheet) or CSV into header-keyed row mappings.
Roster files load the same way; a roster that cannot be read becomes empty.
"""
import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .crews import CrewRoster, build_crew_roster, build_name_list

logger = logging.getLogger(__name__)

XLSX_SUFFIXES = (".xlsx", ".xlsm")
SUPPORTED_SUFFIXES = XLSX_SUFFIXES + (".csv",)

Row = Dict[str, Any]


def _rows_from_matrix(matrix: List[tuple], default: Any) -> List[Row]:
    """First row is the header. Blank rows are skipped; empty cells take default."""
    if not matrix:
        return []
    header = [str(c).strip() if c is not None else "" for c in matrix[0]]
    rows = []
    for raw in matrix[1:]:
        if not raw or all(c is None or (isinstance(c, str) and not c.strip()) for c in raw):
            continue
        row = {}
        for j, h in enumerate(header):
            if not h:
                continue
            value = raw[j] if j < len(raw) else None
            if value is None or (isinstance(value, str) and not value.strip()):
                value = default
            row[h] = value
        rows.append(row)
    return rows


def load_xlsx_rows(path: Path, default: Any = 0) -> Tuple[List[Row], str]:
    """First sheet of the workbook. Returns (rows, sheet name)."""
    try:
        import openpyxl
    except ImportError:
        raise RuntimeError("openpyxl required for Excel. pip install openpyxl")
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        sheet_name = ws.title
        matrix = list(ws.iter_rows(values_only=True))
    finally:
        wb.close()
    return _rows_from_matrix(matrix, default), sheet_name


def load_csv_rows(path: Path, default: Any = 0) -> Tuple[List[Row], str]:
    """CSV with a header line. The sheet name is the file stem."""
    with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        matrix = [tuple(r) for r in csv.reader(f)]
    return _rows_from_matrix(matrix, default), path.stem


def load_rows(path: Path, default: Any = 0) -> Tuple[List[Row], str]:
    """Load a data sheet from .xlsx/.xlsm or .csv. Returns (rows, sheet name)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(str(path))
    suf = path.suffix.lower()
    if suf in XLSX_SUFFIXES:
        return load_xlsx_rows(path, default)
    if suf == ".csv":
        return load_csv_rows(path, default)
    raise ValueError(f"Unsupported file type {suf or '(none)'}: use XLSX or CSV")


def _roster_rows(path: Optional[Path]) -> Optional[List[Row]]:
    if not path:
        return None
    if not Path(path).exists():
        logger.debug("no roster at %s", path)
        return None
    try:
        rows, _ = load_rows(Path(path), default=None)
    except Exception:
        logger.warning("could not load roster %s", path, exc_info=True)
        return None
    return rows


def load_system_roster(path: Optional[Path]) -> List[str]:
    """Flat allow-list of driver names. Empty when the file is missing or unreadable."""
    rows = _roster_rows(path)
    return build_name_list(rows) if rows else []


def load_crew_roster(path: Optional[Path]) -> CrewRoster:
    """Double-crew names and numbered groups. Empty when the file is missing or unreadable."""
    rows = _roster_rows(path)
    return build_crew_roster(rows) if rows else CrewRoster()
