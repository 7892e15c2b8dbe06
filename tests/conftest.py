"""
Shared fixtures: sample sheets as row mappings and as files.
"""
import csv

import openpyxl
import pytest


@pytest.fixture
def ann_bob_rows():
    """Two drivers reporting the same shared leg from both sides."""
    return [
        {"Driver": "Ann", "Total": 100, "distance with Bob": 40},
        {"Driver": "Bob", "Total": 90, "distance with Ann": 40},
    ]


@pytest.fixture
def make_xlsx(tmp_path):
    """make_xlsx(name, header, rows, title) -> path of a one-sheet workbook."""
    def _make(name, header, rows, title="Sheet1"):
        path = tmp_path / name
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = title
        ws.append(list(header))
        for r in rows:
            ws.append(list(r))
        wb.save(path)
        return path
    return _make


@pytest.fixture
def make_csv(tmp_path):
    """make_csv(name, header, rows) -> path of a CSV file."""
    def _make(name, header, rows):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            w = csv.writer(f)
            w.writerow(header)
            for r in rows:
                w.writerow(r)
        return path
    return _make
