"""
FastAPI backend for the fleet kilometres web app.
"""
from __future__ import annotations

import tempfile
from pathlib import Path

from fastapi import FastAPI, File, Form, UploadFile, HTTPException
from fastapi.middleware.cors import CORSMiddleware

# Import from parent - run from project root
import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fleet_km.api_data import build_api_response, drivers_to_list
from fleet_km.config import load_settings
from fleet_km.crews import CrewRoster
from fleet_km.ledger import filter_drivers
from fleet_km.parser import SUPPORTED_SUFFIXES, load_crew_roster, load_system_roster
from fleet_km.records import ValidationError
from fleet_km.run import build_view, ingest
from fleet_km.snapshots import SnapshotStore

app = FastAPI(title="Fleet Kilometres", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _check_suffix(upload: UploadFile, what: str) -> str:
    suffix = Path(upload.filename or "").suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise HTTPException(400, f"{what} must be XLSX or CSV")
    return suffix


async def _save_upload(upload: UploadFile, tmp: str, fallback: str) -> Path:
    path = Path(tmp) / Path(upload.filename or fallback).name
    with open(path, "wb") as f:
        f.write(await upload.read())
    return path


def _rosters(system_path: Path | None, crew_path: Path | None) -> tuple[list[str], CrewRoster]:
    """Uploaded rosters win over the configured files. Unreadable rosters come back empty."""
    settings = load_settings()
    system = load_system_roster(system_path or settings.system_roster)
    crew = load_crew_roster(crew_path or settings.crew_roster)
    return system, crew


def _store() -> SnapshotStore:
    return SnapshotStore(load_settings().store)


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/process")
async def process_sheet(
    data_file: UploadFile = File(...),
    system_file: UploadFile | None = File(default=None),
    crew_file: UploadFile | None = File(default=None),
    save_as: str = Form(default=""),
):
    """Upload a distance sheet + optional rosters. Optionally save the dataset."""
    _check_suffix(data_file, "Data file")
    settings = load_settings()

    with tempfile.TemporaryDirectory() as tmp:
        data_path = await _save_upload(data_file, tmp, "data.xlsx")

        system_path = crew_path = None
        if system_file and system_file.filename:
            _check_suffix(system_file, "System roster")
            system_path = await _save_upload(system_file, tmp, "system.xlsx")
        if crew_file and crew_file.filename:
            _check_suffix(crew_file, "Crew roster")
            crew_path = await _save_upload(crew_file, tmp, "crew.xlsx")

        try:
            dataset = ingest(data_path)
        except ValidationError as e:
            raise HTTPException(422, e.reason)
        system, crew = _rosters(system_path, crew_path)

    saved_as = _store().save(save_as, dataset) if save_as.strip() else None
    view = build_view(dataset, system, crew, top_n=settings.top_n)
    return build_api_response(view, saved_as=saved_as)


@app.get("/api/snapshots")
def list_snapshots():
    return {"snapshots": _store().list_entries()}


@app.delete("/api/snapshots")
def clear_snapshots():
    _store().clear()
    return {"cleared": True}


@app.get("/api/snapshots/{key}")
def get_snapshot(key: str):
    """Saved dataset recomputed against the configured rosters."""
    dataset = _store().load(key)
    if dataset is None:
        raise HTTPException(404, f"No saved snapshot named {key!r}")
    system, crew = _rosters(None, None)
    view = build_view(dataset, system, crew, top_n=load_settings().top_n)
    return build_api_response(view)


@app.get("/api/snapshots/{key}/drivers")
def search_snapshot_drivers(key: str, search: str = ""):
    dataset = _store().load(key)
    if dataset is None:
        raise HTTPException(404, f"No saved snapshot named {key!r}")
    system, crew = _rosters(None, None)
    view = build_view(dataset, system, crew)
    return {"drivers": drivers_to_list(filter_drivers(view.adjusted_drivers, search))}


@app.delete("/api/snapshots/{key}")
def delete_snapshot(key: str):
    if not _store().delete(key):
        raise HTTPException(404, f"No saved snapshot named {key!r}")
    return {"deleted": key}
