"""
Orchestrate: load sheet and rosters, normalize, adjust for crews, total and rank.
"""
import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .crews import CrewRoster, adjust
from .ledger import normalize
from .parser import load_crew_roster, load_rows, load_system_roster
from .rankings import DEFAULT_TOP_N, Rankings, project
from .records import AdjustedDriverRecord, Dataset, FleetTotals
from .snapshots import SnapshotStore
from .totals import compute_totals


@dataclass
class View:
    """Everything a presentation layer renders for one dataset and one pair of rosters."""
    dataset: Dataset
    adjusted_drivers: List[AdjustedDriverRecord]
    totals: FleetTotals
    rankings: Rankings
    system_roster: List[str] = field(default_factory=list)
    crew_roster: CrewRoster = field(default_factory=CrewRoster)


@dataclass
class RunResult:
    view: View
    saved_as: Optional[str] = None


def build_view(
    dataset: Dataset,
    system_roster: Optional[List[str]] = None,
    crew_roster: Optional[CrewRoster] = None,
    top_n: int = DEFAULT_TOP_N,
) -> View:
    """Apply rosters to a dataset. Empty rosters leave every figure raw."""
    system_roster = system_roster or []
    crew_roster = crew_roster or CrewRoster()
    adjusted = adjust(dataset.drivers, crew_roster.groups, crew_roster.names)
    totals = compute_totals(adjusted, dataset.duet_pairs, crew_roster.groups)
    rankings = project(adjusted, system_roster, crew_roster.groups, crew_roster.names, top_n=top_n)
    return View(
        dataset=dataset,
        adjusted_drivers=adjusted,
        totals=totals,
        rankings=rankings,
        system_roster=system_roster,
        crew_roster=crew_roster,
    )


def ingest(data_path: Path) -> Dataset:
    """Load and normalize one data file. Raises ValidationError for an unusable sheet."""
    data_path = Path(data_path)
    rows, sheet_name = load_rows(data_path)
    return normalize(
        rows,
        source_name=data_path.name,
        source_sheet=sheet_name,
        imported_at=datetime.datetime.now(datetime.timezone.utc).isoformat(),
    )


def run(
    data_path: Optional[Path] = None,
    system_path: Optional[Path] = None,
    crew_path: Optional[Path] = None,
    store: Optional[SnapshotStore] = None,
    save_as: Optional[str] = None,
    load_key: Optional[str] = None,
    top_n: int = DEFAULT_TOP_N,
) -> RunResult:
    """
    Ingest data_path (or load snapshot load_key from store), apply rosters and
    optionally save the dataset under save_as.
    """
    if load_key:
        if store is None:
            raise ValueError("A snapshot store is required to load a snapshot")
        dataset = store.load(load_key)
        if dataset is None:
            raise LookupError(f"No saved snapshot named {load_key!r}")
    elif data_path is not None:
        dataset = ingest(data_path)
    else:
        raise ValueError("Nothing to process: give a data file or a snapshot name")

    view = build_view(
        dataset,
        system_roster=load_system_roster(system_path),
        crew_roster=load_crew_roster(crew_path),
        top_n=top_n,
    )
    saved_as = None
    if save_as is not None and store is not None:
        saved_as = store.save(save_as, dataset)
    return RunResult(view=view, saved_as=saved_as)
