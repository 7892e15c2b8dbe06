"""
Driver ledger types: per-driver records, canonical duet pairs, crew groups, fleet totals.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


class ValidationError(ValueError):
    """Row set cannot be ingested (empty sheet, missing required columns)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class PartnerDistance:
    """Distance one driver reported driving together with a named partner."""
    partner_name: str
    distance: float


@dataclass(frozen=True)
class DriverRecord:
    """One driver's figures from one ingested row."""
    name: str
    solo_distance: float
    shared_distance: float   # raw sum over all partner columns
    total_distance: float    # verbatim from the total column, not solo + shared
    partners: Tuple[PartnerDistance, ...] = ()  # distance descending


@dataclass(frozen=True)
class DuetPair:
    """One deduplicated shared-distance relationship; a and b are in collation order."""
    a: str
    b: str
    distance: float

    @property
    def label(self) -> str:
        return f"{self.a} + {self.b}"


@dataclass(frozen=True)
class CrewGroup:
    """Drivers declared as one double crew under group number nr."""
    nr: str
    members: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AdjustedDriverRecord:
    """DriverRecord plus crew-corrected figures. Non-crew drivers carry their raw values."""
    name: str
    solo_distance: float
    shared_distance: float
    total_distance: float
    partners: Tuple[PartnerDistance, ...]
    shared_distance_adjusted: float
    total_distance_adjusted: float
    crew_nr: Optional[str] = None


@dataclass(frozen=True)
class FleetTotals:
    total_drivers: int
    total_kilometers: float
    solo_kilometers: float
    shared_kilometers: float
    average_kilometers: float
    shared_share_percent: float


@dataclass
class Dataset:
    """
    Result of one ingestion plus its provenance. Stored as an opaque blob by the
    snapshot store; duet_pairs is None for snapshots written without it.
    """
    drivers: List[DriverRecord]
    duet_pairs: Optional[List[DuetPair]]
    totals: FleetTotals
    source_name: str = ""
    source_sheet: str = ""
    imported_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "drivers": [driver_to_dict(d) for d in self.drivers],
            "duet_pairs": None if self.duet_pairs is None else [pair_to_dict(p) for p in self.duet_pairs],
            "totals": totals_to_dict(self.totals),
            "source_name": self.source_name,
            "source_sheet": self.source_sheet,
            "imported_at": self.imported_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        """Rebuild from a stored blob. Missing fields degrade to empty values."""
        drivers = [driver_from_dict(d) for d in data.get("drivers") or []]
        raw_pairs = data.get("duet_pairs")
        duet_pairs = None
        if raw_pairs is not None:
            duet_pairs = [
                DuetPair(a=str(p.get("a", "")), b=str(p.get("b", "")), distance=float(p.get("distance") or 0))
                for p in raw_pairs
            ]
        raw_totals = data.get("totals") or {}
        totals = FleetTotals(
            total_drivers=int(raw_totals.get("total_drivers") or len(drivers)),
            total_kilometers=float(raw_totals.get("total_kilometers") or 0),
            solo_kilometers=float(raw_totals.get("solo_kilometers") or 0),
            shared_kilometers=float(raw_totals.get("shared_kilometers") or 0),
            average_kilometers=float(raw_totals.get("average_kilometers") or 0),
            shared_share_percent=float(raw_totals.get("shared_share_percent") or 0),
        )
        return cls(
            drivers=drivers,
            duet_pairs=duet_pairs,
            totals=totals,
            source_name=data.get("source_name") or "",
            source_sheet=data.get("source_sheet") or "",
            imported_at=data.get("imported_at") or "",
        )


def partner_to_dict(p: PartnerDistance) -> Dict[str, Any]:
    return {"partner_name": p.partner_name, "distance": p.distance}


def driver_to_dict(d: DriverRecord) -> Dict[str, Any]:
    return {
        "name": d.name,
        "solo_distance": d.solo_distance,
        "shared_distance": d.shared_distance,
        "total_distance": d.total_distance,
        "partners": [partner_to_dict(p) for p in d.partners],
    }


def driver_from_dict(data: Dict[str, Any]) -> DriverRecord:
    return DriverRecord(
        name=str(data.get("name", "")),
        solo_distance=float(data.get("solo_distance") or 0),
        shared_distance=float(data.get("shared_distance") or 0),
        total_distance=float(data.get("total_distance") or 0),
        partners=tuple(
            PartnerDistance(partner_name=str(p.get("partner_name", "")), distance=float(p.get("distance") or 0))
            for p in data.get("partners") or []
        ),
    )


def pair_to_dict(p: DuetPair) -> Dict[str, Any]:
    return {"a": p.a, "b": p.b, "distance": p.distance, "label": p.label}


def totals_to_dict(t: FleetTotals) -> Dict[str, Any]:
    return {
        "total_drivers": t.total_drivers,
        "total_kilometers": t.total_kilometers,
        "solo_kilometers": t.solo_kilometers,
        "shared_kilometers": t.shared_kilometers,
        "average_kilometers": t.average_kilometers,
        "shared_share_percent": t.shared_share_percent,
    }
