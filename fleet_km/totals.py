"""
Fleet-wide totals with crew-aware deduplication of shared distance.
"""
import math
from typing import Optional, Sequence

from .crews import crew_member_keys
from .numbers import name_key
from .records import AdjustedDriverRecord, CrewGroup, DuetPair, FleetTotals


def shared_from_pairs(duet_pairs: Sequence[DuetPair], crew_groups: Sequence[CrewGroup]) -> float:
    """Sum of pair distances, skipping pairs that touch any crew member."""
    members = crew_member_keys(crew_groups)
    return math.fsum(
        p.distance for p in duet_pairs
        if name_key(p.a) not in members and name_key(p.b) not in members
    )


def shared_from_drivers(drivers: Sequence[AdjustedDriverRecord], crew_groups: Sequence[CrewGroup]) -> float:
    """Fallback for datasets stored without pairs: adjusted shared distance of non-crew drivers."""
    members = crew_member_keys(crew_groups)
    return math.fsum(d.shared_distance_adjusted for d in drivers if name_key(d.name) not in members)


def compute_totals(
    drivers: Sequence[AdjustedDriverRecord],
    duet_pairs: Optional[Sequence[DuetPair]],
    crew_groups: Sequence[CrewGroup],
) -> FleetTotals:
    """
    duet_pairs=None means the pairs are unknown (old snapshot) and the driver-level
    rule is used; an empty list is a known, pair-free dataset.
    """
    solo = math.fsum(d.solo_distance for d in drivers)
    if duet_pairs is not None:
        shared = shared_from_pairs(duet_pairs, crew_groups)
    else:
        shared = shared_from_drivers(drivers, crew_groups)
    total = solo + shared
    count = len(drivers)
    return FleetTotals(
        total_drivers=count,
        total_kilometers=total,
        solo_kilometers=solo,
        shared_kilometers=shared,
        average_kilometers=total / count if count else 0.0,
        shared_share_percent=shared / total * 100 if total else 0.0,
    )
