"""
Read-side rankings for charts. Never writes back into the ledger.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .crews import group_max_shared
from .numbers import name_key
from .records import AdjustedDriverRecord, CrewGroup

DEFAULT_TOP_N = 10


@dataclass(frozen=True)
class RankingEntry:
    name: str
    distance: float


@dataclass
class Rankings:
    system: List[RankingEntry] = field(default_factory=list)
    crew: List[RankingEntry] = field(default_factory=list)
    top_total: List[RankingEntry] = field(default_factory=list)
    top_solo: List[RankingEntry] = field(default_factory=list)
    top_shared: List[RankingEntry] = field(default_factory=list)


def _descending(entries: Iterable[RankingEntry]) -> List[RankingEntry]:
    return sorted(entries, key=lambda e: -e.distance)


def system_ranking(drivers: Sequence[AdjustedDriverRecord], system_roster: Iterable[str]) -> List[RankingEntry]:
    """Drivers on the system roster by adjusted total."""
    allowed = {name_key(n) for n in system_roster}
    return _descending(
        RankingEntry(d.name, d.total_distance_adjusted)
        for d in drivers if name_key(d.name) in allowed
    )


def crew_label(group: CrewGroup) -> str:
    return f"Crew {group.nr}: {' + '.join(group.members)}"


def crew_ranking(drivers: Sequence[AdjustedDriverRecord], crew_groups: Sequence[CrewGroup]) -> List[RankingEntry]:
    """One entry per crew, valued at the largest adjusted shared distance among its members."""
    return _descending(
        RankingEntry(crew_label(g), group_max_shared(drivers, g, attr="shared_distance_adjusted"))
        for g in crew_groups
    )


def project(
    drivers: Sequence[AdjustedDriverRecord],
    system_roster: Iterable[str],
    crew_groups: Sequence[CrewGroup],
    double_crew_roster: Iterable[str] = (),
    top_n: int = DEFAULT_TOP_N,
) -> Rankings:
    """
    System and crew rankings are complete; the top_* charts are cut to top_n.
    top_shared leaves out double-crew drivers, whose shared figure is a group value.
    """
    crew_names = {name_key(n) for n in double_crew_roster}
    top_total = _descending(RankingEntry(d.name, d.total_distance_adjusted) for d in drivers)
    top_solo = _descending(RankingEntry(d.name, d.solo_distance) for d in drivers)
    top_shared = _descending(
        RankingEntry(d.name, d.shared_distance_adjusted)
        for d in drivers if name_key(d.name) not in crew_names
    )
    return Rankings(
        system=system_ranking(drivers, system_roster),
        crew=crew_ranking(drivers, crew_groups),
        top_total=top_total[:top_n],
        top_solo=top_solo[:top_n],
        top_shared=top_shared[:top_n],
    )
