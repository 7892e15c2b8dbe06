"""
Double-crew correction. Members of one crew log the same vehicle legs, so each
member's shared distance is replaced by the group's largest raw figure.
Also builds the system and crew rosters from roster sheet rows.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from .columns import find_group_number_column, find_name_column, headers_of
from .numbers import cell_text, group_number_sort_key, group_number_text, name_key
from .records import AdjustedDriverRecord, CrewGroup


@dataclass
class CrewRoster:
    """names: everyone flagged as double crew. groups: only rows that carried a group number."""
    names: List[str] = field(default_factory=list)
    groups: List[CrewGroup] = field(default_factory=list)


def _roster_name_column(rows: Sequence[Mapping[str, Any]]) -> Optional[str]:
    headers = headers_of(rows)
    if not headers:
        return None
    return find_name_column(headers) or headers[0]


def build_name_list(rows: Sequence[Mapping[str, Any]]) -> List[str]:
    """Flat roster: the driver column (or the first column) of every non-empty row."""
    if not rows:
        return []
    col = _roster_name_column(rows)
    names = []
    for row in rows:
        name = cell_text(row.get(col))
        if name:
            names.append(name)
    return names


def build_crew_roster(rows: Sequence[Mapping[str, Any]]) -> CrewRoster:
    """Crew roster rows: driver name plus an optional 'nr' group number."""
    if not rows:
        return CrewRoster()
    col = _roster_name_column(rows)
    nr_col = find_group_number_column(headers_of(rows))
    names = []
    members: Dict[str, List[str]] = {}
    for row in rows:
        name = cell_text(row.get(col))
        if not name:
            continue
        names.append(name)
        nr = group_number_text(row.get(nr_col)) if nr_col else ""
        if nr:
            members.setdefault(nr, []).append(name)
    groups = [CrewGroup(nr=nr, members=m) for nr, m in members.items()]
    groups.sort(key=lambda g: group_number_sort_key(g.nr))
    return CrewRoster(names=names, groups=groups)


def group_by_member(crew_groups: Iterable[CrewGroup]) -> Dict[str, str]:
    """name key -> group nr. A name listed in several groups maps to the last one."""
    out = {}
    for g in crew_groups:
        for member in g.members:
            out[name_key(member)] = g.nr
    return out


def crew_member_keys(crew_groups: Iterable[CrewGroup]) -> Set[str]:
    return {name_key(m) for g in crew_groups for m in g.members}


def group_max_shared(drivers: Sequence[Any], group: CrewGroup, attr: str = "shared_distance") -> float:
    """Largest shared distance among the group's members; members missing from the ledger count as 0."""
    by_name: Dict[str, Any] = {}
    for d in drivers:
        by_name.setdefault(name_key(d.name), d)
    best = 0.0
    for member in group.members:
        d = by_name.get(name_key(member))
        if d is not None:
            best = max(best, getattr(d, attr))
    return best


def adjust(
    drivers: Sequence[Any],
    crew_groups: Sequence[CrewGroup],
    double_crew_roster: Iterable[str],
) -> List[AdjustedDriverRecord]:
    """
    Derive adjusted copies of the ledger. Roster membership decides whether a driver
    is corrected; group membership decides the value. A rostered driver without a
    group keeps raw values. Accepts already-adjusted records (the result is the same).
    """
    roster = {name_key(n) for n in double_crew_roster}
    group_of = group_by_member(crew_groups)
    group_max = {g.nr: group_max_shared(drivers, g) for g in crew_groups}
    out = []
    for d in drivers:
        key = name_key(d.name)
        nr = group_of.get(key)
        if key in roster and nr is not None:
            shared_adj = group_max[nr]
            total_adj = d.solo_distance + shared_adj
        else:
            shared_adj = d.shared_distance
            total_adj = d.total_distance
        out.append(AdjustedDriverRecord(
            name=d.name,
            solo_distance=d.solo_distance,
            shared_distance=d.shared_distance,
            total_distance=d.total_distance,
            partners=tuple(d.partners),
            shared_distance_adjusted=shared_adj,
            total_distance_adjusted=total_adj,
            crew_nr=nr,
        ))
    return out
