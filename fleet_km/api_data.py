"""
Produce JSON-serializable structures for the web API.
Rankings are label/value sequences ready for charting.
"""
from typing import Any, Dict, List, Optional, Sequence

from .rankings import RankingEntry, Rankings
from .records import AdjustedDriverRecord, driver_to_dict, totals_to_dict
from .run import View


def _adjusted_to_dict(d: AdjustedDriverRecord) -> Dict[str, Any]:
    out = driver_to_dict(d)
    out.update({
        "shared_distance_adjusted": d.shared_distance_adjusted,
        "total_distance_adjusted": d.total_distance_adjusted,
        "crew_nr": d.crew_nr,
    })
    return out


def _chart(entries: Sequence[RankingEntry]) -> Dict[str, List[Any]]:
    return {
        "labels": [e.name for e in entries],
        "values": [e.distance for e in entries],
    }


def rankings_to_dict(r: Rankings) -> Dict[str, Any]:
    return {
        "system": _chart(r.system),
        "crew": _chart(r.crew),
        "top_total": _chart(r.top_total),
        "top_solo": _chart(r.top_solo),
        "top_shared": _chart(r.top_shared),
    }


def drivers_to_list(drivers: Sequence[AdjustedDriverRecord]) -> List[Dict[str, Any]]:
    return [_adjusted_to_dict(d) for d in drivers]


def build_api_response(view: View, saved_as: Optional[str] = None) -> Dict[str, Any]:
    """Build JSON-serializable response for the web API."""
    return {
        "dataset": view.dataset.to_dict(),
        "adjusted_drivers": drivers_to_list(view.adjusted_drivers),
        "totals": totals_to_dict(view.totals),
        "rankings": rankings_to_dict(view.rankings),
        "rosters": {
            "system": len(view.system_roster),
            "double_crew": len(view.crew_roster.names),
            "crew_groups": [{"nr": g.nr, "members": list(g.members)} for g in view.crew_roster.groups],
        },
        "saved_as": saved_as,
    }
