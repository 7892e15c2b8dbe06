"""
Text outputs: run summary, fleet totals, rankings and one driver's detail.
"""
from typing import List, Optional

from .rankings import RankingEntry, Rankings
from .records import AdjustedDriverRecord, Dataset, FleetTotals


def format_km(value: float) -> str:
    """Up to two decimals, thousands separated; trailing zeros dropped."""
    s = f"{value:,.2f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def format_run_summary(dataset: Dataset, saved_as: Optional[str] = None) -> str:
    lines = [
        f"Loaded {len(dataset.drivers)} drivers from sheet {dataset.source_sheet or '?'}"
        f" ({dataset.source_name or 'snapshot'})",
        f"Duet pairs: {'unknown' if dataset.duet_pairs is None else len(dataset.duet_pairs)}",
    ]
    if dataset.imported_at:
        lines.append(f"Imported at: {dataset.imported_at}")
    if saved_as:
        lines.append(f"Saved as: {saved_as}")
    return "\n".join(lines)


def format_totals(totals: FleetTotals) -> str:
    return (
        f"Drivers: {totals.total_drivers}\n"
        f"Total km: {format_km(totals.total_kilometers)}\n"
        f"Solo km: {format_km(totals.solo_kilometers)}\n"
        f"Shared km: {format_km(totals.shared_kilometers)}\n"
        f"Average km per driver: {format_km(totals.average_kilometers)}\n"
        f"Shared share: {format_km(totals.shared_share_percent)}%"
    )


def _format_ranking(title: str, entries: List[RankingEntry], limit: Optional[int] = None) -> List[str]:
    lines = [f"--- {title} ---"]
    shown = entries[:limit] if limit else entries
    if not shown:
        lines.append("  (none)")
    for i, e in enumerate(shown, start=1):
        lines.append(f"  {i:>2}. {e.name}  {format_km(e.distance)} km")
    return lines


def format_rankings(rankings: Rankings, limit: Optional[int] = None) -> str:
    """limit cuts the system and crew rankings; top_* charts are already cut."""
    lines = []
    lines += _format_ranking("TOP TOTAL", rankings.top_total)
    lines += _format_ranking("TOP SOLO", rankings.top_solo)
    lines += _format_ranking("TOP SHARED (without double crews)", rankings.top_shared)
    lines += _format_ranking("SYSTEM", rankings.system, limit)
    lines += _format_ranking("DOUBLE CREWS", rankings.crew, limit)
    return "\n".join(lines)


def format_driver(driver: AdjustedDriverRecord) -> str:
    lines = [
        f"DRIVER: {driver.name}",
        f"Solo: {format_km(driver.solo_distance)} km",
        f"Shared: {format_km(driver.shared_distance)} km",
        f"Total: {format_km(driver.total_distance)} km",
    ]
    if driver.crew_nr is not None:
        lines.append(
            f"Crew {driver.crew_nr}: shared {format_km(driver.shared_distance_adjusted)} km,"
            f" total {format_km(driver.total_distance_adjusted)} km"
        )
    lines.append("")
    if not driver.partners:
        lines.append("No shared distance.")
    for p in driver.partners:
        lines.append(f"  {p.partner_name}  {format_km(p.distance)} km")
    return "\n".join(lines)
