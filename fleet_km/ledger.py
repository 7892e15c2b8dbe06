"""
Row normalization: raw spreadsheet rows -> driver ledger, duet pairs and fleet totals.
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence

from .columns import ColumnSchema, classify_columns
from .crews import adjust
from .numbers import cell_text, name_key, to_distance
from .pairs import PairDeduplicator
from .records import Dataset, DriverRecord, PartnerDistance
from .totals import compute_totals

logger = logging.getLogger(__name__)


def _driver_from_row(
    row: Mapping[str, Any],
    schema: ColumnSchema,
    dedup: PairDeduplicator,
) -> Optional[DriverRecord]:
    name = cell_text(row.get(schema.name_column))
    if not name:
        return None
    total = to_distance(row.get(schema.total_column))
    shared = 0.0
    partners = []
    for header, partner in schema.partner_columns:
        km = to_distance(row.get(header))
        shared += km
        # a column without a partner name only adds to the shared total
        if km > 0 and partner:
            partners.append(PartnerDistance(partner_name=partner, distance=km))
            dedup.add(name, partner, km)
    partners.sort(key=lambda p: -p.distance)
    return DriverRecord(
        name=name,
        solo_distance=max(0.0, total - shared),
        shared_distance=shared,
        total_distance=total,
        partners=tuple(partners),
    )


def normalize(
    rows: Sequence[Mapping[str, Any]],
    source_name: str = "",
    source_sheet: str = "",
    imported_at: str = "",
) -> Dataset:
    """
    Validate the row set and build the ledger. Raises ValidationError before any
    row is read; after that nothing fails (bad cells coerce to 0, nameless rows are skipped).
    Totals use no crew roster: every duet pair counts once.
    """
    schema = classify_columns(rows)
    dedup = PairDeduplicator()
    drivers: List[DriverRecord] = []
    skipped = 0
    for row in rows:
        d = _driver_from_row(row, schema, dedup)
        if d is None:
            skipped += 1
            continue
        drivers.append(d)
    if skipped:
        logger.debug("skipped %d rows without a driver name", skipped)

    # stable: equal totals keep row order
    drivers.sort(key=lambda d: -d.total_distance)
    duet_pairs = dedup.pairs()
    totals = compute_totals(adjust(drivers, [], []), duet_pairs, [])
    return Dataset(
        drivers=drivers,
        duet_pairs=duet_pairs,
        totals=totals,
        source_name=source_name,
        source_sheet=source_sheet,
        imported_at=imported_at,
    )


def find_driver(drivers: Sequence[Any], name: str) -> Optional[Any]:
    """First driver whose name matches case-insensitively."""
    key = name_key(name)
    return next((d for d in drivers if name_key(d.name) == key), None)


def filter_drivers(drivers: Sequence[Any], text: str = "") -> List[Any]:
    """Drivers whose name contains text (case-insensitive), in ledger order."""
    needle = (text or "").casefold()
    return [d for d in drivers if needle in d.name.casefold()]
