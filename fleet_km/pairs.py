"""
Pair deduplication: A's "distance with B" and B's "distance with A" are one leg.
"""
from typing import Dict, List, Tuple

from .numbers import collation_key, name_key
from .records import DuetPair

# Not expected in driver names
PAIR_KEY_SEPARATOR = " :: "


def pair_key(first: str, second: str) -> str:
    """Order-independent key: both identities sorted by collation, joined by the separator."""
    a, b = sorted((first, second), key=collation_key)
    return f"{name_key(a)}{PAIR_KEY_SEPARATOR}{name_key(b)}"


class PairDeduplicator:
    """
    Fed incrementally while rows are read. Keeps the maximum reported distance per
    canonical pair: both directions report the same leg, so summing would double it.
    """

    def __init__(self) -> None:
        self._distances: Dict[str, float] = {}
        self._names: Dict[str, Tuple[str, str]] = {}  # display names, first observation wins

    def add(self, driver: str, partner: str, distance: float) -> None:
        key = pair_key(driver, partner)
        if key not in self._names:
            self._names[key] = tuple(sorted((driver, partner), key=collation_key))
        self._distances[key] = max(self._distances.get(key, 0.0), distance)

    def __len__(self) -> int:
        return len(self._distances)

    def pairs(self) -> List[DuetPair]:
        """Finalized pairs, distance descending (ties keep first-seen order)."""
        out = [
            DuetPair(a=self._names[k][0], b=self._names[k][1], distance=km)
            for k, km in self._distances.items()
        ]
        out.sort(key=lambda p: -p.distance)
        return out
