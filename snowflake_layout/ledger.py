"""Extra radial separation owed by ancestors to colliding descendants."""

from __future__ import annotations

from typing import Dict, Iterator, List, NamedTuple, Optional, Set, Tuple

from .arena import PositionId


class PairKey(NamedTuple):
    descendant: PositionId
    ancestor: PositionId

    @property
    def label(self) -> str:
        return f"{self.descendant}_{self.ancestor}"


class DistanceLedger:
    """Ledger of required distances keyed by ``(descendant, ancestor)``.

    Entries are indexed both by the ancestor that has to move and by the
    descendant that asked for it, so releasing a descendant's contributions
    is a direct key lookup.
    """

    def __init__(self) -> None:
        self._by_ancestor: Dict[PositionId, Dict[PositionId, float]] = {}
        self._by_descendant: Dict[PositionId, Set[PositionId]] = {}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._by_ancestor.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        descendant, ancestor = key
        return descendant in self._by_ancestor.get(ancestor, {})

    def __iter__(self) -> Iterator[Tuple[PairKey, float]]:
        for ancestor, entries in self._by_ancestor.items():
            for descendant, distance in entries.items():
                yield PairKey(descendant, ancestor), distance

    def get(self, key: PairKey) -> Optional[float]:
        return self._by_ancestor.get(key.ancestor, {}).get(key.descendant)

    def record(self, key: PairKey, distance: float) -> None:
        self._by_ancestor.setdefault(key.ancestor, {})[key.descendant] = float(distance)
        self._by_descendant.setdefault(key.descendant, set()).add(key.ancestor)

    def remove(self, key: PairKey) -> Optional[float]:
        entries = self._by_ancestor.get(key.ancestor)
        if not entries or key.descendant not in entries:
            return None
        distance = entries.pop(key.descendant)
        if not entries:
            del self._by_ancestor[key.ancestor]
        ancestors = self._by_descendant.get(key.descendant)
        if ancestors is not None:
            ancestors.discard(key.ancestor)
            if not ancestors:
                del self._by_descendant[key.descendant]
        return distance

    def release(self, descendant: PositionId) -> List[Tuple[PairKey, float]]:
        """Drop every entry ``descendant`` contributed and return them."""

        released: List[Tuple[PairKey, float]] = []
        for ancestor in sorted(self._by_descendant.get(descendant, ())):
            key = PairKey(descendant, ancestor)
            distance = self.remove(key)
            if distance is not None:
                released.append((key, distance))
        return released

    def entries_for(self, ancestor: PositionId) -> Dict[PairKey, float]:
        return {
            PairKey(descendant, ancestor): distance
            for descendant, distance in self._by_ancestor.get(ancestor, {}).items()
        }

    def values_for(self, ancestor: PositionId) -> List[float]:
        return list(self._by_ancestor.get(ancestor, {}).values())

    def contributions_of(self, descendant: PositionId) -> List[PairKey]:
        return [PairKey(descendant, ancestor) for ancestor in sorted(self._by_descendant.get(descendant, ()))]


__all__ = ["DistanceLedger", "PairKey"]
