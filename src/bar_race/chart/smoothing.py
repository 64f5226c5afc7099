"""Sliding-window rank smoothing.

Each entity keeps its most recent integer ranks; the mean of that window is
the continuous vertical position of its bar. Windows advance once per query,
so queries must arrive in non-decreasing time at a fixed density.
"""

import math
from collections import deque
from typing import Iterable, Mapping

from .ranking import rank_entities


def ranks_with_sentinel(raw_values: Mapping[str, float], sentinel: int) -> dict[str, int]:
    """Rank the raw values, giving entities without a live sample the sentinel rank."""
    ranks = rank_entities(raw_values)
    return {
        entity_id: sentinel if math.isnan(raw_values[entity_id]) else rank
        for entity_id, rank in ranks.items()
    }


class RankHistory:
    """Recent ranks of one entity, held at ``capacity`` entries once full."""

    def __init__(self, capacity: int, sentinel: int, initial: Iterable[int] = ()):
        self.capacity = capacity
        self.sentinel = sentinel
        self._ranks: deque[int] = deque(initial)

    def __len__(self) -> int:
        return len(self._ranks)

    def __iter__(self):
        return iter(self._ranks)

    def push(self, rank: int) -> None:
        """
        Append ``rank`` and drop the oldest entry.

        A window that reaches capacity on this push also takes one sentinel
        before the drop, pulling the bar toward the bottom slot once.
        """
        self._ranks.append(rank)
        if len(self._ranks) == self.capacity:
            self._ranks.append(self.sentinel)
        self._ranks.popleft()

    def seed(self, rank: int) -> None:
        """Append a look-back rank, keeping at most ``capacity`` entries."""
        self._ranks.append(rank)
        while len(self._ranks) > self.capacity:
            self._ranks.popleft()

    def mean(self) -> float:
        if not self._ranks:
            return float(self.sentinel)
        return sum(self._ranks) / len(self._ranks)


class RankSmoother:
    """Per-entity rank histories owned by one chart engine."""

    def __init__(self, entity_ids: Iterable[str], capacity: int, sentinel: int):
        self.capacity = capacity
        self.sentinel = sentinel
        self.histories: dict[str, RankHistory] = {
            entity_id: RankHistory(capacity, sentinel) for entity_id in entity_ids
        }

    def prime(self, samples: Iterable[Mapping[str, int]]) -> None:
        """Fill every history from look-back samples, oldest first, without smoothing."""
        for ranks in samples:
            for entity_id, history in self.histories.items():
                history.seed(ranks.get(entity_id, self.sentinel))

    def advance(self, ranks: Mapping[str, int]) -> dict[str, float]:
        """Push the current ranks into every history and return the smoothed ranks."""
        for entity_id, history in self.histories.items():
            history.push(ranks.get(entity_id, self.sentinel))
        return {entity_id: history.mean() for entity_id, history in self.histories.items()}

    def lengths(self) -> dict[str, int]:
        return {entity_id: len(history) for entity_id, history in self.histories.items()}
