"""Ordering of the current value set into 0-based ranks."""

import math
from typing import Mapping


def _rank_key(value: float) -> tuple[bool, float]:
    if math.isnan(value):
        return (True, 0.0)
    return (False, -value)


def order_entities(raw_values: Mapping[str, float]) -> list[str]:
    """
    Ids from largest to smallest raw value.

    Entities with no live sample (NaN) come after every entity with one;
    equal values keep their encounter order.
    """
    return sorted(raw_values, key=lambda entity_id: _rank_key(raw_values[entity_id]))


def rank_entities(raw_values: Mapping[str, float]) -> dict[str, int]:
    """Map each id to its rank, 0 being the largest value."""
    return {entity_id: rank for rank, entity_id in enumerate(order_entities(raw_values))}
