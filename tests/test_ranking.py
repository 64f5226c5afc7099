"""Tests for ranking and rank smoothing."""

import math

import pytest

from bar_race.chart.ranking import order_entities, rank_entities
from bar_race.chart.smoothing import RankHistory, RankSmoother, ranks_with_sentinel


def test_ranks_descending_by_value():
    """Higher values rank first."""
    assert rank_entities({"a": 1.0, "b": 3.0, "c": 2.0}) == {"b": 0, "c": 1, "a": 2}


def test_ties_keep_encounter_order():
    """Equal values keep their input order."""
    assert order_entities({"a": 5.0, "b": 5.0, "c": 9.0}) == ["c", "a", "b"]


def test_missing_values_sink_below_all_live_values():
    """NaN values rank after every number."""
    ranks = rank_entities({"gone": math.nan, "low": -10.0, "high": 10.0, "also_gone": math.nan})

    assert ranks == {"high": 0, "low": 1, "gone": 2, "also_gone": 3}


def test_sentinel_replaces_rank_of_missing_values():
    """Entities with NaN values get the sentinel rank."""
    ranks = ranks_with_sentinel({"a": math.nan, "b": 1.0}, sentinel=20)

    assert ranks == {"a": 20, "b": 0}


def test_full_history_slides_without_sentinel():
    """A full history drops its oldest entry on push."""
    history = RankHistory(capacity=3, sentinel=9, initial=[0, 0, 0])

    history.push(1)

    assert list(history) == [0, 0, 1]
    assert history.mean() == pytest.approx(1 / 3)


def test_history_reaching_capacity_takes_one_sentinel():
    """A history that reaches capacity takes one sentinel entry."""
    history = RankHistory(capacity=3, sentinel=9, initial=[0, 0])

    history.push(1)

    assert list(history) == [0, 1, 9]
    assert len(history) == 3
    history.push(1)
    assert list(history) == [1, 9, 1]


def test_smoother_primes_and_averages():
    """Primed histories average into smoothed ranks."""
    smoother = RankSmoother(["a", "b"], capacity=4, sentinel=5)
    smoother.prime([{"a": 0, "b": 1}] * 6)

    assert smoother.lengths() == {"a": 4, "b": 4}

    smoothed = smoother.advance({"a": 1, "b": 0})

    assert smoothed == {"a": 0.25, "b": 0.75}
    assert smoother.lengths() == {"a": 4, "b": 4}


def test_smoother_treats_unranked_ids_as_sentinel():
    """Ids missing from a rank update are pushed the sentinel."""
    smoother = RankSmoother(["a"], capacity=2, sentinel=7)
    smoother.prime([{}, {}])

    assert smoother.advance({}) == {"a": 7.0}
