"""Unit tests for statistics DTOs."""

from __future__ import annotations

import dataclasses

import pytest

from markstats.helpers.dto.chart_dto import Orientation
from markstats.helpers.dto.stats_dto import ChartSeries, ItemKind, Record


@pytest.mark.unit
def test_record_is_immutable() -> None:
    record = Record(id="1", kind=ItemKind.SCENE, mark_count=2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.mark_count = 3  # type: ignore[misc]


@pytest.mark.unit
def test_record_defaults() -> None:
    record = Record(id="1", kind=ItemKind.IMAGE, mark_count=None)

    assert record.occurred_on is None
    assert record.tags == ()


@pytest.mark.unit
def test_series_reversed_returns_new_series() -> None:
    series = ChartSeries(labels=["A", "B", "C"], values=[3, 2, 1])
    flipped = series.reversed()

    assert flipped.labels == ["C", "B", "A"]
    assert flipped.values == [1, 2, 3]
    assert series.labels == ["A", "B", "C"]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("orientation", "index_axis", "value_axis"),
    [(Orientation.HORIZONTAL, "y", "x"), (Orientation.VERTICAL, "x", "y")],
)
def test_orientation_axes(orientation: Orientation, index_axis: str, value_axis: str) -> None:
    assert orientation.index_axis == index_axis
    assert orientation.value_axis == value_axis
