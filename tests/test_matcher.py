from __future__ import annotations

import pytest

from pointmatch.core.image_slot import ImageSlot
from pointmatch.core.matcher import match_points, matched_ids, remove_pairs_with
from pointmatch.core.point import Point


def _points(*ids):
    return [Point(point_id, 0.5, 0.5) for point_id in ids]


def test_pairs_by_position_up_to_shorter_list():
    pairs = match_points(_points("a1", "a2", "a3"), _points("b1", "b2"))
    assert pairs == [("a1", "b1"), ("a2", "b2")]


@pytest.mark.parametrize("a,b", [((), ("b1",)), (("a1",), ()), ((), ())])
def test_empty_side_gives_no_pairs(a, b):
    assert match_points(_points(*a), _points(*b)) == []


def test_remove_pairs_with_only_checks_the_given_side():
    pairs = [("a1", "b1"), ("a2", "b2"), ("a3", "b3")]
    assert remove_pairs_with(pairs, "a2", ImageSlot.FIRST) == [("a1", "b1"), ("a3", "b3")]
    assert remove_pairs_with(pairs, "b3", ImageSlot.SECOND) == [("a1", "b1"), ("a2", "b2")]
    assert remove_pairs_with(pairs, "a2", ImageSlot.SECOND) == pairs
    assert remove_pairs_with(pairs, "zz", 0) == pairs


def test_remove_pairs_with_shared_id_keeps_other_side():
    pairs = [("a", "shared"), ("shared", "c")]
    assert remove_pairs_with(pairs, "shared", ImageSlot.FIRST) == [("a", "shared")]
    assert remove_pairs_with(pairs, "shared", ImageSlot.SECOND) == [("shared", "c")]


def test_matched_ids_by_side():
    pairs = [("a1", "b1"), ("a2", "b2")]
    assert matched_ids(pairs, ImageSlot.FIRST) == ["a1", "a2"]
    assert matched_ids(pairs, ImageSlot.SECOND) == ["b1", "b2"]
    assert matched_ids(pairs, 1) == ["b1", "b2"]
    with pytest.raises(ValueError):
        matched_ids(pairs, 2)
