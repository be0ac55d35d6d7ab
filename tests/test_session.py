from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from pointmatch.core.point import Point
from pointmatch.core.session import EditorSession, ImageSlot

FIRST, SECOND = ImageSlot.FIRST, ImageSlot.SECOND


@pytest.fixture
def session(id_generator) -> EditorSession:
    return EditorSession(id_generator=id_generator)


def test_match_scenario(session):
    a = session.store(FIRST).create(0.1, 0.2)
    b = session.store(FIRST).create(0.8, 0.9)
    c = session.store(SECOND).create(0.3, 0.4)

    pairs = session.match()

    assert pairs == [(a.id, c.id)]
    assert session.matched_pairs == [(a.id, c.id)]
    assert all(b.id not in pair for pair in pairs)


def test_match_with_nothing_is_empty(session):
    session.store(FIRST).create(0.1, 0.1)
    assert session.match() == []


def test_pairs_are_a_snapshot(session):
    session.store(FIRST).create(0.1, 0.1)
    session.store(SECOND).create(0.2, 0.2)
    session.match()
    session.store(FIRST).create(0.3, 0.3)
    session.store(SECOND).create(0.4, 0.4)
    assert len(session.matched_pairs) == 1
    assert len(session.match()) == 2


def test_delete_cascades_into_pairs(session):
    a1 = session.store(FIRST).create(0.1, 0.1)
    a2 = session.store(FIRST).create(0.2, 0.2)
    session.store(SECOND).create(0.3, 0.3)
    b2 = session.store(SECOND).create(0.4, 0.4)
    session.match()

    assert session.delete_point(FIRST, a1.id)
    assert session.matched_pairs == [(a2.id, b2.id)]

    assert session.delete_point(SECOND, b2.id)
    assert session.matched_pairs == []


def test_delete_cascade_is_limited_to_the_slot(session):
    session.load_points(FIRST, "a\n0.1\n0.1\n\nshared\n0.2\n0.2\n")
    session.load_points(SECOND, "shared\n0.3\n0.3\n\nc\n0.4\n0.4\n")
    assert session.match() == [("a", "shared"), ("shared", "c")]

    assert session.delete_point(FIRST, "shared")
    assert session.matched_pairs == [("a", "shared")]


def test_delete_unknown_point_keeps_pairs(session):
    session.store(FIRST).create(0.1, 0.1)
    session.store(SECOND).create(0.2, 0.2)
    pairs = session.match()
    assert not session.delete_point(FIRST, "missing")
    assert session.matched_pairs == pairs


def test_stores_are_independent(session):
    session.add_point_at(FIRST, 10, 10, 100, 100)
    assert len(session.store(FIRST)) == 1
    assert len(session.store(SECOND)) == 0


def test_add_point_uses_contain_fit(session):
    session.set_image(FIRST, "wide.png", (400, 300))
    point = session.add_point_at(FIRST, 400, 150, 800, 300)
    assert (point.x, point.y) == (0.5, 0.5)
    edge = session.add_point_at(FIRST, 100, 150, 800, 300)
    assert (edge.x, edge.y) == (0.0, 0.5)


def test_add_point_without_image_maps_to_surface(session):
    point = session.add_point_at(FIRST, 100, 50, 200, 100)
    assert (point.x, point.y) == (0.5, 0.5)


def test_edit_point_clamps(session):
    point = session.store(FIRST).create(0.5, 0.5)
    edited = session.edit_point(FIRST, point.id, 1.2, 0.25)
    assert (edited.x, edited.y) == (1.0, 0.25)
    assert session.edit_point(FIRST, "missing", 0.1, 0.1) is None


def test_format_points_signals_nothing_to_save(session):
    assert session.format_points(FIRST) is None
    session.store(FIRST).create(0.5, 0.5)
    assert session.format_points(FIRST).endswith("0.5\n\n")


def test_save_points_nothing_to_save(session, tmp_path):
    path = tmp_path / "points1.txt"
    assert session.save_points(FIRST, str(path)) is False
    assert not path.exists()


def test_save_then_load_replaces_points_and_resets_pairs(session, tmp_path):
    session.store(FIRST).create(0.1, 0.2)
    session.store(FIRST).create(0.3, 0.4)
    session.store(SECOND).create(0.5, 0.6)
    saved = session.store(FIRST).list()
    path = tmp_path / "points1.txt"
    assert session.save_points(FIRST, str(path))

    session.match()
    session.store(FIRST).create(0.9, 0.9)
    result = session.load_points_file(FIRST, str(path))

    assert result.ok
    assert session.store(FIRST).list() == saved
    assert session.matched_pairs == []


def test_load_points_reports_skipped_blocks(session):
    session.store(SECOND).create(0.5, 0.5)
    result = session.load_points(SECOND, "p1\n0.1\n0.2\n\np2\n0.3\n")
    assert session.store(SECOND).list() == [Point("p1", 0.1, 0.2)]
    assert len(result.skipped) == 1


def test_matches_changed_signal(session):
    events = []
    session.matches_changed.connect(lambda: events.append(True))
    session.match()
    session.clear_matches()
    assert len(events) == 2


def test_load_image_clears_slot_and_pairs(session, tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (64, 32), (10, 20, 30)).save(path)

    session.store(FIRST).create(0.1, 0.1)
    other = session.store(SECOND).create(0.2, 0.2)
    session.match()

    image = session.load_image(FIRST, str(path))

    assert image.shape == (32, 64, 4)
    assert image.dtype == np.uint8
    assert session.natural_size(FIRST) == (64, 32)
    assert session.image_path(FIRST) == str(path)
    assert len(session.store(FIRST)) == 0
    assert session.store(SECOND).ids() == [other.id]
    assert session.matched_pairs == []


def test_load_image_failure_keeps_state(session, tmp_path):
    point = session.store(FIRST).create(0.1, 0.1)
    with pytest.raises(FileNotFoundError):
        session.load_image(FIRST, str(tmp_path / "missing.png"))
    assert session.store(FIRST).ids() == [point.id]
