from __future__ import annotations

import pytest

from pointmatch.config import POINTS_FILE_HEADER
from pointmatch.core.point import Point
from pointmatch.utils.points_io import (
    format_points,
    load_points_file,
    parse_points,
    save_points_file,
)


def test_format_writes_header_and_blocks():
    text = format_points([Point("p1", 0.25, 0.5), Point("p2", 1.0, 0.0)])
    assert text == (
        f"{POINTS_FILE_HEADER}\n"
        "\n"
        "p1\n0.25\n0.5\n"
        "\n"
        "p2\n1.0\n0.0\n"
        "\n"
    )


def test_format_empty_is_header_only():
    assert format_points([]) == f"{POINTS_FILE_HEADER}\n"
    assert format_points([], header=None) == ""


def test_format_without_header():
    assert format_points([Point("p1", 0.1, 0.2)], header=None) == "p1\n0.1\n0.2\n\n"


def test_round_trip_keeps_order_and_values():
    points = [Point("point_1_aaaaa", 0.1, 0.2), Point("point_2_bbbbb", 1 / 3, 0.987654321)]
    result = parse_points(format_points(points))
    assert result.points == points
    assert result.skipped == []


def test_parses_headerless_files():
    # Blocks written without a header, as older files were
    text = "p1\n0.1\n0.2\n\np2\n0.3\n0.4\n"
    result = parse_points(text)
    assert [p.id for p in result.points] == ["p1", "p2"]


def test_one_good_block_and_one_short_block():
    text = "p1\n0.1\n0.2\n\np2\n0.3\n"
    result = parse_points(text)
    assert result.points == [Point("p1", 0.1, 0.2)]
    assert len(result.skipped) == 1
    skipped = result.skipped[0]
    assert skipped.index == 1
    assert skipped.line == 5
    assert "expected 3 lines" in skipped.reason


@pytest.mark.parametrize("x_text,y_text", [("abc", "0.5"), ("0.5", "nan"), ("inf", "0.5"), ("0.5", "")])
def test_non_finite_or_non_numeric_blocks_are_skipped(x_text, y_text):
    text = f"bad\n{x_text}\n{y_text}\n\ngood\n0.5\n0.5\n"
    result = parse_points(text)
    assert [p.id for p in result.points] == ["good"]
    assert len(result.skipped) == 1


def test_parsed_coordinates_are_clamped():
    result = parse_points("p1\n-3\n7.5\n")
    assert result.points == [Point("p1", 0.0, 1.0)]


def test_comments_blank_runs_and_whitespace_are_ignored():
    text = "# a comment\n# another\n\n\n\n  p1  \n 0.1 \n0.2\t\n\n\n# trailing note\n"
    result = parse_points(text)
    assert result.points == [Point("p1", 0.1, 0.2)]
    assert result.skipped == []


def test_comment_line_directly_above_a_block_keeps_the_point():
    result = parse_points("# my points\np1\n0.1\n0.2\n\np2\n0.3\n0.4\n")
    assert [p.id for p in result.points] == ["p1", "p2"]
    assert result.skipped == []


def test_short_block_under_a_comment_is_reported():
    result = parse_points("# note\np1\n0.1\n")
    assert result.points == []
    assert len(result.skipped) == 1
    skipped = result.skipped[0]
    assert skipped.line == 2
    assert skipped.text == "p1\n0.1"


def test_windows_line_endings():
    result = parse_points("p1\r\n0.1\r\n0.2\r\n\r\np2\r\n0.3\r\n0.4\r\n")
    assert [p.id for p in result.points] == ["p1", "p2"]


def test_duplicate_ids_are_skipped():
    result = parse_points("p1\n0.1\n0.2\n\np1\n0.3\n0.4\n")
    assert result.points == [Point("p1", 0.1, 0.2)]
    assert "duplicate id" in result.skipped[0].reason


def test_empty_text():
    result = parse_points("")
    assert result.points == []
    assert result.ok


def test_file_round_trip(tmp_path):
    path = tmp_path / "points1.txt"
    points = [Point("p1", 0.125, 0.75), Point("p2", 0.5, 0.5)]
    written = save_points_file(str(path), points)
    assert path.read_text(encoding="utf-8") == written
    assert load_points_file(str(path)).points == points


def test_load_tolerates_byte_order_mark(tmp_path):
    path = tmp_path / "bom.txt"
    path.write_bytes("\ufeff# header\n\np1\n0.1\n0.2\n".encode("utf-8"))
    result = load_points_file(str(path))
    assert result.points == [Point("p1", 0.1, 0.2)]
    assert result.ok


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_points_file(str(tmp_path / "missing.txt"))
