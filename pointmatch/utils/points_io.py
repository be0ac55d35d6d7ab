"""
Plain-text points format: saving and loading

Each point is a block of three lines (id, x, y) and every block is followed
by a blank line. Lines starting with '#' at the top of a block are comments
and are ignored when reading; a block holding only comments is dropped.
"""

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ..config import POINTS_FILE_ENCODING, POINTS_FILE_HEADER, POINTS_FILE_READ_ENCODING
from ..core.point import Point, clamp_unit

logger = logging.getLogger(__name__)


@dataclass
class SkippedBlock:
    """A block of the input that could not be turned into a point"""

    index: int  # position among the non-comment blocks, starting at 0
    line: int  # 1-based line number where the block's data starts
    reason: str
    text: str

    def describe(self) -> str:
        return f"block {self.index + 1} (line {self.line}): {self.reason}"


@dataclass
class ParseResult:
    """Points recovered from a text plus diagnostics for the rest"""

    points: List[Point] = field(default_factory=list)
    skipped: List[SkippedBlock] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped


def format_points(points: Iterable[Point], header: Optional[str] = POINTS_FILE_HEADER) -> str:
    """
    Render points in the block format

    Args:
        points: Points in the order they should be written
        header: Informational comment line written first; None to omit

    Returns:
        Text ending with a newline; with points, it ends with the blank
        line that closes the last block
    """
    blocks = [f"{p.id}\n{float(p.x)!r}\n{float(p.y)!r}\n" for p in points]
    parts = []
    if header:
        if not header.startswith('#'):
            header = f"# {header}"
        parts.append(f"{header}\n")
    parts.extend(blocks)
    text = '\n'.join(parts)
    if blocks:
        text += '\n'
    return text


def _split_blocks(text: str) -> List[Tuple[int, List[str]]]:
    """Group consecutive non-blank lines; returns (first line number, lines)"""
    blocks = []
    current: List[str] = []
    start = 0
    for number, raw_line in enumerate(text.split('\n'), start=1):
        line = raw_line.strip()
        if not line:
            if current:
                blocks.append((start, current))
                current = []
            continue
        if not current:
            start = number
        current.append(line)
    if current:
        blocks.append((start, current))
    return blocks


def _strip_comments(start_line: int, lines: List[str]) -> Tuple[int, List[str]]:
    """Drop the leading '#' lines of a block"""
    skip = 0
    while skip < len(lines) and lines[skip].startswith('#'):
        skip += 1
    return start_line + skip, lines[skip:]


def _parse_coordinate(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_points(text: str) -> ParseResult:
    """
    Recover points from text in the block format

    Malformed blocks are skipped and reported in the result; this function
    does not raise for bad input. Coordinates are clamped into [0, 1].
    """
    result = ParseResult()
    seen_ids = set()
    normalized = text.replace('\r\n', '\n').replace('\r', '\n')

    index = 0
    for start_line, lines in _split_blocks(normalized):
        start_line, lines = _strip_comments(start_line, lines)
        if not lines:
            continue

        block_text = '\n'.join(lines)
        reason = None
        if len(lines) != 3:
            reason = f"expected 3 lines, found {len(lines)}"
        else:
            point_id, x_text, y_text = lines
            x = _parse_coordinate(x_text)
            y = _parse_coordinate(y_text)
            if x is None:
                reason = f"x is not a finite number: {x_text!r}"
            elif y is None:
                reason = f"y is not a finite number: {y_text!r}"
            elif point_id in seen_ids:
                reason = f"duplicate id {point_id!r}"
            else:
                seen_ids.add(point_id)
                result.points.append(Point(id=point_id, x=clamp_unit(x), y=clamp_unit(y)))

        if reason is not None:
            skipped = SkippedBlock(index=index, line=start_line, reason=reason, text=block_text)
            logger.warning(f"Skipping invalid point data, {skipped.describe()}")
            result.skipped.append(skipped)
        index += 1

    return result


def save_points_file(path: str, points: Iterable[Point]) -> str:
    """Write points to a UTF-8 text file; returns the text written"""
    text = format_points(points)
    try:
        with open(path, 'w', encoding=POINTS_FILE_ENCODING, newline='\n') as handle:
            handle.write(text)
    except OSError as e:
        logger.error(f"Failed to save points to {path}: {e}")
        raise
    logger.info(f"Saved points to {os.path.basename(path)}")
    return text


def load_points_file(path: str) -> ParseResult:
    """Read and parse a points file"""
    try:
        with open(path, 'r', encoding=POINTS_FILE_READ_ENCODING) as handle:
            text = handle.read()
    except OSError as e:
        logger.error(f"Failed to read points from {path}: {e}")
        raise

    result = parse_points(text)
    logger.info(f"Loaded {len(result.points)} points from {os.path.basename(path)}"
                f" ({len(result.skipped)} blocks skipped)")
    return result
