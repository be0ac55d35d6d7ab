"""
Order-based point matching between two images
"""

from typing import List, Sequence, Tuple, Union

from .image_slot import ImageSlot
from .point import Point

MatchPair = Tuple[str, str]


def match_points(points_a: Sequence[Point], points_b: Sequence[Point]) -> List[MatchPair]:
    """
    Pair points of two images by their position in each list

    The i-th point of the first image is paired with the i-th point of the
    second; points beyond the shorter list stay unmatched.
    """
    return [(a.id, b.id) for a, b in zip(points_a, points_b)]


def _side_index(side: Union[ImageSlot, int]) -> int:
    index = side.value if isinstance(side, ImageSlot) else side
    if index not in (0, 1):
        raise ValueError(f"side must be an ImageSlot, 0 or 1, got {side!r}")
    return index


def remove_pairs_with(pairs: Sequence[MatchPair], point_id: str,
                      side: Union[ImageSlot, int]) -> List[MatchPair]:
    """
    Drop the pairs whose given side references point_id

    Each image has its own id namespace, so the same id on the other side
    belongs to a different point and its pair is kept.
    """
    index = _side_index(side)
    return [pair for pair in pairs if pair[index] != point_id]


def matched_ids(pairs: Sequence[MatchPair], side: Union[ImageSlot, int]) -> List[str]:
    """Ids on one side of the pairs"""
    index = _side_index(side)
    return [pair[index] for pair in pairs]
