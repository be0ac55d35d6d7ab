"""
Editing session: the two point stores, their images and the match pairs
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .coordinate_mapper import to_normalized_contain
from .id_generator import PointIdGenerator
from .image_loader import ImageLoader
from .image_slot import ImageSlot
from .matcher import MatchPair, match_points, remove_pairs_with
from .point import Point
from .point_store import PointStore
from ..utils import points_io
from ..utils.points_io import ParseResult


class EditorSession(QObject):
    """Owns everything one editor window works on"""

    matches_changed = pyqtSignal()
    image_changed = pyqtSignal(object)  # ImageSlot

    def __init__(self, id_generator: Optional[PointIdGenerator] = None,
                 image_loader: Optional[ImageLoader] = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.image_loader = image_loader or ImageLoader()
        self._stores: Dict[ImageSlot, PointStore] = {
            slot: PointStore(name=slot.label, id_generator=id_generator) for slot in ImageSlot
        }
        self._image_paths: Dict[ImageSlot, Optional[str]] = {slot: None for slot in ImageSlot}
        self._natural_sizes: Dict[ImageSlot, Tuple[int, int]] = {slot: (0, 0) for slot in ImageSlot}
        self._pairs: List[MatchPair] = []

    def store(self, slot: ImageSlot) -> PointStore:
        return self._stores[slot]

    def image_path(self, slot: ImageSlot) -> Optional[str]:
        return self._image_paths[slot]

    def natural_size(self, slot: ImageSlot) -> Tuple[int, int]:
        return self._natural_sizes[slot]

    @property
    def matched_pairs(self) -> List[MatchPair]:
        return list(self._pairs)

    def _set_pairs(self, pairs: List[MatchPair]):
        self._pairs = pairs
        self.matches_changed.emit()

    # Points

    def add_point_at(self, slot: ImageSlot, offset_x: float, offset_y: float,
                     surface_width: float, surface_height: float) -> Point:
        """Create a point from a click on the slot's display surface"""
        natural_width, natural_height = self._natural_sizes[slot]
        x, y = to_normalized_contain(offset_x, offset_y, surface_width, surface_height,
                                     natural_width, natural_height)
        return self._stores[slot].create(x, y)

    def edit_point(self, slot: ImageSlot, point_id: str, x: float, y: float) -> Optional[Point]:
        return self._stores[slot].update(point_id, x, y)

    def delete_point(self, slot: ImageSlot, point_id: str) -> bool:
        """Delete a point and any match pair that references it"""
        removed = self._stores[slot].delete(point_id)
        if removed:
            remaining = remove_pairs_with(self._pairs, point_id, slot)
            if len(remaining) != len(self._pairs):
                self._set_pairs(remaining)
        return removed

    def select_point(self, slot: ImageSlot, point_id: Optional[str]):
        self._stores[slot].select(point_id)

    # Matching

    def match(self) -> List[MatchPair]:
        """
        Recompute the pairs from the current order of both stores

        An empty list means there was nothing to match.
        """
        pairs = match_points(self._stores[ImageSlot.FIRST].list(),
                             self._stores[ImageSlot.SECOND].list())
        self.logger.info(f"Matched {len(pairs)} point pairs")
        self._set_pairs(pairs)
        return list(pairs)

    def clear_matches(self):
        self._set_pairs([])

    # Saving and loading

    def format_points(self, slot: ImageSlot) -> Optional[str]:
        """Text for the slot's points, or None when there is nothing to save"""
        points = self._stores[slot].list()
        if not points:
            return None
        return points_io.format_points(points)

    def save_points(self, slot: ImageSlot, path: str) -> bool:
        """Write the slot's points to a file; False when there is nothing to save"""
        points = self._stores[slot].list()
        if not points:
            self.logger.info(f"{slot.label}: no points to save")
            return False
        points_io.save_points_file(path, points)
        return True

    def load_points(self, slot: ImageSlot, text: str) -> ParseResult:
        """Replace the slot's points with those parsed from text"""
        result = points_io.parse_points(text)
        self._replace_points(slot, result.points)
        return result

    def load_points_file(self, slot: ImageSlot, path: str) -> ParseResult:
        result = points_io.load_points_file(path)
        self._replace_points(slot, result.points)
        return result

    def _replace_points(self, slot: ImageSlot, points: List[Point]):
        self._stores[slot].replace_all(points)
        self._set_pairs([])

    # Images

    def set_image(self, slot: ImageSlot, path: Optional[str], natural_size: Tuple[int, int]):
        """Switch the slot to a new image; its points and all pairs are dropped"""
        self._image_paths[slot] = path
        self._natural_sizes[slot] = (int(natural_size[0]), int(natural_size[1]))
        self._replace_points(slot, [])
        self.image_changed.emit(slot)

    def load_image(self, slot: ImageSlot, path: str):
        """Load an image file into the slot and return its RGBA data"""
        image_data = self.image_loader.load_image(path)
        height, width = image_data.shape[:2]
        self.set_image(slot, path, (width, height))
        self.logger.info(f"{slot.label}: {os.path.basename(path)}")
        return image_data
