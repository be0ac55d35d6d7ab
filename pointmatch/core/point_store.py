"""
Ordered store of normalized points for one image
"""

import logging
from typing import Iterable, Iterator, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from .point import Point, clamp_unit
from .id_generator import PointIdGenerator, generate_point_id


class PointStore(QObject):
    """Holds the points placed on one image, in insertion order"""

    points_changed = pyqtSignal()
    selection_changed = pyqtSignal(object)  # point_id or None

    def __init__(self, name: str = "", id_generator: Optional[PointIdGenerator] = None):
        super().__init__()
        self.name = name
        self.logger = logging.getLogger(__name__)
        self._id_generator = id_generator
        self._points: List[Point] = []
        self._selected_id: Optional[str] = None

    def _next_id(self) -> str:
        if self._id_generator is not None:
            return self._id_generator.next_id()
        return generate_point_id()

    def _index_of(self, point_id: str) -> int:
        for index, point in enumerate(self._points):
            if point.id == point_id:
                return index
        return -1

    def create(self, x: float, y: float) -> Point:
        """Append a new point; coordinates are clamped into [0, 1]"""
        point = Point(id=self._next_id(), x=x, y=y)
        self._points.append(point)
        self.logger.debug(f"{self.name}: created {point.id} at ({point.x:.4f}, {point.y:.4f})")
        self.points_changed.emit()
        return point.copy()

    def update(self, point_id: str, new_x: float, new_y: float) -> Optional[Point]:
        """Move an existing point; unknown ids are ignored"""
        index = self._index_of(point_id)
        if index < 0:
            return None

        point = self._points[index]
        point.x = clamp_unit(new_x)
        point.y = clamp_unit(new_y)
        if point.x != new_x or point.y != new_y:
            self.logger.debug(f"{self.name}: clamped ({new_x}, {new_y}) to ({point.x}, {point.y})")

        self.points_changed.emit()
        return point.copy()

    def delete(self, point_id: str) -> bool:
        """Remove a point; returns False when the id is unknown"""
        index = self._index_of(point_id)
        if index < 0:
            return False

        del self._points[index]
        self.logger.debug(f"{self.name}: deleted {point_id}")

        if self._selected_id == point_id:
            self._selected_id = None
            self.selection_changed.emit(None)

        self.points_changed.emit()
        return True

    def replace_all(self, points: Iterable[Point]):
        """Discard the current points and selection and take the given ones"""
        self._points = [Point(id=p.id, x=p.x, y=p.y) for p in points]
        self._selected_id = None
        self.selection_changed.emit(None)
        self.points_changed.emit()

    def clear(self):
        """Remove all points"""
        self.replace_all([])

    def list(self) -> List[Point]:
        """Snapshot of the points in insertion order"""
        return [point.copy() for point in self._points]

    def get(self, point_id: str) -> Optional[Point]:
        index = self._index_of(point_id)
        return self._points[index].copy() if index >= 0 else None

    def ids(self) -> List[str]:
        return [point.id for point in self._points]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.list())

    def __contains__(self, point_id: object) -> bool:
        return isinstance(point_id, str) and self._index_of(point_id) >= 0

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def select(self, point_id: Optional[str]):
        """
        Select a point

        Selecting the already selected point, or None, clears the selection.
        Unknown ids are ignored.
        """
        if point_id is not None and self._index_of(point_id) < 0:
            return
        if point_id == self._selected_id:
            point_id = None
        self._selected_id = point_id
        self.selection_changed.emit(point_id)
