"""
Image panel: shows one image letterboxed inside the widget with its points
"""

from typing import List, Optional, Set

import numpy as np
from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import (QPainter, QPixmap, QImage, QPen, QBrush, QColor,
                        QMouseEvent, QPaintEvent)

from ..config import (MARKER_RADIUS, SELECTED_MARKER_SCALE, PANEL_MIN_SIZE, PANEL_BACKGROUND,
                      MARKER_COLOR, SELECTED_MARKER_COLOR, MATCHED_RING_COLOR)
from ..core.coordinate_mapper import ContainFit, points_to_display
from ..core.point import Point


class ImagePanel(QWidget):
    """Displays an image with object-fit: contain semantics and its markers"""

    point_add_requested = pyqtSignal(float, float, float, float)  # offset_x, offset_y, width, height
    point_clicked = pyqtSignal(str)  # point_id

    def __init__(self, placeholder: str = "Open an image to start"):
        super().__init__()
        self.placeholder = placeholder
        self.pixmap: Optional[QPixmap] = None
        self.natural_size = (0, 0)
        self.points: List[Point] = []
        self.selected_id: Optional[str] = None
        self.matched_ids: Set[str] = set()

        self.background_color = QColor(*PANEL_BACKGROUND)
        self.marker_color = QColor(*MARKER_COLOR)
        self.selected_color = QColor(*SELECTED_MARKER_COLOR)
        self.matched_color = QColor(*MATCHED_RING_COLOR)

        self.setMinimumSize(*PANEL_MIN_SIZE)
        self.setCursor(Qt.CursorShape.CrossCursor)

    def set_image(self, image: Optional[np.ndarray]):
        """Show an RGBA image array, or clear the panel with None"""
        self.pixmap = self.numpy_to_pixmap(image) if image is not None else None
        if self.pixmap is not None:
            self.natural_size = (self.pixmap.width(), self.pixmap.height())
        else:
            self.natural_size = (0, 0)
        self.update()

    def set_points(self, points: List[Point]):
        self.points = points
        self.update()

    def set_selected(self, point_id: Optional[str]):
        self.selected_id = point_id
        self.update()

    def set_matched(self, point_ids: List[str]):
        self.matched_ids = set(point_ids)
        self.update()

    def numpy_to_pixmap(self, image: np.ndarray) -> Optional[QPixmap]:
        """Convert numpy array to QPixmap"""
        if image is None or image.size == 0:
            return None

        height, width = image.shape[:2]

        if not image.flags['C_CONTIGUOUS']:
            image = np.ascontiguousarray(image)

        if len(image.shape) == 3 and image.shape[2] == 4:
            bytes_per_line = 4 * width
            image_format = QImage.Format.Format_RGBA8888
        elif len(image.shape) == 3 and image.shape[2] == 3:
            bytes_per_line = 3 * width
            image_format = QImage.Format.Format_RGB888
        else:
            return None

        q_image = QImage(image.tobytes(), width, height, bytes_per_line, image_format)
        # Detach from the temporary byte buffer
        return QPixmap.fromImage(q_image.copy())

    def current_fit(self) -> ContainFit:
        return ContainFit.compute(self.width(), self.height(), *self.natural_size)

    def marker_at(self, x: float, y: float) -> Optional[str]:
        """Id of the marker under a widget position, topmost first"""
        if not self.points:
            return None
        positions = points_to_display(self.points, self.width(), self.height(), *self.natural_size)
        distances = np.hypot(positions[:, 0] - x, positions[:, 1] - y)
        for index in reversed(range(len(self.points))):
            if distances[index] <= MARKER_RADIUS * SELECTED_MARKER_SCALE:
                return self.points[index].id
        return None

    def paintEvent(self, event: QPaintEvent):
        """Paint the letterboxed image and the point markers"""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.fillRect(self.rect(), self.background_color)

        if self.pixmap is None:
            painter.setPen(QColor(160, 160, 160))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, self.placeholder)
            return

        fit = self.current_fit()
        target = QRectF(fit.offset_x, fit.offset_y, fit.display_width, fit.display_height)
        painter.drawPixmap(target, self.pixmap, QRectF(self.pixmap.rect()))

        self.draw_markers(painter)

    def draw_markers(self, painter: QPainter):
        if not self.points:
            return

        positions = points_to_display(self.points, self.width(), self.height(), *self.natural_size)
        for point, (x, y) in zip(self.points, positions):
            selected = point.id == self.selected_id
            radius = MARKER_RADIUS * (SELECTED_MARKER_SCALE if selected else 1.0)
            color = self.selected_color if selected else self.marker_color

            if point.id in self.matched_ids:
                painter.setPen(QPen(self.matched_color, 2.0))
                painter.setBrush(Qt.BrushStyle.NoBrush)
                painter.drawEllipse(QPointF(x, y), radius + 3.0, radius + 3.0)

            painter.setPen(QPen(QColor(255, 255, 255), 2.0))
            painter.setBrush(QBrush(color))
            painter.drawEllipse(QPointF(x, y), radius, radius)

    def mousePressEvent(self, event: QMouseEvent):
        """Select a marker, or request a new point at the click"""
        if event.button() != Qt.MouseButton.LeftButton or self.pixmap is None:
            return

        pos = event.position()
        point_id = self.marker_at(pos.x(), pos.y())
        if point_id is not None:
            self.point_clicked.emit(point_id)
        else:
            self.point_add_requested.emit(pos.x(), pos.y(), float(self.width()), float(self.height()))
