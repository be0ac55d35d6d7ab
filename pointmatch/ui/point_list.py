"""
Point list widget for selecting, editing and deleting points
"""

from typing import Dict, List, Optional, Set, Tuple

from PyQt6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QListWidget, QListWidgetItem,
                            QPushButton, QLabel, QDoubleSpinBox, QMenu)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction

from ..core.point import Point


class PointListItem(QWidget):
    """One row: short id, coordinates, matched state and edit/delete buttons"""

    edit_committed = pyqtSignal(str, float, float)  # point_id, x, y
    delete_requested = pyqtSignal(str)  # point_id

    def __init__(self, point: Point, matched: bool):
        super().__init__()
        self.point = point
        self.matched = matched
        self.editing = False
        self.setup_ui()

    def setup_ui(self):
        """Setup the row UI"""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 2, 5, 2)

        self.id_label = QLabel(f"{self.point.short_id}:")
        self.id_label.setStyleSheet("font-family: monospace; color: #aaa;")
        self.id_label.setToolTip(f"ID: {self.point.id}")
        layout.addWidget(self.id_label)

        self.coords_label = QLabel()
        layout.addWidget(self.coords_label)

        self.x_spin = self._make_spin_box()
        self.y_spin = self._make_spin_box()
        layout.addWidget(self.x_spin)
        layout.addWidget(self.y_spin)

        layout.addStretch()

        self.match_label = QLabel()
        layout.addWidget(self.match_label)

        self.edit_btn = QPushButton("Edit")
        self.edit_btn.setFixedWidth(48)
        self.edit_btn.setToolTip("Edit point")
        self.edit_btn.clicked.connect(self.on_edit_clicked)
        layout.addWidget(self.edit_btn)

        self.delete_btn = QPushButton("×")
        self.delete_btn.setFixedSize(20, 20)
        self.delete_btn.setStyleSheet("""
            QPushButton {
                background-color: #d32f2f;
                color: white;
                border: none;
                border-radius: 10px;
                font-weight: bold;
                font-size: 12px;
            }
            QPushButton:hover {
                background-color: #f44336;
            }
        """)
        self.delete_btn.setToolTip("Delete point")
        self.delete_btn.clicked.connect(lambda: self.delete_requested.emit(self.point.id))
        layout.addWidget(self.delete_btn)

        self.refresh()

    def _make_spin_box(self) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        # Allow out of range input; the store clamps it
        spin.setRange(-10.0, 10.0)
        spin.setDecimals(4)
        spin.setSingleStep(0.001)
        spin.setFixedWidth(80)
        spin.setVisible(False)
        spin.editingFinished.connect(self.commit_edit)
        spin.lineEdit().returnPressed.connect(lambda: self.commit_edit(force=True))
        return spin

    def refresh(self):
        """Update labels from the current point"""
        self.coords_label.setText(f"({self.point.x:.3f}, {self.point.y:.3f})")
        self.coords_label.setToolTip(f"X: {self.point.x}, Y: {self.point.y}")
        if self.matched:
            self.match_label.setText("✓")
            self.match_label.setStyleSheet("color: #4caf50; font-weight: bold;")
            self.match_label.setToolTip("Matched")
        else:
            self.match_label.setText("✗")
            self.match_label.setStyleSheet("color: #666;")
            self.match_label.setToolTip("Not matched")

    def set_editing(self, editing: bool):
        self.editing = editing
        if editing:
            self.x_spin.setValue(self.point.x)
            self.y_spin.setValue(self.point.y)
        self.coords_label.setVisible(not editing)
        self.x_spin.setVisible(editing)
        self.y_spin.setVisible(editing)
        self.edit_btn.setText("Cancel" if editing else "Edit")
        if editing:
            self.x_spin.setFocus()

    def on_edit_clicked(self):
        self.set_editing(not self.editing)

    def commit_edit(self, force: bool = False):
        """Send the edited values on Enter or once both boxes have lost focus"""
        if not self.editing:
            return
        if not force and (self.x_spin.hasFocus() or self.y_spin.hasFocus()):
            return
        self.set_editing(False)
        self.edit_committed.emit(self.point.id, self.x_spin.value(), self.y_spin.value())

    def set_selected(self, selected: bool):
        """Set the selection state of this item"""
        if selected:
            self.setStyleSheet("QWidget { background-color: #4a90e2; }")
        else:
            self.setStyleSheet("")


class PointListWidget(QWidget):
    """List of the points of one image"""

    point_selected = pyqtSignal(str)  # point_id
    point_edited = pyqtSignal(str, float, float)  # point_id, x, y
    point_delete_requested = pyqtSignal(str)  # point_id

    def __init__(self, title: str = "Points"):
        super().__init__()
        self.title = title
        self.points: List[Point] = []
        self.matched_ids: Set[str] = set()
        self.selected_id: Optional[str] = None
        self.point_items: Dict[str, Tuple[QListWidgetItem, PointListItem]] = {}
        self.setup_ui()

    def setup_ui(self):
        """Setup the point list UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        header_layout = QHBoxLayout()
        header_label = QLabel(self.title)
        header_label.setStyleSheet("font-weight: bold; font-size: 14px; color: #4a90e2;")
        header_layout.addWidget(header_label)

        self.count_label = QLabel("(0)")
        self.count_label.setStyleSheet("color: #aaa;")
        header_layout.addWidget(self.count_label)
        header_layout.addStretch()
        layout.addLayout(header_layout)

        self.list_widget = QListWidget()
        self.list_widget.setAlternatingRowColors(True)
        self.list_widget.itemClicked.connect(self.on_item_clicked)
        self.list_widget.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.list_widget.customContextMenuRequested.connect(self.show_context_menu)
        layout.addWidget(self.list_widget)

        self.empty_label = QLabel("Click on the image to add points.")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setStyleSheet("color: #888;")
        layout.addWidget(self.empty_label)

    def update_points(self, points: List[Point]):
        self.points = points
        self.rebuild_list()

    def set_matched(self, point_ids: List[str]):
        self.matched_ids = set(point_ids)
        self.rebuild_list()

    def rebuild_list(self):
        """Rebuild the entire list"""
        self.list_widget.clear()
        self.point_items.clear()

        for point in self.points:
            self.add_point_item(point)

        self.count_label.setText(f"({len(self.points)})")
        self.empty_label.setVisible(not self.points)

        if self.selected_id:
            self.set_selected_point(self.selected_id)

    def add_point_item(self, point: Point):
        list_item = QListWidgetItem()
        list_item.setData(Qt.ItemDataRole.UserRole, point.id)

        point_widget = PointListItem(point, point.id in self.matched_ids)
        point_widget.edit_committed.connect(self.point_edited)
        point_widget.delete_requested.connect(self.point_delete_requested)

        self.list_widget.addItem(list_item)
        self.list_widget.setItemWidget(list_item, point_widget)
        self.point_items[point.id] = (list_item, point_widget)
        list_item.setSizeHint(point_widget.sizeHint())

    def set_selected_point(self, point_id: Optional[str]):
        """Highlight the selected point and scroll it into view"""
        if self.selected_id and self.selected_id in self.point_items:
            _, widget = self.point_items[self.selected_id]
            widget.set_selected(False)

        self.selected_id = point_id

        if point_id and point_id in self.point_items:
            list_item, widget = self.point_items[point_id]
            widget.set_selected(True)
            self.list_widget.scrollToItem(list_item)
        else:
            self.list_widget.clearSelection()

    def on_item_clicked(self, item: QListWidgetItem):
        point_id = item.data(Qt.ItemDataRole.UserRole)
        if point_id:
            self.point_selected.emit(point_id)

    def show_context_menu(self, position):
        item = self.list_widget.itemAt(position)
        if item:
            point_id = item.data(Qt.ItemDataRole.UserRole)
            if point_id:
                menu = QMenu(self)

                delete_action = QAction("Delete Point", self)
                delete_action.triggered.connect(lambda: self.point_delete_requested.emit(point_id))
                menu.addAction(delete_action)

                menu.exec(self.list_widget.mapToGlobal(position))
