"""
Main application window for the Point Match Editor
"""

import os
from functools import partial
from typing import Dict, Optional

from PyQt6.QtWidgets import (QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QSplitter,
                            QStatusBar, QFileDialog, QMessageBox, QLabel, QPushButton)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
import logging

from .config import DEFAULT_POINTS_FILENAMES, POINTS_FILE_EXTENSION, SUPPORTED_IMAGE_FORMATS
from .core.matcher import matched_ids
from .core.session import EditorSession, ImageSlot
from .ui.image_panel import ImagePanel
from .ui.match_panel import MatchPanel
from .ui.point_list import PointListWidget

POINTS_FILTER = f"Point files (*{POINTS_FILE_EXTENSION})"
IMAGE_FILTER = "Image files ({})".format(' '.join(f"*{ext}" for ext in sorted(SUPPORTED_IMAGE_FORMATS)))


class MainWindow(QMainWindow):
    """Two image editors side by side and the match panel"""

    def __init__(self, session: Optional[EditorSession] = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.session = session or EditorSession()
        self.image_panels: Dict[ImageSlot, ImagePanel] = {}
        self.point_lists: Dict[ImageSlot, PointListWidget] = {}

        self.setup_ui()
        self.setup_connections()
        self.setup_menu_bar()
        self.setup_status_bar()

        self.setWindowTitle("Point Match Editor")
        self.setMinimumSize(1000, 650)
        self.resize(1400, 850)

    def setup_ui(self):
        """Setup the user interface"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(5, 5, 5, 5)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        main_layout.addWidget(splitter)

        for slot in ImageSlot:
            splitter.addWidget(self.build_slot_column(slot))

        self.match_panel = MatchPanel()
        self.match_panel.setMinimumWidth(220)
        splitter.addWidget(self.match_panel)

        splitter.setSizes([550, 550, 300])

    def build_slot_column(self, slot: ImageSlot) -> QWidget:
        """Image panel, point list and file buttons for one image"""
        column = QWidget()
        layout = QVBoxLayout(column)

        title = QLabel(slot.label)
        title.setStyleSheet("font-weight: bold; font-size: 16px;")
        layout.addWidget(title)

        panel = ImagePanel()
        self.image_panels[slot] = panel
        layout.addWidget(panel, stretch=3)

        open_btn = QPushButton("📁 Open Image")
        open_btn.clicked.connect(lambda checked=False, s=slot: self.open_image(s))
        layout.addWidget(open_btn)

        point_list = PointListWidget("Points")
        self.point_lists[slot] = point_list
        layout.addWidget(point_list, stretch=2)

        buttons = QHBoxLayout()
        save_btn = QPushButton(f"💾 Save Points {slot.value + 1}")
        save_btn.clicked.connect(lambda checked=False, s=slot: self.save_points(s))
        buttons.addWidget(save_btn)

        load_btn = QPushButton(f"Load Points {slot.value + 1}")
        load_btn.clicked.connect(lambda checked=False, s=slot: self.load_points(s))
        buttons.addWidget(load_btn)
        layout.addLayout(buttons)

        return column

    def setup_connections(self):
        """Setup signal-slot connections"""
        for slot in ImageSlot:
            store = self.session.store(slot)
            panel = self.image_panels[slot]
            point_list = self.point_lists[slot]

            panel.point_add_requested.connect(partial(self.add_point, slot))
            panel.point_clicked.connect(partial(self.session.select_point, slot))

            point_list.point_selected.connect(partial(self.session.select_point, slot))
            # Deferred: these arrive from row widgets that the refresh rebuilds
            point_list.point_edited.connect(
                lambda pid, x, y, s=slot: QTimer.singleShot(0, lambda: self.edit_point(s, pid, x, y)))
            point_list.point_delete_requested.connect(
                lambda pid, s=slot: QTimer.singleShot(0, lambda: self.delete_point(s, pid)))

            store.points_changed.connect(partial(self.update_points, slot))
            store.selection_changed.connect(partial(self.update_selection, slot))

        self.session.matches_changed.connect(self.update_matches)

        self.match_panel.match_requested.connect(self.match_points)
        self.match_panel.clear_requested.connect(self.session.clear_matches)

    def setup_menu_bar(self):
        """Setup the menu bar"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu('&File')
        for slot in ImageSlot:
            number = slot.value + 1
            open_action = QAction(f'Open Image &{number}...', self)
            open_action.setShortcut(QKeySequence(f'Ctrl+{number}'))
            open_action.triggered.connect(lambda checked=False, s=slot: self.open_image(s))
            file_menu.addAction(open_action)

        file_menu.addSeparator()

        for slot in ImageSlot:
            number = slot.value + 1
            load_action = QAction(f'Load Points {number}...', self)
            load_action.triggered.connect(lambda checked=False, s=slot: self.load_points(s))
            file_menu.addAction(load_action)

            save_action = QAction(f'Save Points {number}...', self)
            save_action.triggered.connect(lambda checked=False, s=slot: self.save_points(s))
            file_menu.addAction(save_action)

        file_menu.addSeparator()

        quit_action = QAction('&Quit', self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        points_menu = menubar.addMenu('&Points')

        match_action = QAction('&Match Points', self)
        match_action.setShortcut(QKeySequence('Ctrl+M'))
        match_action.triggered.connect(self.match_points)
        points_menu.addAction(match_action)

        clear_matches_action = QAction('&Clear Matches', self)
        clear_matches_action.triggered.connect(self.session.clear_matches)
        points_menu.addAction(clear_matches_action)

        points_menu.addSeparator()

        delete_action = QAction('&Delete Selected Points', self)
        delete_action.setShortcut(QKeySequence.StandardKey.Delete)
        delete_action.triggered.connect(self.delete_selected_points)
        points_menu.addAction(delete_action)

    def setup_status_bar(self):
        """Setup the status bar"""
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self.count_label = QLabel()
        self.status_bar.addPermanentWidget(self.count_label)
        self.update_count_label()

    def update_count_label(self):
        first = len(self.session.store(ImageSlot.FIRST))
        second = len(self.session.store(ImageSlot.SECOND))
        pairs = len(self.session.matched_pairs)
        self.count_label.setText(f"Points: {first} / {second}   Pairs: {pairs}")

    # Session -> widgets

    def update_points(self, slot: ImageSlot):
        points = self.session.store(slot).list()
        self.image_panels[slot].set_points(points)
        self.point_lists[slot].update_points(points)
        self.update_matches()

    def update_selection(self, slot: ImageSlot, point_id: Optional[str]):
        self.image_panels[slot].set_selected(point_id)
        self.point_lists[slot].set_selected_point(point_id)

    def update_matches(self):
        pairs = self.session.matched_pairs
        for slot in ImageSlot:
            ids = matched_ids(pairs, slot)
            self.image_panels[slot].set_matched(ids)
            self.point_lists[slot].set_matched(ids)
        self.match_panel.update_pairs(pairs,
                                      self.session.store(ImageSlot.FIRST).list(),
                                      self.session.store(ImageSlot.SECOND).list())
        self.update_count_label()

    # User actions

    def add_point(self, slot: ImageSlot, offset_x: float, offset_y: float,
                  width: float, height: float):
        point = self.session.add_point_at(slot, offset_x, offset_y, width, height)
        self.status_bar.showMessage(
            f"Added point {point.short_id} to {slot.label} at ({point.x:.3f}, {point.y:.3f})", 2000)

    def edit_point(self, slot: ImageSlot, point_id: str, x: float, y: float):
        point = self.session.edit_point(slot, point_id, x, y)
        if point is not None and (point.x != x or point.y != y):
            self.status_bar.showMessage(
                f"Coordinates clamped to ({point.x:.4f}, {point.y:.4f})", 3000)

    def delete_point(self, slot: ImageSlot, point_id: str):
        if self.session.delete_point(slot, point_id):
            self.status_bar.showMessage(f"Point deleted from {slot.label}", 2000)

    def delete_selected_points(self):
        for slot in ImageSlot:
            selected = self.session.store(slot).selected_id
            if selected:
                self.delete_point(slot, selected)

    def match_points(self):
        pairs = self.session.match()
        if not pairs:
            QMessageBox.information(self, "Nothing to Match",
                                    "Add points to both images before matching.")
            return
        self.status_bar.showMessage(f"Matched {len(pairs)} point pairs", 3000)

    def open_image(self, slot: ImageSlot):
        file_path, _ = QFileDialog.getOpenFileName(self, f"Open {slot.label}", "", IMAGE_FILTER)
        if file_path:
            self.load_image_from_path(slot, file_path)

    def load_image_from_path(self, slot: ImageSlot, file_path: str):
        """Load an image into a slot, reporting failures to the user"""
        self.status_bar.showMessage(f"Loading {os.path.basename(file_path)}...")
        try:
            image_data = self.session.load_image(slot, file_path)
        except (OSError, ValueError, RuntimeError) as e:
            self.logger.error(f"Failed to load image {file_path}: {e}")
            QMessageBox.critical(self, "Error", f"Failed to load image: {str(e)}")
            self.status_bar.clearMessage()
            return
        self.image_panels[slot].set_image(image_data)
        self.status_bar.showMessage(f"Loaded {os.path.basename(file_path)} into {slot.label}", 3000)

    def save_points(self, slot: ImageSlot):
        if not len(self.session.store(slot)):
            QMessageBox.information(self, "Nothing to Save", f"{slot.label} has no points to save.")
            return

        default_name = DEFAULT_POINTS_FILENAMES[slot.value]
        file_path, _ = QFileDialog.getSaveFileName(
            self, f"Save Points {slot.value + 1}", default_name, POINTS_FILTER)
        if not file_path:
            return
        if not os.path.splitext(file_path)[1]:
            file_path += POINTS_FILE_EXTENSION

        try:
            self.session.save_points(slot, file_path)
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to save points: {str(e)}")
            return
        self.status_bar.showMessage(f"Saved points to {os.path.basename(file_path)}", 3000)

    def load_points(self, slot: ImageSlot):
        file_path, _ = QFileDialog.getOpenFileName(
            self, f"Load Points {slot.value + 1}", "", POINTS_FILTER)
        if file_path:
            self.load_points_from_path(slot, file_path)

    def load_points_from_path(self, slot: ImageSlot, file_path: str):
        """Replace a slot's points from a file and report skipped blocks"""
        try:
            result = self.session.load_points_file(slot, file_path)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load points: {str(e)}")
            return

        self.status_bar.showMessage(
            f"Loaded {len(result.points)} points into {slot.label}", 3000)
        if result.skipped:
            details = '\n'.join(block.describe() for block in result.skipped[:10])
            if len(result.skipped) > 10:
                details += f"\n... and {len(result.skipped) - 10} more"
            QMessageBox.warning(
                self, "Some Points Skipped",
                f"{len(result.skipped)} invalid blocks were skipped:\n\n{details}")
