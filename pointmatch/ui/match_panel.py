"""
Match panel: the Match Points button and the list of pairs
"""

from typing import Dict, List

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel, QListWidget, QPushButton
from PyQt6.QtCore import Qt, pyqtSignal

from ..core.matcher import MatchPair
from ..core.point import Point

EMPTY_TEXT = 'No points matched yet. Add points to both images and click "Match Points".'


class MatchPanel(QWidget):
    """Shows the current pairs as 'Pair n: (a ↔ b)'"""

    match_requested = pyqtSignal()
    clear_requested = pyqtSignal()

    def __init__(self):
        super().__init__()
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        header_label = QLabel("Point Matching")
        header_label.setStyleSheet("font-weight: bold; font-size: 14px; color: #4a90e2;")
        layout.addWidget(header_label)

        self.match_btn = QPushButton("🔗 Match Points")
        self.match_btn.setToolTip("Pair points by their order in both lists (Ctrl+M)")
        self.match_btn.clicked.connect(self.match_requested)
        layout.addWidget(self.match_btn)

        self.clear_btn = QPushButton("Clear Matches")
        self.clear_btn.clicked.connect(self.clear_requested)
        self.clear_btn.setEnabled(False)
        layout.addWidget(self.clear_btn)

        layout.addWidget(QLabel("Matched Pairs"))

        self.pair_list = QListWidget()
        layout.addWidget(self.pair_list)

        self.empty_label = QLabel(EMPTY_TEXT)
        self.empty_label.setWordWrap(True)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setStyleSheet("color: #888;")
        layout.addWidget(self.empty_label)

    def update_pairs(self, pairs: List[MatchPair], points_a: List[Point], points_b: List[Point]):
        """Rebuild the pair list; ids missing from a store show as N/A"""
        short_a: Dict[str, str] = {p.id: p.short_id for p in points_a}
        short_b: Dict[str, str] = {p.id: p.short_id for p in points_b}

        self.pair_list.clear()
        for index, (id_a, id_b) in enumerate(pairs, start=1):
            text = f"Pair {index}: ({short_a.get(id_a, 'N/A')} ↔ {short_b.get(id_b, 'N/A')})"
            self.pair_list.addItem(text)

        self.empty_label.setVisible(not pairs)
        self.clear_btn.setEnabled(bool(pairs))
