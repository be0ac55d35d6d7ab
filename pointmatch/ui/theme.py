"""
Application palette and stylesheet
"""

from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QPalette, QColor

ACCENT = "#3a9d9b"

STYLESHEET = f"""
QMainWindow, QStatusBar, QMenuBar, QMenu {{
    background-color: #2b2b2e;
    color: #e0e0e0;
}}

QMenuBar::item:selected, QMenu::item:selected {{
    background-color: {ACCENT};
}}

QStatusBar {{
    border-top: 1px solid #4a4a4f;
}}

QPushButton {{
    background-color: #46464c;
    border: 1px solid #5c5c63;
    padding: 5px 10px;
    border-radius: 4px;
    color: #e0e0e0;
}}

QPushButton:hover {{
    border-color: {ACCENT};
}}

QPushButton:disabled {{
    color: #85858a;
}}

QListWidget {{
    background-color: #26262a;
    border: 1px solid #4a4a4f;
    border-radius: 4px;
}}

QListWidget::item {{
    border-bottom: 1px solid #3a3a3f;
}}

QDoubleSpinBox {{
    background-color: #26262a;
    border: 1px solid #4a4a4f;
    border-radius: 3px;
}}

QDoubleSpinBox:focus {{
    border-color: {ACCENT};
}}

QSplitter::handle:horizontal {{
    background-color: #4a4a4f;
    width: 3px;
}}
"""


def apply_dark_theme(app: QApplication):
    """Apply the dark palette and stylesheet to the application"""
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(43, 43, 46))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(224, 224, 224))
    palette.setColor(QPalette.ColorRole.Base, QColor(38, 38, 42))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(50, 50, 55))
    palette.setColor(QPalette.ColorRole.Text, QColor(224, 224, 224))
    palette.setColor(QPalette.ColorRole.Button, QColor(70, 70, 76))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(224, 224, 224))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(ACCENT))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, QColor(133, 133, 138))

    app.setPalette(palette)
    app.setStyleSheet(STYLESHEET)
