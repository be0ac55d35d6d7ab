#!/usr/bin/env python3
"""
Point Match Editor
Main application entry point
"""

import argparse
import logging
import sys
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from pointmatch.config import DEFAULT_LOG_LEVEL, resolve_log_level
from pointmatch.logging_config import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Place and match points between two images")
    parser.add_argument('image1', nargs='?', help="image to open in the first panel")
    parser.add_argument('image2', nargs='?', help="image to open in the second panel")
    parser.add_argument('--points1', help="points file to load for the first image")
    parser.add_argument('--points2', help="points file to load for the second image")
    parser.add_argument('--debug', action='store_true', help="enable debug logging")
    parser.add_argument('--log-file', help="also write the log to this file")
    return parser.parse_args(argv)


def main():
    """Main application entry point"""
    args = parse_args()
    level = logging.DEBUG if args.debug else resolve_log_level(DEFAULT_LOG_LEVEL)
    setup_logging(level, args.log_file)

    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Point Match Editor")
    app.setApplicationVersion("1.0.0")
    app.setStyle('Fusion')

    from pointmatch.ui.theme import apply_dark_theme
    apply_dark_theme(app)

    from pointmatch.core.session import ImageSlot
    from pointmatch.main_window import MainWindow
    window = MainWindow()

    # Images first: loading an image clears that slot's points
    for slot, image_path in ((ImageSlot.FIRST, args.image1), (ImageSlot.SECOND, args.image2)):
        if image_path:
            window.load_image_from_path(slot, image_path)
    for slot, points_path in ((ImageSlot.FIRST, args.points1), (ImageSlot.SECOND, args.points2)):
        if points_path:
            window.load_points_from_path(slot, points_path)

    window.show()

    sys.exit(app.exec())


if __name__ == '__main__':
    main()
