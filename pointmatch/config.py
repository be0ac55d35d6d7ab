"""
Application constants and defaults
"""

import os
import logging

# Point identifiers: point_<epoch ms>_<random base-36>
POINT_ID_PREFIX = "point_"
POINT_ID_RANDOM_LENGTH = 5

# Points text files
POINTS_FILE_EXTENSION = ".txt"
POINTS_FILE_ENCODING = "utf-8"
POINTS_FILE_READ_ENCODING = "utf-8-sig"  # tolerate a BOM from other editors
POINTS_FILE_HEADER = "# Point Match Editor points: id, x, y per block (normalized 0-1)"
DEFAULT_POINTS_FILENAMES = ("points1.txt", "points2.txt")

# Images
SUPPORTED_IMAGE_FORMATS = {'.png', '.jpg', '.jpeg', '.bmp', '.tif', '.tiff'}
TIFF_FORMATS = {'.tif', '.tiff'}

# Logging
DEFAULT_LOG_LEVEL = os.environ.get("POINTMATCH_LOG_LEVEL", "INFO").upper()


def resolve_log_level(name: str) -> int:
    """Translate a level name such as 'DEBUG' into a logging constant"""
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    return logging.INFO


# Image panel rendering
MARKER_RADIUS = 6.0
SELECTED_MARKER_SCALE = 1.25
PANEL_MIN_SIZE = (320, 240)
PANEL_BACKGROUND = (42, 42, 42)
MARKER_COLOR = (255, 100, 100)
SELECTED_MARKER_COLOR = (230, 60, 60)
MATCHED_RING_COLOR = (80, 200, 120)
