"""
Mapping between display-surface pixels and normalized image coordinates

Two strategies are provided:

* surface-relative: the clickable surface is exactly the rendered image, so a
  click at (w/2, h/2) is the image centre.
* contain fit: the image is scaled to fit inside the surface preserving its
  aspect ratio and centred, leaving letterbox bars on one axis. Clicks and
  markers are mapped through the displayed sub-rectangle.

The image panel uses the contain variant for both placing and drawing points.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .point import Point, clamp_unit

CENTER = (0.5, 0.5)


def to_normalized(click_x: float, click_y: float,
                  surface_width: float, surface_height: float) -> Tuple[float, float]:
    """
    Convert a click offset within the surface into a normalized coordinate

    Args:
        click_x, click_y: Click position relative to the surface's top-left corner
        surface_width, surface_height: Current rendered size of the surface

    Returns:
        (x, y) clamped to [0, 1]; the centre when the surface has no area
    """
    if surface_width <= 0 or surface_height <= 0:
        return CENTER
    return (clamp_unit(click_x / surface_width),
            clamp_unit(click_y / surface_height))


def to_display(point: Point, surface_width: float, surface_height: float) -> Tuple[float, float]:
    """Convert a normalized point into surface pixels"""
    return (point.x * surface_width, point.y * surface_height)


@dataclass(frozen=True)
class ContainFit:
    """Displayed sub-rectangle of an image fitted inside a surface"""

    scale: float
    offset_x: float
    offset_y: float
    display_width: float
    display_height: float

    @classmethod
    def compute(cls, surface_width: float, surface_height: float,
                natural_width: float, natural_height: float) -> 'ContainFit':
        """Compute the letterbox offsets and scale for an image inside a surface"""
        if natural_width <= 0 or natural_height <= 0:
            # Unknown image size: treat the whole surface as the image
            return cls(1.0, 0.0, 0.0, float(surface_width), float(surface_height))

        scale = min(surface_width / natural_width, surface_height / natural_height)
        display_width = natural_width * scale
        display_height = natural_height * scale
        return cls(
            scale=scale,
            offset_x=(surface_width - display_width) / 2,
            offset_y=(surface_height - display_height) / 2,
            display_width=display_width,
            display_height=display_height
        )

    def is_degenerate(self) -> bool:
        return self.display_width <= 0 or self.display_height <= 0

    def to_normalized(self, click_x: float, click_y: float) -> Tuple[float, float]:
        """Map a surface click through the displayed image rectangle"""
        if self.is_degenerate():
            return CENTER
        return to_normalized(click_x - self.offset_x, click_y - self.offset_y,
                             self.display_width, self.display_height)

    def to_display(self, point: Point) -> Tuple[float, float]:
        """Map a normalized point to surface pixels, letterbox included"""
        return (self.offset_x + point.x * self.display_width,
                self.offset_y + point.y * self.display_height)


def to_normalized_contain(click_x: float, click_y: float,
                          surface_width: float, surface_height: float,
                          natural_width: float, natural_height: float) -> Tuple[float, float]:
    """Contain-fit variant of to_normalized"""
    if surface_width <= 0 or surface_height <= 0:
        return CENTER
    fit = ContainFit.compute(surface_width, surface_height, natural_width, natural_height)
    return fit.to_normalized(click_x, click_y)


def to_display_contain(point: Point, surface_width: float, surface_height: float,
                       natural_width: float, natural_height: float) -> Tuple[float, float]:
    """Contain-fit variant of to_display"""
    fit = ContainFit.compute(surface_width, surface_height, natural_width, natural_height)
    return fit.to_display(point)


def points_to_display(points: Iterable[Point], surface_width: float, surface_height: float,
                      natural_width: float = 0, natural_height: float = 0) -> np.ndarray:
    """
    Map many points at once

    Returns:
        Array of shape (N, 2) holding surface pixel positions
    """
    coords = np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)
    fit = ContainFit.compute(surface_width, surface_height, natural_width, natural_height)
    scale = np.array([fit.display_width, fit.display_height])
    offset = np.array([fit.offset_x, fit.offset_y])
    return coords * scale + offset
