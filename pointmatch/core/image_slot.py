"""
The two images an editor works on
"""

from enum import Enum


class ImageSlot(Enum):
    FIRST = 0
    SECOND = 1

    @property
    def label(self) -> str:
        return f"Image {self.value + 1}"
