"""
Normalized point data structure
"""

from dataclasses import dataclass

from .id_generator import generate_point_id


def clamp_unit(value: float) -> float:
    """Clamp a value into [0, 1]"""
    return max(0.0, min(1.0, float(value)))


@dataclass
class Point:
    """A point on an image, stored as a fraction of the image width and height"""

    id: str
    x: float
    y: float

    def __post_init__(self):
        if not self.id:
            self.id = generate_point_id()
        self.x = clamp_unit(self.x)
        self.y = clamp_unit(self.y)

    @property
    def short_id(self) -> str:
        """Five character tag shown in lists and tooltips"""
        return self.id[6:11]

    def copy(self) -> 'Point':
        return Point(id=self.id, x=self.x, y=self.y)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Point':
        """Create from dictionary"""
        return cls(
            id=data.get('id', ''),
            x=data['x'],
            y=data['y']
        )
