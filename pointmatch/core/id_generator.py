"""
Point identifier generation
"""

import random
import string
import time
from typing import Callable, Optional

from ..config import POINT_ID_PREFIX, POINT_ID_RANDOM_LENGTH

BASE36_ALPHABET = string.digits + string.ascii_lowercase


class PointIdGenerator:
    """Produces ids of the form point_<epoch ms>_<random base-36 suffix>"""

    def __init__(self, clock: Optional[Callable[[], float]] = None,
                 rng: Optional[random.Random] = None,
                 prefix: str = POINT_ID_PREFIX,
                 random_length: int = POINT_ID_RANDOM_LENGTH):
        self.clock = clock or time.time
        self.rng = rng or random.Random()
        self.prefix = prefix
        self.random_length = random_length

    def next_id(self) -> str:
        """Return a fresh point id"""
        timestamp_ms = int(self.clock() * 1000)
        suffix = ''.join(self.rng.choice(BASE36_ALPHABET) for _ in range(self.random_length))
        return f"{self.prefix}{timestamp_ms}_{suffix}"


_default_generator = PointIdGenerator()


def generate_point_id() -> str:
    """Return a fresh point id from the shared default generator"""
    return _default_generator.next_id()
