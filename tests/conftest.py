from __future__ import annotations

import itertools
import random

import pytest

from pointmatch.core.id_generator import PointIdGenerator


@pytest.fixture
def id_generator() -> PointIdGenerator:
    """Deterministic ids: increasing timestamps, seeded suffixes"""
    ticks = itertools.count(1_700_000_000_000)
    return PointIdGenerator(clock=lambda: next(ticks) / 1000, rng=random.Random(0))
