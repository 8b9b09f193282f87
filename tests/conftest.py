import random
from types import SimpleNamespace

import pytest

from juggling.balls import BallRegistry
from juggling.hands import HandTracker
from juggling.session import GameSession
from juggling.state import HandDetection


def _landmarks(x, y):
    """21 landmarks spread below the palm anchor, anchor at index 9."""
    points = [SimpleNamespace(x=x, y=y + 0.01 * i, z=0.0) for i in range(21)]
    points[9] = SimpleNamespace(x=x, y=y, z=0.0)
    return points


@pytest.fixture
def detection():
    def make(label, x, y):
        return HandDetection(label, _landmarks(x, y))
    return make


@pytest.fixture
def registry():
    return BallRegistry(random.Random(42))


@pytest.fixture
def hands():
    return HandTracker()


@pytest.fixture
def session():
    return GameSession(rng=random.Random(1234), clock=lambda: 0.0)
