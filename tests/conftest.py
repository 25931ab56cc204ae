# tests/conftest.py
import pytest

from world_simulator.runtime.sparse_grid import SparseGrid
from world_simulator.runtime.time_keeper import SequentialTimeKeeper
from world_simulator.simulation_types import WorldBounds


class RecordingTracker:
    """Keeps every tracked event in memory."""

    def __init__(self):
        self.events = []

    def track(self, label, payload=None, debounce=False):
        self.events.append((label, dict(payload or {}), debounce))

    def labels(self):
        return [label for label, _, _ in self.events]

    def payloads(self, label):
        return [payload for event_label, payload, _ in self.events if event_label == label]


@pytest.fixture
def tracker():
    return RecordingTracker()


@pytest.fixture
def time_keeper():
    return SequentialTimeKeeper(ticks_per_year=360)


@pytest.fixture
def grid():
    return SparseGrid(WorldBounds(width=60, height=40))


def advance(time_keeper, ticks):
    for _ in range(ticks):
        time_keeper.tick()
    return time_keeper
