# world_simulator/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# We can also use it to define the public API of the package.

from .world import World
from .time_keeper import SequentialTimeKeeper
from .sparse_grid import SparseGrid

__all__ = ["World", "SequentialTimeKeeper", "SparseGrid"]
