# world_simulator/runtime/sparse_grid.py

"""
================================================================================
SPARSE GRID
================================================================================
A bounded, sparse set of "active" cells. A cell exists only if it has been
set; there is no per-cell payload.

Data Contract:
---------------
- Inputs (on initialization):
    - bounds (WorldBounds): The width and height of the world, in cells.
- Public Methods:
    - set_cell(x, y): Marks a cell active. Raises OutOfBoundsError outside
      [0, width) x [0, height).
    - get_cell(x, y), has_cell(x, y), get_all_cells(): Lookups.
- Invariants: Bounds never change after construction and no active cell ever
  lies outside them.
================================================================================
"""
from typing import Optional

from ..errors import ConfigurationError, OutOfBoundsError
from ..simulation_types import Cell, WorldBounds


class SparseGrid:
    """Stores active cells in a dict keyed by coordinate for O(1) lookups."""

    def __init__(self, bounds: WorldBounds):
        if bounds.width <= 0 or bounds.height <= 0:
            raise ConfigurationError(
                f"Grid bounds must be positive, got {bounds.width}x{bounds.height}"
            )
        self.bounds = bounds
        self._cells: dict[tuple[int, int], Cell] = {}

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def set_cell(self, x: int, y: int):
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            raise OutOfBoundsError(x, y, self.width, self.height)
        self._cells[(x, y)] = Cell(x, y)

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        return self._cells.get((x, y))

    def has_cell(self, x: int, y: int) -> bool:
        return (x, y) in self._cells

    def get_all_cells(self) -> list[Cell]:
        """Returns a snapshot of the active cells. Order is not meaningful."""
        return list(self._cells.values())

    def get_bounds(self) -> WorldBounds:
        return self.bounds

    def __len__(self) -> int:
        return len(self._cells)
