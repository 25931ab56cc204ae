# world_simulator/runtime/world.py

"""
================================================================================
WORLD RUNTIME
================================================================================
This module provides the user-facing `World` class, which is the primary
interface for running a simulation. It composes the time keeper, the sparse
grid and the composite environment into a single object that a front-end
advances once per frame with `step()` and reads readings from.
================================================================================
"""
import os
import json
import logging
from typing import Optional

import numpy as np

from .. import config as DEFAULTS
from ..environment.composite import CompositeEnvironment
from ..errors import ConfigurationError
from ..simulation_types import Cell, Tracker, WorldBounds
from ..tracking import SimulationTracker
from .sparse_grid import SparseGrid
from .time_keeper import SequentialTimeKeeper


class World:
    """
    The main runtime class for a simulated world. Handles time, the grid and
    the environment.
    """
    def __init__(self, config: Optional[dict] = None, tracker: Optional[Tracker] = None):
        """
        Initializes the World from a configuration dictionary.

        Args:
            config (dict, optional): User-defined parameters to override defaults.
            tracker (Tracker, optional): Diagnostics sink. A SimulationTracker
                writing to the log is created if none is given.
        """
        self.logger = logging.getLogger(__name__)
        self.user_config = dict(config or {})
        self.tracker = tracker if tracker is not None else SimulationTracker()

        # --- 1. Consolidate Configuration ---
        self.settings = {
            'ticks_per_year': self.user_config.get('ticks_per_year', DEFAULTS.DEFAULT_TICKS_PER_YEAR),
            'initial_ticks': self.user_config.get('initial_ticks', DEFAULTS.DEFAULT_INITIAL_TICKS),
            'width': self.user_config.get('width', DEFAULTS.DEFAULT_WORLD_WIDTH),
            'height': self.user_config.get('height', DEFAULTS.DEFAULT_WORLD_HEIGHT),
            'season_strategy': self.user_config.get('season_strategy', DEFAULTS.DEFAULT_SEASON_STRATEGY),
            'transition_mode': self.user_config.get('transition_mode', DEFAULTS.DEFAULT_TRANSITION_MODE),
            'layers': self.user_config.get('layers', DEFAULTS.DEFAULT_LAYERS),
            'environment_params': self.user_config.get('environment_params', {}),
            'active_cells': self.user_config.get('active_cells', []),
        }

        # --- 2. Initialize Core Components ---
        self.time_keeper = SequentialTimeKeeper(
            self.settings['ticks_per_year'], self.settings['initial_ticks']
        )
        self.grid = SparseGrid(WorldBounds(self.settings['width'], self.settings['height']))
        for entry in self.settings['active_cells']:
            try:
                x, y = entry
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid active cell {entry!r}, expected [x, y]") from e
            self.grid.set_cell(x, y)

        self.environment = CompositeEnvironment(
            self.settings['layers'],
            self.settings['environment_params'],
            self.tracker,
            self.time_keeper,
            self.grid.width,
            self.grid.height,
            season_strategy=self.settings['season_strategy'],
            transition_mode=self.settings['transition_mode'],
        )

        # --- 3. Initial State ---
        self.state = {
            'tick': self.time_keeper.get_ticks(),
            'total_time': 0.0,
            'environment': self.environment.update(self.time_keeper, self.grid),
        }

        self.tracker.track('world_created', {
            'width': self.grid.width,
            'height': self.grid.height,
            'active_cells': len(self.grid),
            'initial_tick': self.state['tick'],
            'year_progress': self.time_keeper.get_year_progress(),
        })
        self.logger.info(
            f"World created: {self.grid.width}x{self.grid.height} cells, "
            f"{self.time_keeper.get_ticks_per_year()} ticks per year, starting at {self.get_time_string()}."
        )

    @classmethod
    def from_config_file(cls, config_path: str, tracker: Optional[Tracker] = None) -> 'World':
        """Builds a World from a JSON configuration file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Could not find world configuration '{config_path}'")

        with open(config_path, 'r') as f:
            try:
                config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in '{config_path}': {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"World configuration in '{config_path}' must be a JSON object")
        return cls(config, tracker=tracker)

    def step(self, delta_time: float = 0.0) -> dict:
        """
        Advances the world by one tick. Should be called once per simulation step.

        Args:
            delta_time (float): The real-world time elapsed since the last step, in seconds.
        """
        self.time_keeper.tick()
        self.state['tick'] = self.time_keeper.get_ticks()
        self.state['environment'] = self.environment.update(self.time_keeper, self.grid)
        self.state['total_time'] += delta_time

        self.tracker.track('simulation_step', {
            'tick': self.state['tick'],
            'total_time': self.state['total_time'],
            'year_progress': self.time_keeper.get_year_progress(),
            'total_years': self.time_keeper.get_total_years(),
        }, debounce=True)
        return self.state

    def flush(self):
        """Emits any tracker events still held back by debouncing."""
        flush = getattr(self.tracker, 'flush', None)
        if flush is not None:
            flush()

    # --- Public API for Readings ---
    def get_value_at(self, layer_type, x: int, y: int) -> float:
        return self.environment.get_value_at(layer_type, Cell(x, y))

    def get_time_string(self) -> str:
        """Returns a formatted string of the current simulated date."""
        return self.time_keeper.get_time_string()

    def get_current_seasons(self) -> dict[str, str]:
        """The last observed season per hemisphere, e.g. {'northern': 'WINTER'}."""
        seasons = self.environment.get_season_manager().current_seasons
        return {hemisphere.value: season.value for hemisphere, season in seasons.items()}

    def summarize_layers(self) -> dict[str, dict[str, float]]:
        """Min, mean and max of every layer's field over the whole grid."""
        summary = {}
        for layer_type in self.environment.layer_types:
            field = self.environment.get_field(layer_type)
            summary[layer_type.value] = {
                'min': float(np.min(field)),
                'mean': float(np.mean(field)),
                'max': float(np.max(field)),
            }
        return summary
