# world_simulator/environment/composite.py

"""
================================================================================
COMPOSITE ENVIRONMENT
================================================================================
The top-level environment facade: one SeasonManager plus one layer per
configured type, advanced together once per tick.

Data Contract:
---------------
- Inputs (on initialization):
    - layer_specs: A sequence of {'type': ..., 'params': {...}} dicts or
      (type, params) pairs. Duplicate types: the last one wins.
    - params (dict): Environment-wide defaults merged under every layer's
      own params.
    - tracker, time_keeper, grid_width, grid_height, season_strategy,
      transition_mode.
- Public Methods:
    - update(time_keeper, grid): Advances the season manager, then every
      layer, and returns {layer_type: snapshot}.
    - get_layer(type), get_value_at(type, cell), get_field(type).
    - create_layer_context(time_keeper): A live context for layers.
- Side Effects: Tracker events and log messages.
- Invariants: Within a tick, the season manager always steps before any layer
  reads seasonal data. Querying an unconfigured layer returns 0.
================================================================================
"""
import logging
from typing import Optional, Sequence

import numpy as np

from ..errors import ConfigurationError
from ..simulation_types import (
    Cell, EnvironmentLayerType, EnvironmentState, Grid, LayerContext,
    SeasonStrategyType, TimeKeeper, Tracker, TransitionMode, resolve_enum,
)
from .layers import EnvironmentLayer, create_layer
from .seasons import SeasonManager, create_season_strategy


def _parse_layer_spec(spec) -> tuple:
    if isinstance(spec, dict):
        if 'type' not in spec:
            raise ConfigurationError(f"Layer spec is missing a 'type': {spec!r}")
        return spec['type'], spec.get('params') or {}
    try:
        layer_type, params = spec
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid layer spec: {spec!r}") from e
    return layer_type, params or {}


class CompositeEnvironment:
    """Owns the season manager and the environment layers."""

    def __init__(
        self,
        layer_specs: Sequence,
        params: Optional[dict],
        tracker: Tracker,
        time_keeper: TimeKeeper,
        grid_width: int,
        grid_height: int,
        season_strategy=SeasonStrategyType.HEMISPHERIC,
        transition_mode=TransitionMode.DISCRETIZED,
    ):
        self.tracker = tracker
        self.logger = logging.getLogger(__name__)
        self.params = dict(params or {})
        self.grid_width = grid_width
        self.grid_height = grid_height
        self._time_keeper = time_keeper
        self._layers: dict[EnvironmentLayerType, EnvironmentLayer] = {}

        # --- 1. Season Manager ---
        self.season_strategy = resolve_enum(SeasonStrategyType, season_strategy, "season strategy")
        self.transition_mode = resolve_enum(TransitionMode, transition_mode, "transition mode")
        strategy = create_season_strategy(self.season_strategy, self.transition_mode, tracker, grid_height)
        self._season_manager = SeasonManager(strategy, tracker, self.transition_mode)

        # --- 2. Layers, each seeded with a context at the grid center ---
        for spec in layer_specs:
            layer_type, layer_params = _parse_layer_spec(spec)
            self.logger.debug(f"Creating layer of type: {layer_type}")
            layer = create_layer(layer_type, {**self.params, **layer_params}, self.create_layer_context())
            self._layers[layer.layer_type] = layer

        self.tracker.track('environment_created', {
            'provider': type(self).__name__,
            'layer_count': len(self._layers),
            'season_strategy': self.season_strategy.value,
            'season_transition_mode': self.transition_mode.value,
        })
        self.logger.info(
            f"Environment created with {len(self._layers)} layer(s) "
            f"[{', '.join(t.value for t in self._layers)}] using {self.season_strategy.value} seasons."
        )

    @property
    def layer_types(self) -> list[EnvironmentLayerType]:
        return list(self._layers)

    def update(self, time_keeper: TimeKeeper, grid: Grid) -> EnvironmentState:
        # The season manager must advance before any layer reads this tick's season.
        self._season_manager.step(time_keeper, self.grid_width, self.grid_height)

        state: EnvironmentState = {}
        for layer_type, layer in self._layers.items():
            state[layer_type] = layer.update(time_keeper, grid, self)

        self.tracker.track('environment_updated', {
            'tick': time_keeper.get_ticks(),
            'layer_count': len(self._layers),
        }, debounce=True)
        return state

    def create_layer_context(self, time_keeper: Optional[TimeKeeper] = None) -> LayerContext:
        """Builds a context for the grid center at the time keeper's current year progress."""
        if time_keeper is None:
            time_keeper = self._time_keeper
        return self._season_manager.create_layer_context(
            time_keeper,
            self.grid_width,
            self.grid_height,
            time_keeper.get_year_progress(),
            self.grid_width / 2,
            self.grid_height / 2,
        )

    def get_layer(self, layer_type) -> Optional[EnvironmentLayer]:
        try:
            layer_type = resolve_enum(EnvironmentLayerType, layer_type, "layer type")
        except ConfigurationError:
            return None
        return self._layers.get(layer_type)

    def get_value_at(self, layer_type, position: Cell) -> float:
        """Returns the layer's value at `position`, or 0 if the layer is not configured."""
        layer = self.get_layer(layer_type)
        return layer.get_value_at(position) if layer else 0

    def get_field(self, layer_type) -> np.ndarray:
        """The layer's values over the whole grid, zeros if the layer is not configured."""
        layer = self.get_layer(layer_type)
        if layer is None:
            return np.zeros((self.grid_height, self.grid_width))
        return layer.get_field(self.grid_width, self.grid_height)

    def get_season_manager(self) -> SeasonManager:
        return self._season_manager
