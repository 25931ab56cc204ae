# world_simulator/environment/layers.py

"""
================================================================================
ENVIRONMENT LAYERS
================================================================================
Each layer derives one scalar field (temperature, humidity, luminosity) from
the seasonal data handed to it in a LayerContext.

Data Contract:
---------------
- Inputs (on initialization):
    - params (dict): Layer-specific settings, e.g. 'base_temperature'.
    - context (LayerContext): Seasonal data, time keeper, grid dimensions
      and tracker, built by the SeasonManager.
- Public Methods:
    - update(time_keeper, grid, environment): Refreshes the cached seasonal
      factor from a live context and returns a diagnostic snapshot.
    - get_value_at(cell): The layer's value at one cell.
    - get_field(width, height): The layer's values for every cell as a
      (height, width) NumPy array.
- Side Effects: Tracker events.
- Invariants: get_value_at() and get_field() are pure functions of the cached
  seasonal factor and the cell position; they never touch the season manager.
================================================================================
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

from .. import config as DEFAULTS
from ..errors import ConfigurationError
from ..simulation_types import (
    Cell, EnvironmentLayerState, EnvironmentLayerType, Grid, LayerContext,
    TimeKeeper, resolve_enum,
)

# Use a forward reference for the type hint to avoid circular imports.
if TYPE_CHECKING:
    from .composite import CompositeEnvironment


class EnvironmentLayer(ABC):
    """Base class for a scalar field driven by the seasons."""

    layer_type: EnvironmentLayerType

    def __init__(self, params: Optional[dict], context: LayerContext):
        self.params = dict(params or {})
        self.context = context
        self._seasonal_factor = context.seasonal_data.continuous_seasonal_factor
        self._year_progress = context.seasonal_data.year_progress

        context.tracker.track('layer_created', {
            'layer_type': self.layer_type.value,
            'context_provided': True,
            'season': context.seasonal_data.discrete_season.value,
            'seasonal_factor': self._seasonal_factor,
        })

    @property
    def seasonal_factor(self) -> float:
        return self._seasonal_factor

    @property
    def base_value(self) -> Optional[float]:
        return None

    def update(self, time_keeper: TimeKeeper, grid: Grid,
               environment: 'CompositeEnvironment') -> EnvironmentLayerState:
        """
        Refreshes the cached seasonal factor for this tick. The context is
        rebuilt from the environment every time; the one captured at
        construction is never reused.
        """
        self.context = environment.create_layer_context(time_keeper)
        self._seasonal_factor = self.context.seasonal_data.continuous_seasonal_factor
        self._year_progress = self.context.seasonal_data.year_progress

        self.context.tracker.track('layer_updated', {
            'layer_type': self.layer_type.value,
            'tick': time_keeper.get_ticks(),
            'seasonal_factor': self._seasonal_factor,
        }, debounce=True)

        return {'year_progress': self._year_progress, 'base_value': self.base_value}

    def get_value_at(self, cell: Cell) -> float:
        return float(self._compute(cell.x, cell.y))

    def get_field(self, width: int, height: int) -> np.ndarray:
        """Evaluates the layer over a width x height grid, indexed [y, x]."""
        ys, xs = np.mgrid[0:height, 0:width]
        values = self._compute(xs, ys)
        return np.broadcast_to(values, xs.shape).astype(float)

    @abstractmethod
    def _compute(self, x, y):
        """Vectorized value formula; x and y are scalars or NumPy arrays."""
        ...


class AtmosphericTemperatureLayer(EnvironmentLayer):
    """Air temperature in Celsius: seasonal swing plus a latitude bonus."""

    layer_type = EnvironmentLayerType.TEMPERATURE

    def __init__(self, params: Optional[dict], context: LayerContext):
        self.base_temperature = float((params or {}).get('base_temperature', DEFAULTS.DEFAULT_BASE_TEMPERATURE_C))
        super().__init__(params, context)

    @property
    def base_value(self) -> float:
        return self.base_temperature

    def _compute(self, x, y):
        # Map the [0, 1] seasonal factor back to a signed [-1, 1] swing.
        signed_factor = 2 * self._seasonal_factor - 1
        # Uses the assumed equator, not the actual grid height.
        latitudinal_factor = 1 - np.abs(y - DEFAULTS.ASSUMED_EQUATOR_Y) / DEFAULTS.ASSUMED_EQUATOR_HALF_HEIGHT
        return (self.base_temperature
                + DEFAULTS.TEMPERATURE_SEASONAL_AMPLITUDE_C * signed_factor
                + DEFAULTS.TEMPERATURE_LATITUDINAL_AMPLITUDE_C * latitudinal_factor)


class HumidityLayer(EnvironmentLayer):
    """Relative humidity [0, 1], highest when the season is coldest."""

    layer_type = EnvironmentLayerType.HUMIDITY

    def __init__(self, params: Optional[dict], context: LayerContext):
        self.base_humidity = float((params or {}).get('base_humidity', DEFAULTS.DEFAULT_BASE_HUMIDITY))
        super().__init__(params, context)

    @property
    def base_value(self) -> float:
        return self.base_humidity

    def _compute(self, x, y):
        value = self.base_humidity + DEFAULTS.HUMIDITY_SEASONAL_AMPLITUDE * (1 - self._seasonal_factor)
        return np.clip(value, 0.0, 1.0)


class LuminosityLayer(EnvironmentLayer):
    layer_type = EnvironmentLayerType.LUMINOSITY

    def _compute(self, x, y):
        return np.clip(self._seasonal_factor, 0.0, 1.0)


LAYER_CLASSES: dict[EnvironmentLayerType, type[EnvironmentLayer]] = {
    EnvironmentLayerType.TEMPERATURE: AtmosphericTemperatureLayer,
    EnvironmentLayerType.HUMIDITY: HumidityLayer,
    EnvironmentLayerType.LUMINOSITY: LuminosityLayer,
}


def create_layer(layer_type, params: Optional[dict], context: LayerContext) -> EnvironmentLayer:
    """
    Instantiates the layer registered for `layer_type`.

    Raises:
        ConfigurationError: If the layer type is unknown.
    """
    layer_type = resolve_enum(EnvironmentLayerType, layer_type, "layer type")
    layer_class = LAYER_CLASSES.get(layer_type)
    if layer_class is None:
        raise ConfigurationError(f"No environment layer registered for {layer_type.value}")
    return layer_class(params, context)
