# world_simulator/__init__.py

from .errors import WorldSimulatorError, ConfigurationError, OutOfBoundsError
from .simulation_types import (
    Cell, WorldBounds, SeasonalData, LayerContext, DiscreteSeason, Hemisphere,
    SeasonStrategyType, TransitionMode, EnvironmentLayerType,
)
from .tracking import SimulationTracker, NullTracker
from .runtime import World, SequentialTimeKeeper, SparseGrid
from .environment import CompositeEnvironment, SeasonManager

__all__ = [
    "WorldSimulatorError", "ConfigurationError", "OutOfBoundsError",
    "Cell", "WorldBounds", "SeasonalData", "LayerContext", "DiscreteSeason",
    "Hemisphere", "SeasonStrategyType", "TransitionMode", "EnvironmentLayerType",
    "SimulationTracker", "NullTracker",
    "World", "SequentialTimeKeeper", "SparseGrid",
    "CompositeEnvironment", "SeasonManager",
]
