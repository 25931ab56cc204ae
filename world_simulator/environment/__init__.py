# world_simulator/environment/__init__.py

# Public API of the environment package: seasons, layers and the composite.

from .seasons import (
    SeasonManager, SeasonStrategy, HemisphericSeasonStrategy,
    GlobalUniformSeasonStrategy, create_season_strategy,
)
from .layers import (
    EnvironmentLayer, AtmosphericTemperatureLayer, HumidityLayer,
    LuminosityLayer, create_layer,
)
from .composite import CompositeEnvironment

__all__ = [
    "SeasonManager", "SeasonStrategy", "HemisphericSeasonStrategy",
    "GlobalUniformSeasonStrategy", "create_season_strategy",
    "EnvironmentLayer", "AtmosphericTemperatureLayer", "HumidityLayer",
    "LuminosityLayer", "create_layer", "CompositeEnvironment",
]
