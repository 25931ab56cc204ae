# world_simulator/simulation_types.py

"""
================================================================================
SIMULATION TYPES
================================================================================
Shared value types, enums and protocols for the simulation core. Every other
module depends on this one and this one depends on nothing else in the
package, which keeps the components free of circular imports.

Data Contract:
---------------
- Value types (Cell, WorldBounds, SeasonalData, LayerContext) are frozen
  dataclasses. They are created fresh per query and never mutated in place.
- Protocols (TimeKeeper, Grid, Tracker) describe the interfaces the core
  consumes, so callers can supply their own implementations.
================================================================================
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Protocol

from .errors import ConfigurationError


class DiscreteSeason(str, Enum):
    WINTER = 'WINTER'
    SPRING = 'SPRING'
    SUMMER = 'SUMMER'
    AUTUMN = 'AUTUMN'


class Hemisphere(str, Enum):
    NORTHERN = 'northern'
    SOUTHERN = 'southern'
    GLOBAL = 'global'


class SeasonStrategyType(str, Enum):
    HEMISPHERIC = 'HEMISPHERIC'
    GLOBAL_UNIFORM = 'GLOBAL_UNIFORM'


class TransitionMode(str, Enum):
    SMOOTH = 'SMOOTH'
    DISCRETIZED = 'DISCRETIZED'


class EnvironmentLayerType(str, Enum):
    TEMPERATURE = 'temperature'
    HUMIDITY = 'humidity'
    LUMINOSITY = 'luminosity'


def resolve_enum(enum_cls, value, kind: str):
    """
    Resolves a configuration value (an enum member or its string value) to a
    member of `enum_cls`. String matching ignores case.

    Raises:
        ConfigurationError: If the value does not name a member.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value.lower() == value.lower() or member.name.lower() == value.lower():
                return member
    choices = ", ".join(member.value for member in enum_cls)
    raise ConfigurationError(f"Unknown {kind}: {value!r} (expected one of: {choices})")


@dataclass(frozen=True)
class Cell:
    x: int
    y: int


@dataclass(frozen=True)
class WorldBounds:
    """Bounds for the logical simulation space, in cells."""
    width: int
    height: int


@dataclass(frozen=True)
class SeasonalData:
    """The seasonal descriptor of one coordinate at one point of the year."""
    discrete_season: DiscreteSeason
    continuous_seasonal_factor: float  # [0, 1]
    year_progress: float               # [0, 1)
    hemisphere: Hemisphere
    transition_phase: float            # [0, 1]


class TimeKeeper(Protocol):
    def tick(self) -> None: ...
    def get_ticks(self) -> int: ...
    def get_year_progress(self) -> float: ...
    def get_total_years(self) -> int: ...
    def get_ticks_per_year(self) -> int: ...


class Grid(Protocol):
    width: int
    height: int

    def has_cell(self, x: int, y: int) -> bool: ...
    def get_all_cells(self) -> Iterable[Cell]: ...


class Tracker(Protocol):
    """
    A fire-and-forget diagnostics sink. The core never waits on it and never
    sees its failures.
    """
    def track(self, label: str, payload: Optional[dict] = None, debounce: bool = False) -> None: ...


@dataclass(frozen=True)
class LayerContext:
    """
    Everything a layer needs from the rest of the simulation, bundled by the
    SeasonManager. Layers hold this instead of a reference to the manager.
    """
    seasonal_data: SeasonalData
    time_keeper: TimeKeeper
    grid_width: int
    grid_height: int
    tracker: Tracker


# Per-layer diagnostic snapshot returned by EnvironmentLayer.update().
EnvironmentLayerState = dict[str, Any]
# Mapping of layer type to that layer's snapshot for one tick.
EnvironmentState = dict[EnvironmentLayerType, EnvironmentLayerState]
