# world_simulator/environment/seasons.py

"""
================================================================================
SEASONS
================================================================================
This module turns a point in the simulated year into a seasonal descriptor
for any coordinate of the world, and distributes that descriptor to the
environment layers.

Data Contract:
---------------
- Season strategies (HemisphericSeasonStrategy, GlobalUniformSeasonStrategy):
    - initialize(): Called once after construction; emits a diagnostic.
    - get_season_for_cell(x, y, year_progress) -> SeasonalData.
- SeasonManager:
    - get_season_for_cell(): Delegates to its strategy and reports season
      boundary crossings per hemisphere.
    - create_layer_context(): Builds the frozen LayerContext consumed by layers.
    - step(): Polls representative latitudes once per tick.
- Side Effects: Tracker events and log messages only.
- Invariants: continuous_seasonal_factor is always within [0, 1] for in-bounds
  coordinates; the output is a deterministic function of (x, y, year_progress).
================================================================================
"""
import logging
import math
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Mapping, Optional

from .. import config as DEFAULTS
from ..errors import ConfigurationError
from ..simulation_types import (
    DiscreteSeason, Hemisphere, LayerContext, SeasonalData, SeasonStrategyType,
    TimeKeeper, Tracker, TransitionMode, resolve_enum,
)


def season_from_progress(progress: float) -> DiscreteSeason:
    """Maps a position in the year to its named season."""
    progress = progress % 1.0

    # Winter straddles the year boundary: [0.75, 1.0) and [0.0, 0.25).
    if progress >= 0.75 or progress < 0.25:
        return DiscreteSeason.WINTER
    elif progress < 0.5:
        return DiscreteSeason.SPRING
    elif progress < 0.75:
        return DiscreteSeason.SUMMER
    else:
        # Not reachable with the windows above.
        return DiscreteSeason.AUTUMN


def transition_phase(year_progress: float) -> float:
    """
    Measures proximity to the nearest season boundary. Returns 0 outside the
    transition zone, otherwise the distance to the boundary scaled to [0, 1]
    across the zone.
    """
    normalized = year_progress % 1.0
    zone_width = DEFAULTS.SEASON_TRANSITION_ZONE_WIDTH

    min_distance = math.inf
    for boundary in DEFAULTS.SEASON_BOUNDARIES:
        distance = abs(normalized - boundary)
        # Wrap around the 1.0 -> 0.0 boundary.
        distance = min(distance, abs(distance - 1.0))
        min_distance = min(min_distance, distance)

    if min_distance <= zone_width:
        return min_distance / zone_width
    return 0.0


class SeasonStrategy(ABC):
    """Base class for the interchangeable seasonal models."""

    strategy_type: SeasonStrategyType

    def __init__(self, transition_mode: TransitionMode, tracker: Tracker):
        self.logger = logging.getLogger(__name__)
        self.transition_mode = resolve_enum(TransitionMode, transition_mode, "transition mode")
        self.tracker = tracker

        if self.transition_mode is TransitionMode.SMOOTH:
            # SMOOTH is accepted but shares the DISCRETIZED computation path.
            self.logger.debug(f"{type(self).__name__}: SMOOTH transitions use the discretized computation.")

    def initialize(self):
        self.tracker.track('season_strategy_initialized', {
            'strategy': self.strategy_type.value,
            'transition_mode': self.transition_mode.value,
        })
        self.logger.debug(f"Season strategy {self.strategy_type.value} initialized.")

    @abstractmethod
    def get_season_for_cell(self, x: float, y: float, year_progress: float) -> SeasonalData:
        ...


class HemisphericSeasonStrategy(SeasonStrategy):
    """
    Northern and southern hemispheres run six months out of phase. Latitude is
    read from the y-coordinate: y=0 is the north pole and y=grid_height the
    south pole.
    """

    strategy_type = SeasonStrategyType.HEMISPHERIC

    def __init__(self, transition_mode: TransitionMode, tracker: Tracker,
                 grid_height: int = DEFAULTS.HEMISPHERIC_DEFAULT_GRID_HEIGHT):
        super().__init__(transition_mode, tracker)
        if grid_height <= 0:
            raise ConfigurationError(f"grid_height must be positive, got {grid_height}")
        self.grid_height = grid_height
        self.midpoint = grid_height / 2

    def get_hemisphere_for_y(self, y: float) -> Hemisphere:
        # The equatorial band reports northern.
        if abs(y - self.midpoint) < DEFAULTS.EQUATORIAL_BAND_ROWS:
            return Hemisphere.NORTHERN
        return Hemisphere.NORTHERN if y < self.midpoint else Hemisphere.SOUTHERN

    def get_season_for_cell(self, x: float, y: float, year_progress: float) -> SeasonalData:
        hemisphere = self.get_hemisphere_for_y(y)

        northern_curve = math.sin(year_progress * 2 * math.pi)
        southern_curve = math.sin((year_progress + 0.5) * 2 * math.pi)

        if hemisphere is Hemisphere.SOUTHERN:
            blended = southern_curve
        else:
            # 0 at the equator, 1 at the poles.
            blend_weight = abs((y - self.midpoint) / self.midpoint)
            blended = northern_curve * blend_weight + southern_curve * (1 - blend_weight)

        season_progress = year_progress + 0.5 if hemisphere is Hemisphere.SOUTHERN else year_progress

        return SeasonalData(
            discrete_season=season_from_progress(season_progress),
            continuous_seasonal_factor=(blended + 1) / 2,
            year_progress=year_progress,
            hemisphere=hemisphere,
            transition_phase=transition_phase(year_progress),
        )


class GlobalUniformSeasonStrategy(SeasonStrategy):
    """Applies one seasonal curve to the whole world, ignoring coordinates."""

    strategy_type = SeasonStrategyType.GLOBAL_UNIFORM

    def get_season_for_cell(self, x: float, y: float, year_progress: float) -> SeasonalData:
        curve = math.sin(year_progress * 2 * math.pi)
        return SeasonalData(
            discrete_season=season_from_progress(year_progress),
            continuous_seasonal_factor=max(0.0, min(1.0, (curve + 1) / 2)),
            year_progress=year_progress,
            hemisphere=Hemisphere.GLOBAL,
            transition_phase=transition_phase(year_progress),
        )


_STRATEGY_FACTORIES = {
    SeasonStrategyType.HEMISPHERIC:
        lambda mode, tracker, grid_height: HemisphericSeasonStrategy(mode, tracker, grid_height),
    SeasonStrategyType.GLOBAL_UNIFORM:
        lambda mode, tracker, grid_height: GlobalUniformSeasonStrategy(mode, tracker),
}


def create_season_strategy(strategy_type, transition_mode, tracker: Tracker,
                           grid_height: int = DEFAULTS.HEMISPHERIC_DEFAULT_GRID_HEIGHT) -> SeasonStrategy:
    """
    Builds the strategy registered for `strategy_type`.

    Raises:
        ConfigurationError: If the strategy or transition mode is unknown.
    """
    strategy_type = resolve_enum(SeasonStrategyType, strategy_type, "season strategy")
    factory = _STRATEGY_FACTORIES.get(strategy_type)
    if factory is None:
        raise ConfigurationError(f"No season strategy registered for {strategy_type.value}")
    return factory(transition_mode, tracker, grid_height)


class SeasonManager:
    """
    Wraps a season strategy, detects season boundary crossings per hemisphere
    and builds the LayerContext handed to each environment layer.
    """

    def __init__(self, strategy: SeasonStrategy, tracker: Tracker,
                 transition_mode: TransitionMode = TransitionMode.DISCRETIZED):
        self.logger = logging.getLogger(__name__)
        self._strategy = strategy
        self._tracker = tracker
        self._transition_mode = resolve_enum(TransitionMode, transition_mode, "transition mode")
        self._last_seasons: dict[Hemisphere, DiscreteSeason] = {}
        self._current_tick: Optional[int] = None
        self.strategy_name = type(strategy).__name__

        self._strategy.initialize()
        self._tracker.track('season_manager_created', {
            'strategy': self.strategy_name,
            'transition_mode': self._transition_mode.value,
        })
        self.logger.info(f"SeasonManager created with {self.strategy_name} ({self._transition_mode.value}).")

    @property
    def strategy(self) -> SeasonStrategy:
        return self._strategy

    @property
    def transition_mode(self) -> TransitionMode:
        return self._transition_mode

    @property
    def current_seasons(self) -> Mapping[Hemisphere, DiscreteSeason]:
        """The last discrete season observed for each hemisphere."""
        return MappingProxyType(dict(self._last_seasons))

    def get_season_for_cell(self, x: float, y: float, year_progress: float) -> SeasonalData:
        """
        Computes seasonal data for a cell and reports a boundary crossing when
        the discrete season differs from the last one seen in that hemisphere.
        """
        seasonal_data = self._strategy.get_season_for_cell(x, y, year_progress)

        key = seasonal_data.hemisphere
        previous = self._last_seasons.get(key)
        if previous is not None and previous != seasonal_data.discrete_season:
            self._tracker.track('season_boundary_crossed', {
                'hemisphere': key.value,
                'previous_season': previous.value,
                'new_season': seasonal_data.discrete_season.value,
                'year_progress': year_progress,
                'tick': self._current_tick,
            })
            self.logger.info(
                f"Season boundary crossed in {key.value} hemisphere: "
                f"{previous.value} -> {seasonal_data.discrete_season.value} "
                f"(year progress {year_progress:.3f})"
            )

        self._last_seasons[key] = seasonal_data.discrete_season
        return seasonal_data

    def create_layer_context(self, time_keeper: TimeKeeper, grid_width: int, grid_height: int,
                             year_progress: float, x: float, y: float) -> LayerContext:
        seasonal_data = self.get_season_for_cell(x, y, year_progress)
        return LayerContext(
            seasonal_data=seasonal_data,
            time_keeper=time_keeper,
            grid_width=grid_width,
            grid_height=grid_height,
            tracker=self._tracker,
        )

    def step(self, time_keeper: TimeKeeper, grid_width: int, grid_height: int):
        """
        Called once per tick. Queries the north pole, the equator and the south
        pole at the center longitude so boundary crossings are detected across
        the whole world, whatever cells the layers happen to read.
        """
        self._current_tick = time_keeper.get_ticks()
        year_progress = time_keeper.get_year_progress()
        center_x = grid_width / 2

        self.get_season_for_cell(center_x, 0, year_progress)
        self.get_season_for_cell(center_x, grid_height / 2, year_progress)
        self.get_season_for_cell(center_x, grid_height - 1, year_progress)
