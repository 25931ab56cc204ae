import dataclasses
import logging

import numpy as np
import pytest

from world_simulator.environment.seasons import (
    GlobalUniformSeasonStrategy, HemisphericSeasonStrategy, SeasonManager,
    create_season_strategy, season_from_progress, transition_phase,
)
from world_simulator.errors import ConfigurationError
from world_simulator.runtime.time_keeper import SequentialTimeKeeper
from world_simulator.simulation_types import (
    DiscreteSeason, Hemisphere, LayerContext, TransitionMode,
)

from conftest import advance


@pytest.fixture
def hemispheric(tracker):
    return HemisphericSeasonStrategy(TransitionMode.DISCRETIZED, tracker, grid_height=40)


@pytest.fixture
def global_uniform(tracker):
    return GlobalUniformSeasonStrategy(TransitionMode.DISCRETIZED, tracker)


@pytest.mark.parametrize("progress, season", [
    (0.0, DiscreteSeason.WINTER),
    (0.1, DiscreteSeason.WINTER),
    (0.25, DiscreteSeason.SPRING),
    (0.4, DiscreteSeason.SPRING),
    (0.5, DiscreteSeason.SUMMER),
    (0.7, DiscreteSeason.SUMMER),
    (0.75, DiscreteSeason.WINTER),
    (0.99, DiscreteSeason.WINTER),
    (1.3, DiscreteSeason.SPRING),
    (-0.25, DiscreteSeason.WINTER),
])
def test_season_from_progress(progress, season):
    assert season_from_progress(progress) == season


@pytest.mark.parametrize("progress, phase", [
    (0.0, 0.0),
    (0.1, 0.0),
    (0.26, 0.2),
    (0.49, 0.2),
    (0.99, 0.2),
    (0.625, 0.0),
])
def test_transition_phase(progress, phase):
    assert transition_phase(progress) == pytest.approx(phase)


def test_hemispheric_poles_are_six_months_apart(hemispheric):
    north = hemispheric.get_season_for_cell(0, 0, 0.0)
    south = hemispheric.get_season_for_cell(0, 40, 0.0)

    assert north.hemisphere == Hemisphere.NORTHERN
    assert north.discrete_season == DiscreteSeason.WINTER
    assert south.hemisphere == Hemisphere.SOUTHERN
    assert south.discrete_season == DiscreteSeason.SUMMER


def test_hemispheric_factor_peaks_in_opposite_hemispheres(hemispheric):
    north = hemispheric.get_season_for_cell(0, 0, 0.25)
    south = hemispheric.get_season_for_cell(0, 39, 0.25)
    assert north.continuous_seasonal_factor == pytest.approx(1.0)
    assert south.continuous_seasonal_factor == pytest.approx(0.0)


@pytest.mark.parametrize("y, hemisphere", [
    (0, Hemisphere.NORTHERN),
    (17, Hemisphere.NORTHERN),
    (19, Hemisphere.NORTHERN),
    (20, Hemisphere.NORTHERN),
    (21, Hemisphere.NORTHERN),
    (22, Hemisphere.SOUTHERN),
    (39, Hemisphere.SOUTHERN),
])
def test_equatorial_band_reports_northern(hemispheric, y, hemisphere):
    assert hemispheric.get_hemisphere_for_y(y) == hemisphere


def test_hemispheric_ignores_x(hemispheric):
    assert hemispheric.get_season_for_cell(0, 5, 0.3) == hemispheric.get_season_for_cell(59, 5, 0.3)


def test_northern_pole_warms_by_mid_year(hemispheric):
    tk = SequentialTimeKeeper(ticks_per_year=360, initial_ticks=0)
    start = hemispheric.get_season_for_cell(30, 0, tk.get_year_progress())
    advance(tk, 90)
    peak = hemispheric.get_season_for_cell(30, 0, tk.get_year_progress())
    assert np.isclose(peak.continuous_seasonal_factor, 1.0)
    assert peak.continuous_seasonal_factor > start.continuous_seasonal_factor + 0.4
    advance(tk, 90)
    assert tk.get_year_progress() == 0.5
    mid = hemispheric.get_season_for_cell(30, 0, tk.get_year_progress())
    assert mid.continuous_seasonal_factor > start.continuous_seasonal_factor


def test_global_uniform_ignores_coordinates(global_uniform):
    for progress in np.linspace(0.0, 1.0, 24, endpoint=False):
        seasons = {
            global_uniform.get_season_for_cell(x, y, progress).discrete_season
            for x in (0, 13, 59) for y in (0, 20, 39)
        }
        assert len(seasons) == 1


def test_global_uniform_reports_global_hemisphere(global_uniform):
    data = global_uniform.get_season_for_cell(3, 4, 0.6)
    assert data.hemisphere == Hemisphere.GLOBAL
    assert data.discrete_season == DiscreteSeason.SUMMER
    assert data.year_progress == 0.6


@pytest.mark.parametrize("strategy_name", ["hemispheric", "global_uniform"])
def test_seasonal_factor_stays_in_unit_interval(request, strategy_name):
    strategy = request.getfixturevalue(strategy_name)
    for progress in np.linspace(0.0, 1.0, 48, endpoint=False):
        for y in range(40):
            data = strategy.get_season_for_cell(30, y, progress)
            assert 0.0 <= data.continuous_seasonal_factor <= 1.0
            assert 0.0 <= data.transition_phase <= 1.0


def test_smooth_mode_matches_discretized(tracker):
    smooth = HemisphericSeasonStrategy(TransitionMode.SMOOTH, tracker, grid_height=40)
    discrete = HemisphericSeasonStrategy(TransitionMode.DISCRETIZED, tracker, grid_height=40)
    for y in (0, 20, 39):
        assert smooth.get_season_for_cell(0, y, 0.3) == discrete.get_season_for_cell(0, y, 0.3)


def test_initialize_emits_diagnostic(hemispheric, tracker):
    hemispheric.initialize()
    assert tracker.payloads('season_strategy_initialized') == [
        {'strategy': 'HEMISPHERIC', 'transition_mode': 'DISCRETIZED'}
    ]


def test_factory_resolves_strings(tracker):
    strategy = create_season_strategy("global_uniform", "SMOOTH", tracker)
    assert isinstance(strategy, GlobalUniformSeasonStrategy)
    assert strategy.transition_mode == TransitionMode.SMOOTH

    strategy = create_season_strategy("HEMISPHERIC", TransitionMode.DISCRETIZED, tracker, grid_height=10)
    assert isinstance(strategy, HemisphericSeasonStrategy)
    assert strategy.grid_height == 10


@pytest.mark.parametrize("strategy_type, mode", [("POLAR", "SMOOTH"), ("HEMISPHERIC", "JAGGED")])
def test_factory_rejects_unknown_names(tracker, strategy_type, mode):
    with pytest.raises(ConfigurationError):
        create_season_strategy(strategy_type, mode, tracker)


class TestSeasonManager:

    def test_construction_initializes_strategy(self, hemispheric, tracker):
        SeasonManager(hemispheric, tracker, TransitionMode.DISCRETIZED)
        assert tracker.labels() == ['season_strategy_initialized', 'season_manager_created']
        assert tracker.payloads('season_manager_created')[0]['strategy'] == 'HemisphericSeasonStrategy'

    def test_first_observation_never_fires(self, global_uniform, tracker):
        manager = SeasonManager(global_uniform, tracker)
        manager.get_season_for_cell(0, 0, 0.3)
        assert 'season_boundary_crossed' not in tracker.labels()
        assert manager.current_seasons == {Hemisphere.GLOBAL: DiscreteSeason.SPRING}

    def test_boundary_crossing_fires_once(self, global_uniform, tracker):
        manager = SeasonManager(global_uniform, tracker)
        manager.get_season_for_cell(0, 0, 0.2)
        manager.get_season_for_cell(0, 0, 0.3)
        manager.get_season_for_cell(0, 0, 0.35)

        crossings = tracker.payloads('season_boundary_crossed')
        assert len(crossings) == 1
        assert crossings[0]['hemisphere'] == 'global'
        assert crossings[0]['previous_season'] == 'WINTER'
        assert crossings[0]['new_season'] == 'SPRING'
        assert crossings[0]['year_progress'] == 0.3

    def test_boundary_crossing_is_logged(self, global_uniform, tracker, caplog):
        manager = SeasonManager(global_uniform, tracker)
        assert manager.logger.name == "world_simulator.environment.seasons"
        with caplog.at_level(logging.INFO, logger="world_simulator.environment.seasons"):
            manager.get_season_for_cell(0, 0, 0.2)
            manager.get_season_for_cell(0, 0, 0.3)
        assert "WINTER -> SPRING" in caplog.text

    def test_step_polls_both_hemispheres(self, hemispheric, tracker, time_keeper):
        manager = SeasonManager(hemispheric, tracker)
        manager.step(time_keeper, 60, 40)
        assert manager.current_seasons == {
            Hemisphere.NORTHERN: DiscreteSeason.WINTER,
            Hemisphere.SOUTHERN: DiscreteSeason.SUMMER,
        }

    def test_step_detects_world_wide_crossings(self, hemispheric, tracker, time_keeper):
        manager = SeasonManager(hemispheric, tracker)
        advance(time_keeper, 89)
        manager.step(time_keeper, 60, 40)
        assert tracker.payloads('season_boundary_crossed') == []

        time_keeper.tick()
        manager.step(time_keeper, 60, 40)
        crossings = {p['hemisphere']: p for p in tracker.payloads('season_boundary_crossed')}
        assert crossings['northern']['new_season'] == 'SPRING'
        assert crossings['southern']['new_season'] == 'WINTER'
        assert crossings['northern']['tick'] == 90

    def test_current_seasons_is_read_only(self, global_uniform, tracker):
        manager = SeasonManager(global_uniform, tracker)
        manager.get_season_for_cell(0, 0, 0.0)
        with pytest.raises(TypeError):
            manager.current_seasons[Hemisphere.GLOBAL] = DiscreteSeason.SUMMER

    def test_create_layer_context(self, hemispheric, tracker, time_keeper):
        manager = SeasonManager(hemispheric, tracker)
        context = manager.create_layer_context(time_keeper, 60, 40, 0.0, 30, 20)

        assert isinstance(context, LayerContext)
        assert context.time_keeper is time_keeper
        assert context.tracker is tracker
        assert (context.grid_width, context.grid_height) == (60, 40)
        assert context.seasonal_data == hemispheric.get_season_for_cell(30, 20, 0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.grid_width = 10
