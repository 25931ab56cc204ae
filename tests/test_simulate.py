import json

from simulate import run_simulation


def test_runs_default_world():
    world = run_simulation(None, ticks=10, log_level="WARNING")
    assert world is not None
    assert world.time_keeper.get_ticks() == 10


def test_runs_world_from_config(tmp_path):
    config_path = tmp_path / "world.json"
    config_path.write_text(json.dumps({
        'ticks_per_year': 12,
        'width': 8,
        'height': 8,
        'season_strategy': 'GLOBAL_UNIFORM',
    }))

    world = run_simulation(str(config_path), ticks=12, log_level="WARNING")
    assert world.time_keeper.get_total_years() == 1


def test_bad_config_returns_none(tmp_path):
    config_path = tmp_path / "world.json"
    config_path.write_text(json.dumps({'season_strategy': 'TIDAL'}))
    assert run_simulation(str(config_path), ticks=1, log_level="WARNING") is None


def test_malformed_active_cell_returns_none(tmp_path):
    config_path = tmp_path / "world.json"
    config_path.write_text(json.dumps({'active_cells': [[1, 2, 3]]}))
    assert run_simulation(str(config_path), ticks=1, log_level="WARNING") is None
