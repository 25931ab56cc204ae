# simulate.py

"""
================================================================================
HEADLESS SIMULATION RUNNER
================================================================================
This script is a command-line tool for running a world's environmental
simulation without any front-end. It advances the world a given number of
ticks and logs a summary of the resulting readings.

Usage:
    python simulate.py --config path/to/your/config.json --ticks 720
================================================================================
"""
import sys
import logging
import argparse
import time
from tqdm import tqdm

from world_simulator.errors import WorldSimulatorError
from world_simulator.runtime.world import World
from world_simulator.tracking import SimulationTracker

DEFAULT_TICKS = 360


def run_simulation(config_path: str | None, ticks: int, log_level: str = "INFO") -> World | None:
    """
    Builds a world from a configuration file (or the defaults), advances it
    `ticks` times and logs the final readings.
    """
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Simulator")

    # 2. --- Build the World ---
    tracker = SimulationTracker()
    try:
        if config_path:
            logger.info(f"Loading configuration from: {config_path}")
            world = World.from_config_file(config_path, tracker=tracker)
        else:
            logger.info("No configuration given, using built-in defaults.")
            world = World(tracker=tracker)
    except (FileNotFoundError, WorldSimulatorError) as e:
        logger.critical(f"Failed to build world: {e}")
        return None

    # 3. --- Main Simulation Loop ---
    logger.info(f"Running {ticks} ticks from {world.get_time_string()}...")
    start_time = time.perf_counter()
    last_step = start_time
    for _ in tqdm(range(ticks), desc="Simulating", unit="tick"):
        now = time.perf_counter()
        world.step(now - last_step)
        last_step = now
    world.flush()
    end_time = time.perf_counter()

    # --- Finalization ---
    logger.info(f"Simulation complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"Simulated date: {world.get_time_string()}")
    for hemisphere, season in world.get_current_seasons().items():
        logger.info(f"  - {hemisphere.capitalize()} hemisphere: {season}")
    logger.info("--- Layer Readings ---")
    for layer_name, stats in world.summarize_layers().items():
        logger.info(
            f"  - {layer_name.capitalize()}: min {stats['min']:.3f}, "
            f"mean {stats['mean']:.3f}, max {stats['max']:.3f}"
        )
    return world


# --- Command-Line Interface ---
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Headless runner for the seasonal world environment simulation.")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the JSON configuration file for the world. Defaults are used if omitted."
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=DEFAULT_TICKS,
        help=f"Number of ticks to simulate (default: {DEFAULT_TICKS})."
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level, e.g. DEBUG to see tracker events."
    )
    args = parser.parse_args()

    if run_simulation(args.config, args.ticks, args.log_level) is None:
        sys.exit(1)
