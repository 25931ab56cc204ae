# world_simulator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the world
simulator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary to the World instance.
================================================================================
"""

# --- Time ---
# One tick is one simulated day; a 360-day year keeps the quarters whole.
DEFAULT_TICKS_PER_YEAR = 360
DEFAULT_INITIAL_TICKS = 0

# --- World Bounds (in cells) ---
DEFAULT_WORLD_WIDTH = 60
DEFAULT_WORLD_HEIGHT = 40

# --- Seasons ---
# Strategy selector: 'HEMISPHERIC' or 'GLOBAL_UNIFORM'.
DEFAULT_SEASON_STRATEGY = 'HEMISPHERIC'
# Transition mode: 'SMOOTH' or 'DISCRETIZED'.
DEFAULT_TRANSITION_MODE = 'DISCRETIZED'

# The grid height assumed by the hemispheric strategy when the caller does
# not supply one.
HEMISPHERIC_DEFAULT_GRID_HEIGHT = 40

# Rows on either side of the vertical midpoint that still report the
# northern hemisphere.
EQUATORIAL_BAND_ROWS = 2

# Season boundaries as fractions of the year, and the half-width of the
# zone around each one in which the transition phase is non-zero.
SEASON_BOUNDARIES = (0.0, 0.25, 0.5, 0.75)
SEASON_TRANSITION_ZONE_WIDTH = 0.05

# --- Environment Layers ---
# Each entry is {'type': <layer type>, 'params': {...}}.
DEFAULT_LAYERS = [
    {'type': 'temperature', 'params': {'base_temperature': 20.0}},
    {'type': 'humidity', 'params': {'base_humidity': 0.5}},
    {'type': 'luminosity', 'params': {}},
]

# --- Temperature Layer (Celsius) ---
DEFAULT_BASE_TEMPERATURE_C = 20.0
# Swing applied by the signed seasonal factor [-1, 1].
TEMPERATURE_SEASONAL_AMPLITUDE_C = 10.0
# Bonus applied at the equator, falling to zero at the assumed poles.
TEMPERATURE_LATITUDINAL_AMPLITUDE_C = 5.0
# The temperature layer uses a fixed equator row and half-height rather than
# the actual grid dimensions.
ASSUMED_EQUATOR_Y = 20
ASSUMED_EQUATOR_HALF_HEIGHT = 20

# --- Humidity Layer (normalized 0.0 to 1.0) ---
DEFAULT_BASE_HUMIDITY = 0.5
HUMIDITY_SEASONAL_AMPLITUDE = 0.2

# --- Diagnostics ---
# Debounced tracker events are coalesced over this many seconds.
TRACKER_DEBOUNCE_SECONDS = 1.0
