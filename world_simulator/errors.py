# world_simulator/errors.py

"""Exceptions raised by the world simulator core."""


class WorldSimulatorError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(WorldSimulatorError, ValueError):
    """
    Raised when the simulation cannot be built from the supplied configuration,
    e.g. an unknown layer or season strategy type. Fatal to construction.
    """


class OutOfBoundsError(WorldSimulatorError, IndexError):
    """Raised when a grid write falls outside the declared world bounds."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Coordinates out of bounds: ({x}, {y}) for a {width}x{height} grid")
        self.x = x
        self.y = y
