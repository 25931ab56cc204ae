# world_simulator/runtime/time_keeper.py

"""
================================================================================
SEQUENTIAL TIME KEEPER
================================================================================
This module provides a self-contained, data-only class for tracking simulated
time as a count of discrete ticks. It is the sole authority over simulated
time: every other component reads from it and none of them write to it.

Data Contract:
---------------
- Inputs (on initialization):
    - ticks_per_year (int): The number of ticks in one simulated year (> 0).
    - initial_ticks (int): The tick count to start from (>= 0).
- Public Methods:
    - tick(): Advances the clock by exactly one tick.
    - get_ticks(), get_year_progress(), get_total_years(),
      get_ticks_per_year(): Read-only accessors.
    - get_time_string(): Returns a formatted string of the current time.
- Side Effects: None.
- Invariants: Year progress and total years are derived from the tick count
  on every call, so they can never drift from it.
================================================================================
"""
from ..errors import ConfigurationError


class SequentialTimeKeeper:
    """Manages the passage of simulated time, one tick at a time."""

    def __init__(self, ticks_per_year: int, initial_ticks: int = 0):
        ticks_per_year = self._as_whole_number(ticks_per_year, "ticks_per_year")
        initial_ticks = self._as_whole_number(initial_ticks, "initial_ticks")
        if ticks_per_year <= 0:
            raise ConfigurationError(f"ticks_per_year must be positive, got {ticks_per_year}")
        if initial_ticks < 0:
            raise ConfigurationError(f"initial_ticks must not be negative, got {initial_ticks}")

        self._ticks_per_year = ticks_per_year
        self._ticks = initial_ticks

    @staticmethod
    def _as_whole_number(value, name: str) -> int:
        try:
            whole = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{name} must be a whole number, got {value!r}") from e
        if whole != value:
            raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
        return whole

    def tick(self) -> None:
        self._ticks += 1

    def get_ticks(self) -> int:
        return self._ticks

    def get_year_progress(self) -> float:
        """Returns the normalized position within the current year, in [0, 1)."""
        return (self._ticks % self._ticks_per_year) / self._ticks_per_year

    def get_total_years(self) -> int:
        """Returns the count of full years passed."""
        return self._ticks // self._ticks_per_year

    def get_ticks_per_year(self) -> int:
        return self._ticks_per_year

    def get_day_of_year(self) -> int:
        """Returns the 1-based tick within the current year."""
        return (self._ticks % self._ticks_per_year) + 1

    def get_time_string(self) -> str:
        """Returns a formatted string of the current simulated date."""
        return f"Year {self.get_total_years() + 1}, Day {self.get_day_of_year()}"
