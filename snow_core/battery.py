from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class WearState:
    """Battery wear since the last replacement, scoped to one projection run."""
    cycles_accumulated: float = 0.0
    years_since_replacement: int = 0

    def reset(self) -> None:
        self.cycles_accumulated = 0.0
        self.years_since_replacement = 0


def advance_wear(
    wear: WearState,
    cycles_this_year: float,
    max_charge_cycles: int,
    calendar_life_years: int,
) -> bool:
    """
    Age the battery set by one season.
    Returns True when either the calendar limit or the cycle limit is reached;
    the state is then reset to zero (leftover cycles are not carried over).
    """
    wear.years_since_replacement += 1
    wear.cycles_accumulated += float(cycles_this_year)

    by_calendar = wear.years_since_replacement >= calendar_life_years
    by_cycles = wear.cycles_accumulated >= max_charge_cycles
    if not (by_calendar or by_cycles):
        return False

    logger.debug(
        "Battery replacement after %d year(s), %.1f cycles (calendar=%s, cycles=%s)",
        wear.years_since_replacement, wear.cycles_accumulated, by_calendar, by_cycles,
    )
    wear.reset()
    return True
