# snow_core/usage.py
"""
Snowfall severity → dimensionless usage scale factor.

Per-event consumption figures (battery charges, gallons) are entered for a
reference storm of 6.5 in. The factor is the ratio between the snow mass of
an average event at the site and the mass of that reference event on the
same area, so the area cancels out.
"""
from __future__ import annotations

import logging

from .models import GlobalAssumptions, UsageScale

logger = logging.getLogger(__name__)

REFERENCE_DEPTH_IN = 6.5
SNOW_DENSITY_LB_PER_FT3 = 12.0   # fresh snow
LB_PER_TON = 2000.0
IN_PER_FT = 12.0


def tons_per_event(area_sqft: float, depth_in: float) -> float:
    """Snow mass (short tons) covering ``area_sqft`` at ``depth_in`` inches."""
    volume_ft3 = float(area_sqft) * (float(depth_in) / IN_PER_FT)
    return volume_ft3 * SNOW_DENSITY_LB_PER_FT3 / LB_PER_TON


def depth_per_event(globals_: GlobalAssumptions) -> float:
    """Average snow depth (in) per removal event; 0 when there are no events."""
    if globals_.events_per_season <= 0:
        return 0.0
    return float(globals_.total_seasonal_snowfall) / globals_.events_per_season


def estimate_seasonal_load(globals_: GlobalAssumptions) -> float:
    """Tons of snow moved per event at the site."""
    return tons_per_event(globals_.area, depth_per_event(globals_))


def usage_scale(globals_: GlobalAssumptions) -> UsageScale:
    depth = depth_per_event(globals_)
    tons = tons_per_event(globals_.area, depth)
    base = tons_per_event(globals_.area, REFERENCE_DEPTH_IN)
    if base <= 0:
        logger.debug("Reference load is %s t for area %s; using scale factor 1", base, globals_.area)
        factor = 1.0
    else:
        factor = tons / base
    return UsageScale(
        depth_per_event_in=depth,
        tons_per_event=tons,
        base_tons_per_event=base,
        scale_factor=factor,
    )
