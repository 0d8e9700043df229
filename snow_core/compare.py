"""Rank options by nominal TCO over several horizons."""
from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import Comparison, ComparisonRow, GlobalAssumptions, Option
from .tco import project
from .usage import usage_scale

logger = logging.getLogger(__name__)

DEFAULT_HORIZONS: Tuple[int, ...] = (2, 5, 10)
NO_OPTIONS_MESSAGE = "Add at least one option."


def round_currency(value: float) -> float:
    """Whole dollars, halves rounded up."""
    return float(math.floor(float(value) + 0.5))


def _normalize_horizons(horizons: Iterable[int]) -> Tuple[int, ...]:
    out: List[int] = []
    for h in horizons:
        h = int(h)
        if h < 0:
            raise ValueError(f"Horizon must be a number of years >= 0, got {h}")
        if h not in out:
            out.append(h)
    if not out:
        return DEFAULT_HORIZONS
    return tuple(out)


def compare(
    options: Sequence[Option],
    globals_: GlobalAssumptions,
    horizons: Iterable[int] = DEFAULT_HORIZONS,
) -> Comparison:
    """
    Project every option over every horizon (each one an independent run)
    and flag, per horizon, the options whose rounded total is the minimum.
    Rows are sorted by the total at the shortest horizon; ties keep the
    input order.
    """
    hs = _normalize_horizons(horizons)
    usage = usage_scale(globals_)

    if not options:
        return Comparison(horizons=hs, usage=usage, message=NO_OPTIONS_MESSAGE)

    totals: List[Dict[int, float]] = [
        {h: round_currency(project(opt, globals_, h, usage.scale_factor)) for h in hs}
        for opt in options
    ]
    minimums = {h: min(t[h] for t in totals) for h in hs}

    rows = [
        ComparisonRow(
            option=opt,
            totals=t,
            is_min={h: t[h] == minimums[h] for h in hs},
        )
        for opt, t in zip(options, totals)
    ]
    shortest = min(hs)
    rows.sort(key=lambda r: r.totals[shortest])

    logger.debug(
        "Compared %d option(s) over %s; cheapest at %dy: %s",
        len(rows), hs, shortest, rows[0].label,
    )
    return Comparison(horizons=hs, rows=rows, minimums=minimums, usage=usage)
