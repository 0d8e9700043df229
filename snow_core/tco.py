from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import logging

import pandas as pd

from .battery import WearState
from .cashflows import annual_cost_row
from .models import Category, GlobalAssumptions, Option, Projection
from .usage import usage_scale

logger = logging.getLogger(__name__)


def _resolve_scale(globals_: GlobalAssumptions, scale_factor: Optional[float]) -> float:
    if scale_factor is None:
        return usage_scale(globals_).scale_factor
    return float(scale_factor)


def _annual_rows(
    option: Option,
    globals_: GlobalAssumptions,
    years: int,
    scale_factor: float,
) -> List[Dict[str, float]]:
    # fresh wear state for every run: horizons never continue one another
    wear = WearState() if option.category == Category.ELECTRIC else None
    rows = []
    for t in range(1, int(years) + 1):
        row = annual_cost_row(option, t, globals_, scale_factor, wear)
        row["year"] = t
        row["replaced"] = wear is not None and wear.years_since_replacement == 0
        rows.append(row)
    return rows


def project(
    option: Option,
    globals_: GlobalAssumptions,
    years: int,
    scale_factor: Optional[float] = None,
) -> float:
    """
    Nominal TCO over ``years`` (no discounting):
    initial cost + Σ operating + Σ maintenance + Σ replacement.
    ``scale_factor`` defaults to the one derived from ``globals_``.
    """
    scale = _resolve_scale(globals_, scale_factor)
    rows = _annual_rows(option, globals_, years, scale)
    total = float(option.initial_cost) + sum(r["total"] for r in rows)
    logger.debug("%s over %d year(s): %.2f", option.label, years, total)
    return total


def project_detailed(
    option: Option,
    globals_: GlobalAssumptions,
    years: int,
    scale_factor: Optional[float] = None,
) -> Projection:
    """Same total as :func:`project`, with the year-by-year table behind it."""
    scale = _resolve_scale(globals_, scale_factor)
    rows = _annual_rows(option, globals_, years, scale)

    operating = sum(r["operating"] for r in rows)
    maintenance = sum(r["maintenance"] for r in rows)
    replacement = sum(r["replacement"] for r in rows)
    total = float(option.initial_cost) + operating + maintenance + replacement

    df = pd.DataFrame(
        [{
            "Year": r["year"],
            "Inflation factor": r["inflation"],
            "Operating": r["operating"],
            "Maintenance": r["maintenance"],
            "Replacement": r["replacement"],
            "Annual total": r["total"],
        } for r in rows],
        columns=["Year", "Inflation factor", "Operating", "Maintenance", "Replacement", "Annual total"],
    )
    df["Cumulative"] = df["Annual total"].cumsum() + float(option.initial_cost)
    df.attrs["initial_cost"] = float(option.initial_cost)
    df.attrs["category"] = option.category.value

    return Projection(
        option=option,
        years=int(years),
        total=total,
        operating=operating,
        maintenance=maintenance,
        replacement=replacement,
        replacement_years=[r["year"] for r in rows if r["replaced"]],
        annual_table=df,
    )


def project_all(options: Iterable[Option], globals_: GlobalAssumptions, years: int) -> Dict[str, Projection]:
    """
    Detailed projections keyed by display label, in input order.
    Repeated labels get a " #n" suffix (n = 1-based position in ``options``).
    """
    scale = usage_scale(globals_).scale_factor
    out: Dict[str, Projection] = {}
    for i, opt in enumerate(options):
        key, n = opt.label, i + 1
        while key in out:
            key = f"{opt.label} #{n}"
            n += 1
        out[key] = project_detailed(opt, globals_, years, scale)
    return out
