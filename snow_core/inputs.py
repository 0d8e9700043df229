"""
Tolerant conversion of raw form values into model records.

Blank, missing or non-numeric fields fall back to the bundled defaults
instead of failing; the engine always gets a complete record.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional

from .defaults import get_defaults, get_global_defaults
from .models import (
    BillingMode,
    Category,
    ElectricOption,
    GasOption,
    GlobalAssumptions,
    Option,
    ServiceOption,
)

logger = logging.getLogger(__name__)

_BILLING_ALIASES = {
    "monthly": BillingMode.MONTHLY,
    "per-event": BillingMode.PER_EVENT,
    "per_event": BillingMode.PER_EVENT,
    "perevent": BillingMode.PER_EVENT,
}


def parse_float(raw: Any, default: float, field: str = "") -> float:
    if isinstance(raw, bool):
        raw = None
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        logger.debug("Invalid value %r for %s, using default %s", raw, field or "field", default)
        return float(default)
    return value


def parse_int(raw: Any, default: int, field: str = "", minimum: Optional[int] = None) -> int:
    """Integer part of a numeric value (``"3.9"`` -> 3); default when invalid or below ``minimum``."""
    value = parse_float(raw, math.nan, field)
    if math.isnan(value):
        return int(default)
    value = int(value)
    if minimum is not None and value < minimum:
        logger.debug("Value %r for %s is below %d, using default %s", raw, field or "field", minimum, default)
        return int(default)
    return value


def parse_billing_mode(raw: Any, default: BillingMode | str = BillingMode.MONTHLY) -> BillingMode:
    if isinstance(raw, BillingMode):
        return raw
    if raw is None or str(raw).strip() == "":
        return parse_billing_mode(default)
    try:
        return _BILLING_ALIASES[str(raw).strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown billing mode '{raw}' (expected monthly or per-event)") from None


def build_globals(raw: Mapping[str, Any] | None = None, defaults: Dict[str, Any] | None = None) -> GlobalAssumptions:
    """
    Global assumptions from a raw mapping. The inflation rate is read as a
    percentage (``annual_inflation_pct``, 5 -> 0.05).
    """
    raw = raw or {}
    d = get_global_defaults(defaults)
    return GlobalAssumptions(
        area=parse_float(raw.get("area"), d["area"], "area"),
        events_per_season=parse_int(raw.get("events_per_season"), d["events_per_season"],
                                    "events_per_season", minimum=0),
        total_seasonal_snowfall=parse_float(raw.get("total_seasonal_snowfall"), d["total_seasonal_snowfall"],
                                            "total_seasonal_snowfall"),
        electricity_unit_cost=parse_float(raw.get("electricity_unit_cost"), d["electricity_unit_cost"],
                                          "electricity_unit_cost"),
        fuel_unit_cost=parse_float(raw.get("fuel_unit_cost"), d["fuel_unit_cost"], "fuel_unit_cost"),
        annual_inflation_rate=parse_float(raw.get("annual_inflation_pct"), d["annual_inflation_pct"],
                                          "annual_inflation_pct") / 100.0,
    )


def default_name(category: Category, index: int) -> str:
    """``Electric 1``, ``Gas 2``... (index is 0-based)."""
    return f"{category.value.capitalize()} {index + 1}"


def build_option(
    category: Category | str,
    raw: Mapping[str, Any] | None = None,
    index: int = 0,
    defaults: Dict[str, Any] | None = None,
) -> Option:
    """Build the option record of ``category`` from raw form values."""
    if not isinstance(category, Category):
        category = Category(str(category).strip().lower())
    raw = raw or {}
    d = get_defaults(category, defaults)

    name = str(raw.get("name") or "").strip() or default_name(category, index)
    initial_cost = parse_float(raw.get("initial_cost"), d["initial_cost"], "initial_cost")
    annual_maintenance = parse_float(raw.get("annual_maintenance"), d["annual_maintenance"], "annual_maintenance")

    if category == Category.ELECTRIC:
        return ElectricOption(
            name=name,
            initial_cost=initial_cost,
            annual_maintenance=annual_maintenance,
            battery_capacity_ah=parse_float(raw.get("battery_capacity_ah"), d["battery_capacity_ah"],
                                            "battery_capacity_ah"),
            battery_voltage=parse_float(raw.get("battery_voltage"), d["battery_voltage"], "battery_voltage"),
            base_charges_per_event=parse_float(raw.get("base_charges_per_event"), d["base_charges_per_event"],
                                               "base_charges_per_event"),
            max_charge_cycles=parse_int(raw.get("max_charge_cycles"), d["max_charge_cycles"],
                                        "max_charge_cycles", minimum=1),
            battery_calendar_life_years=parse_int(raw.get("battery_calendar_life_years"),
                                                  d["battery_calendar_life_years"],
                                                  "battery_calendar_life_years", minimum=1),
            battery_replacement_cost=parse_float(raw.get("battery_replacement_cost"),
                                                 d["battery_replacement_cost"], "battery_replacement_cost"),
        )

    if category == Category.GAS:
        return GasOption(
            name=name,
            initial_cost=initial_cost,
            annual_maintenance=annual_maintenance,
            base_fuel_per_event=parse_float(raw.get("base_fuel_per_event"), d["base_fuel_per_event"],
                                            "base_fuel_per_event"),
        )

    return ServiceOption(
        name=name,
        initial_cost=initial_cost,
        annual_maintenance=annual_maintenance,
        billing_mode=parse_billing_mode(raw.get("billing_mode"), d["billing_mode"]),
        base_cost=parse_float(raw.get("base_cost"), d["base_cost"], "base_cost"),
        annual_price_increase_rate=parse_float(raw.get("annual_price_increase_pct"),
                                               d["annual_price_increase_pct"],
                                               "annual_price_increase_pct") / 100.0,
    )
