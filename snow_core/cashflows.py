# snow_core/cashflows.py
from __future__ import annotations
from typing import Dict, Optional

from .battery import WearState, advance_wear
from .models import (
    BillingMode,
    Category,
    ElectricOption,
    GasOption,
    GlobalAssumptions,
    Option,
    ServiceOption,
)

REFERENCE_AREA_SQFT = 2000.0
MONTHS_PER_YEAR = 12
BATTERIES_PER_PACK = 2


# ---------- helpers ----------

def inflation_factor(rate: float, year_index_1based: int) -> float:
    """(1+r)^(t-1): year 1 is not compounded."""
    return (1.0 + float(rate)) ** (year_index_1based - 1)


def battery_capacity_kwh(capacity_ah: float, voltage: float) -> float:
    """Energy of the full pack: 2 batteries × Ah × V / 1000."""
    return BATTERIES_PER_PACK * float(capacity_ah) * float(voltage) / 1000.0


# ---------- OPERATING COST PER CATEGORY ----------

def annual_cost_electric(
    option: ElectricOption,
    globals_: GlobalAssumptions,
    scale_factor: float,
    year_index_1based: int,
    wear: WearState,
) -> Dict[str, float]:
    """
    Electricity for every charge of the season, plus the battery set when the
    wear limits are reached this year. Mutates ``wear``.
    """
    infl = inflation_factor(globals_.annual_inflation_rate, year_index_1based)
    charges_per_event = float(option.base_charges_per_event) * scale_factor
    energy_per_event = charges_per_event * battery_capacity_kwh(option.battery_capacity_ah, option.battery_voltage)
    operating = globals_.events_per_season * energy_per_event * globals_.electricity_unit_cost * infl

    replaced = advance_wear(
        wear,
        cycles_this_year=globals_.events_per_season * charges_per_event,
        max_charge_cycles=option.max_charge_cycles,
        calendar_life_years=option.battery_calendar_life_years,
    )
    replacement = float(option.battery_replacement_cost) * infl if replaced else 0.0
    return {"operating": operating, "replacement": replacement}


def annual_cost_gas(
    option: GasOption,
    globals_: GlobalAssumptions,
    scale_factor: float,
    year_index_1based: int,
) -> Dict[str, float]:
    infl = inflation_factor(globals_.annual_inflation_rate, year_index_1based)
    fuel_per_event = float(option.base_fuel_per_event) * scale_factor
    operating = globals_.events_per_season * fuel_per_event * globals_.fuel_unit_cost * infl
    return {"operating": operating, "replacement": 0.0}


def annual_cost_service(
    option: ServiceOption,
    globals_: GlobalAssumptions,
    year_index_1based: int,
) -> Dict[str, float]:
    """
    Contract price for the season, scaled by area (not by snowfall).
    The contract's own price increase and the general inflation both compound.
    """
    if option.billing_mode == BillingMode.MONTHLY:
        year_cost = float(option.base_cost) * MONTHS_PER_YEAR
    else:
        year_cost = float(option.base_cost) * globals_.events_per_season
    year_cost *= float(globals_.area) / REFERENCE_AREA_SQFT

    price_factor = inflation_factor(option.annual_price_increase_rate, year_index_1based)
    infl = inflation_factor(globals_.annual_inflation_rate, year_index_1based)
    return {"operating": year_cost * price_factor * infl, "replacement": 0.0}


# ---------- ANNUAL ROW ----------

def annual_cost_row(
    option: Option,
    year_index_1based: int,
    globals_: GlobalAssumptions,
    scale_factor: float,
    wear: Optional[WearState] = None,
) -> Dict[str, float]:
    """
    Costs of year t (1..years) for one option:
      inflation, operating, maintenance, replacement, total
    ``wear`` is required for electric options and is updated in place.
    """
    t = year_index_1based
    infl = inflation_factor(globals_.annual_inflation_rate, t)

    if option.category == Category.ELECTRIC:
        if wear is None:
            raise ValueError("Electric options need a WearState to project battery replacements")
        costs = annual_cost_electric(option, globals_, scale_factor, t, wear)
    elif option.category == Category.GAS:
        costs = annual_cost_gas(option, globals_, scale_factor, t)
    elif option.category == Category.SERVICE:
        costs = annual_cost_service(option, globals_, t)
    else:
        raise TypeError(f"Unsupported option type: {type(option).__name__}")

    maintenance = float(option.annual_maintenance) * infl
    total = costs["operating"] + maintenance + costs["replacement"]

    return {
        "inflation":   infl,
        "operating":   costs["operating"],
        "maintenance": maintenance,
        "replacement": costs["replacement"],
        "total":       total,
    }
