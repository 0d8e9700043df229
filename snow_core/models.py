from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd


class Category(Enum):
    ELECTRIC = "electric"
    GAS = "gas"
    SERVICE = "service"


class BillingMode(Enum):
    MONTHLY = "monthly"
    PER_EVENT = "per-event"


@dataclass(frozen=True)
class GlobalAssumptions:
    area: float                     # serviced surface (sq ft)
    events_per_season: int          # removal events per year
    total_seasonal_snowfall: float  # inches per season
    electricity_unit_cost: float    # $/kWh
    fuel_unit_cost: float           # $/gal
    annual_inflation_rate: float    # decimal, e.g. 0.05


@dataclass(frozen=True)
class ElectricOption:
    name: str
    initial_cost: float
    annual_maintenance: float
    battery_capacity_ah: float
    battery_voltage: float
    base_charges_per_event: float   # at the 6.5 in reference snowfall
    max_charge_cycles: int
    battery_calendar_life_years: int
    battery_replacement_cost: float  # whole two-battery set

    category = Category.ELECTRIC

    @property
    def label(self) -> str:
        return f"{self.name} ({self.category.value})"


@dataclass(frozen=True)
class GasOption:
    name: str
    initial_cost: float
    annual_maintenance: float
    base_fuel_per_event: float      # gal, at the 6.5 in reference snowfall

    category = Category.GAS

    @property
    def label(self) -> str:
        return f"{self.name} ({self.category.value})"


@dataclass(frozen=True)
class ServiceOption:
    name: str
    initial_cost: float
    annual_maintenance: float
    billing_mode: BillingMode
    base_cost: float                # $/month or $/event depending on billing_mode
    annual_price_increase_rate: float  # decimal, compounds on top of inflation

    category = Category.SERVICE

    @property
    def label(self) -> str:
        return f"{self.name} ({self.category.value} - {self.billing_mode.value})"


Option = Union[ElectricOption, GasOption, ServiceOption]


@dataclass(frozen=True)
class UsageScale:
    depth_per_event_in: float
    tons_per_event: float
    base_tons_per_event: float
    scale_factor: float


@dataclass
class Projection:
    option: Option
    years: int
    total: float
    operating: float
    maintenance: float
    replacement: float
    replacement_years: List[int]
    annual_table: pd.DataFrame


@dataclass
class ComparisonRow:
    option: Option
    totals: Dict[int, float]        # horizon (years) -> rounded total ($)
    is_min: Dict[int, bool]

    @property
    def label(self) -> str:
        return self.option.label


@dataclass
class Comparison:
    horizons: Tuple[int, ...]
    rows: List[ComparisonRow] = field(default_factory=list)
    minimums: Dict[int, float] = field(default_factory=dict)
    usage: Optional[UsageScale] = None
    message: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_frame(self) -> pd.DataFrame:
        """One row per option, one cost column and one ``min`` flag column per horizon."""
        records = []
        for row in self.rows:
            rec = {"Option": row.label}
            for h in self.horizons:
                rec[horizon_label(h)] = row.totals[h]
            for h in self.horizons:
                rec[f"{horizon_label(h)} min"] = row.is_min[h]
            records.append(rec)
        columns = ["Option"] + [horizon_label(h) for h in self.horizons] \
            + [f"{horizon_label(h)} min" for h in self.horizons]
        return pd.DataFrame(records, columns=columns)


_HORIZON_NAMES = {2: "Short", 5: "Medium", 10: "Long"}


def horizon_label(years: int) -> str:
    name = _HORIZON_NAMES.get(years)
    return f"{name} ({years}y)" if name else f"{years}y"
