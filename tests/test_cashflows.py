# tests/test_cashflows.py
import pytest

from snow_core.battery import WearState
from snow_core.cashflows import (
    annual_cost_electric,
    annual_cost_gas,
    annual_cost_row,
    annual_cost_service,
    battery_capacity_kwh,
    inflation_factor,
)
from snow_core.models import BillingMode, ElectricOption, GasOption, GlobalAssumptions, ServiceOption


def _globals(area=2000.0, inflation=0.05):
    return GlobalAssumptions(
        area=area,
        events_per_season=18,
        total_seasonal_snowfall=117.0,
        electricity_unit_cost=0.25,
        fuel_unit_cost=3.53,
        annual_inflation_rate=inflation,
    )


def _electric(maint=0.0):
    return ElectricOption(
        name="E", initial_cost=0.0, annual_maintenance=maint,
        battery_capacity_ah=7.5, battery_voltage=56.0, base_charges_per_event=1.0,
        max_charge_cycles=1000, battery_calendar_life_years=3, battery_replacement_cost=500.0,
    )


def _service(mode, cost):
    return ServiceOption(
        name="S", initial_cost=0.0, annual_maintenance=0.0,
        billing_mode=mode, base_cost=cost, annual_price_increase_rate=0.05,
    )


def test_inflation_factor_year_one_not_compounded():
    assert inflation_factor(0.05, 1) == 1.0
    assert inflation_factor(0.05, 3) == pytest.approx(1.1025)
    assert inflation_factor(0.0, 10) == 1.0


def test_battery_capacity_two_battery_pack():
    # 2 × 7.5 Ah × 56 V / 1000 = 0.84 kWh
    assert abs(battery_capacity_kwh(7.5, 56.0) - 0.84) < 1e-12


def test_electric_operating_cost():
    # 18 events × 1 charge × 0.84 kWh × 0.25 $/kWh = 3.78 $ ; year 2: × 1.05
    wear = WearState()
    y1 = annual_cost_electric(_electric(), _globals(), 1.0, 1, wear)
    y2 = annual_cost_electric(_electric(), _globals(), 1.0, 2, wear)
    assert y1["operating"] == pytest.approx(3.78)
    assert y2["operating"] == pytest.approx(3.78 * 1.05)
    assert y1["replacement"] == 0.0 and y2["replacement"] == 0.0


def test_electric_scale_factor_scales_charges_and_cycles():
    wear = WearState()
    costs = annual_cost_electric(_electric(), _globals(), 2.0, 1, wear)
    assert costs["operating"] == pytest.approx(7.56)
    assert wear.cycles_accumulated == pytest.approx(36.0)


def test_electric_replacement_is_inflated():
    # replacement in year 3 (calendar life), 500 × 1.05²
    wear = WearState(cycles_accumulated=36.0, years_since_replacement=2)
    costs = annual_cost_electric(_electric(), _globals(), 1.0, 3, wear)
    assert costs["replacement"] == pytest.approx(500.0 * 1.1025)
    assert wear.years_since_replacement == 0
    assert wear.cycles_accumulated == 0.0


def test_gas_operating_cost():
    # 18 × 0.75 gal × 3.53 $/gal = 47.655 $
    gas = GasOption(name="G", initial_cost=0.0, annual_maintenance=0.0, base_fuel_per_event=0.75)
    assert annual_cost_gas(gas, _globals(), 1.0, 1)["operating"] == pytest.approx(47.655)
    assert annual_cost_gas(gas, _globals(), 0.5, 1)["operating"] == pytest.approx(47.655 / 2)


def test_service_monthly_area_and_double_compounding():
    # 100 $/month × 12 = 1200 ; area 4000 / 2000 -> 2400 ; year 3: × 1.05² (price) × 1.05² (inflation)
    s = _service(BillingMode.MONTHLY, 100.0)
    assert annual_cost_service(s, _globals(area=4000.0), 1)["operating"] == pytest.approx(2400.0)
    assert annual_cost_service(s, _globals(area=4000.0), 3)["operating"] == pytest.approx(2400.0 * 1.1025 * 1.1025)


def test_service_per_event():
    # 50 $ × 18 events = 900 $
    s = _service(BillingMode.PER_EVENT, 50.0)
    assert annual_cost_service(s, _globals(), 1)["operating"] == pytest.approx(900.0)


def test_service_ignores_usage_scale():
    s = _service(BillingMode.PER_EVENT, 50.0)
    a = annual_cost_row(s, 1, _globals(), 1.0)
    b = annual_cost_row(s, 1, _globals(), 3.0)
    assert a == b


def test_row_includes_inflated_maintenance():
    row = annual_cost_row(_electric(maint=100.0), 2, _globals(), 1.0, WearState())
    assert row["maintenance"] == pytest.approx(105.0)
    assert row["inflation"] == pytest.approx(1.05)
    assert row["total"] == pytest.approx(row["operating"] + row["maintenance"] + row["replacement"])


def test_row_electric_requires_wear_state():
    with pytest.raises(ValueError):
        annual_cost_row(_electric(), 1, _globals(), 1.0)
