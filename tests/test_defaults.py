import math

import pytest

from snow_core.defaults import default_horizons, get_defaults, get_global_defaults, load_defaults
from snow_core.inputs import build_globals, build_option, parse_float, parse_int
from snow_core.models import BillingMode, Category, ElectricOption, GasOption, ServiceOption


@pytest.fixture(scope="module")
def defaults():
    return load_defaults()


def test_load_defaults_structure(defaults):
    assert {"globals", "common", "electric", "gas", "service", "horizons"}.issubset(defaults.keys())
    assert default_horizons(defaults) == (2, 5, 10)


def test_load_defaults_returns_copies():
    data = load_defaults()
    data["globals"]["area"] = -1
    assert load_defaults()["globals"]["area"] == 2000


def test_get_defaults_merges_common_fields(defaults):
    electric = get_defaults(Category.ELECTRIC, defaults)
    assert electric["initial_cost"] == 0
    assert math.isclose(electric["battery_capacity_ah"], 7.5)
    assert get_defaults("GAS", defaults)["base_fuel_per_event"] == 0.75
    with pytest.raises(ValueError):
        get_defaults("diesel", defaults)


def test_missing_defaults_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_defaults(tmp_path / "nope.json")


@pytest.mark.parametrize("raw", [None, "", "  ", "abc", float("nan"), "inf", True])
def test_parse_float_falls_back(raw):
    assert parse_float(raw, 3.5) == 3.5


def test_parse_float_accepts_numbers():
    assert parse_float(" 12.5 ", 0.0) == 12.5
    assert parse_float(0, 7.0) == 0.0
    assert parse_float(-2, 7.0) == -2.0


def test_parse_int_truncates_and_bounds():
    assert parse_int("3.9", 1) == 3
    assert parse_int("x", 18) == 18
    assert parse_int("0", 3, minimum=1) == 3
    assert parse_int("0", 18, minimum=0) == 0


def test_build_globals_defaults(defaults):
    g = build_globals({}, defaults)
    d = get_global_defaults(defaults)
    assert g.area == d["area"]
    assert g.events_per_season == 18
    assert g.total_seasonal_snowfall == 100.0
    assert g.electricity_unit_cost == 0.25
    assert g.fuel_unit_cost == 3.53
    assert g.annual_inflation_rate == pytest.approx(0.05)


def test_build_globals_reads_percent(defaults):
    g = build_globals({"annual_inflation_pct": "2.5", "area": "", "events_per_season": "12"}, defaults)
    assert g.annual_inflation_rate == pytest.approx(0.025)
    assert g.area == 2000.0
    assert g.events_per_season == 12


def test_build_electric_with_blank_fields(defaults):
    opt = build_option("electric", {"name": "", "battery_voltage": "", "max_charge_cycles": "lots"}, 1, defaults)
    assert isinstance(opt, ElectricOption)
    assert opt.name == "Electric 2"
    assert opt.battery_capacity_ah == 7.5
    assert opt.battery_voltage == 56.0
    assert opt.base_charges_per_event == 1.0
    assert opt.max_charge_cycles == 1000
    assert opt.battery_calendar_life_years == 3
    assert opt.battery_replacement_cost == 500.0
    assert opt.label == "Electric 2 (electric)"


def test_build_gas(defaults):
    opt = build_option(Category.GAS, {"name": "Toro", "initial_cost": "899"}, 0, defaults)
    assert isinstance(opt, GasOption)
    assert opt.initial_cost == 899.0
    assert opt.base_fuel_per_event == 0.75


def test_build_service(defaults):
    opt = build_option("service", {"billing_mode": "Per-Event", "base_cost": "45",
                                   "annual_price_increase_pct": ""}, 0, defaults)
    assert isinstance(opt, ServiceOption)
    assert opt.billing_mode == BillingMode.PER_EVENT
    assert opt.base_cost == 45.0
    assert opt.annual_price_increase_rate == pytest.approx(0.05)
    assert opt.label == "Service 1 (service - per-event)"
    assert build_option("service", {}, 0, defaults).billing_mode == BillingMode.MONTHLY


def test_unknown_billing_mode_rejected(defaults):
    with pytest.raises(ValueError):
        build_option("service", {"billing_mode": "weekly"}, 0, defaults)
