from snow_core.battery import WearState, advance_wear


def test_calendar_limit_triggers_before_cycles():
    # 18 cycles/year, 1000 cycles max, 3-year calendar life -> years 3, 6, 9
    wear = WearState()
    replaced = [y for y in range(1, 11) if advance_wear(wear, 18.0, 1000, 3)]
    assert replaced == [3, 6, 9]
    assert wear.years_since_replacement == 1
    assert wear.cycles_accumulated == 18.0


def test_cycle_limit_triggers_before_calendar():
    # 18 cycles/year, 30 cycles max: 36 >= 30 in year 2, reset, again in year 4
    wear = WearState()
    replaced = [y for y in range(1, 6) if advance_wear(wear, 18.0, 30, 10)]
    assert replaced == [2, 4]


def test_state_reset_immediately_after_replacement():
    wear = WearState(cycles_accumulated=990.0, years_since_replacement=1)
    assert advance_wear(wear, 18.0, 1000, 3) is True
    assert wear.cycles_accumulated == 0.0
    assert wear.years_since_replacement == 0


def test_no_replacement_below_limits():
    wear = WearState()
    assert advance_wear(wear, 18.0, 1000, 3) is False
    assert wear.years_since_replacement == 1
    assert wear.cycles_accumulated == 18.0
