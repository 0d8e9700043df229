from __future__ import annotations

import streamlit as st
import pandas as pd

from snow_core.compare import compare
from snow_core.defaults import default_horizons, get_defaults, get_global_defaults, load_defaults
from snow_core.inputs import build_globals, build_option, default_name
from snow_core.models import Category, horizon_label
from snow_core.tco import project_all

from charts import (
    make_decomposition_df_by_post,
    fig_bar_decomposition_by_post,
    make_cum_df,
    fig_line_cumulative,
    fig_bar_horizons,
)


# ======================== Helpers / registry ========================

DEFAULTS = load_defaults()
HORIZONS = default_horizons(DEFAULTS)

# Form fields per category: (key, label). Values stay raw text, the core
# falls back to defaults for anything blank or non-numeric.
FIELDS = {
    Category.ELECTRIC: [
        ("battery_capacity_ah", "Battery capacity (Ah)"),
        ("battery_voltage", "Battery voltage (V)"),
        ("base_charges_per_event", "Charges per event (at 6.5 in)"),
        ("max_charge_cycles", "Max charge cycles"),
        ("battery_calendar_life_years", "Battery calendar life (years)"),
        ("battery_replacement_cost", "Battery set replacement ($)"),
    ],
    Category.GAS: [
        ("base_fuel_per_event", "Gallons per event (at 6.5 in)"),
    ],
    Category.SERVICE: [
        ("base_cost", "Cost ($/month or $/event)"),
        ("annual_price_increase_pct", "Annual price increase (%)"),
    ],
}


def _registry() -> dict:
    """Option entries owned by the page: category -> list of stable ids."""
    if "entries" not in st.session_state:
        st.session_state["entries"] = {c.value: [] for c in Category}
        st.session_state["next_id"] = 0
    return st.session_state["entries"]


def add_entry(category: Category) -> None:
    entries = _registry()
    entries[category.value].append(st.session_state["next_id"])
    st.session_state["next_id"] += 1


def remove_entry(category: Category, entry_id: int) -> None:
    entries = _registry()
    entries[category.value] = [i for i in entries[category.value] if i != entry_id]


def entry_form(category: Category, entry_id: int, position: int) -> dict:
    key = f"{category.value}_{entry_id}"
    defaults = get_defaults(category, DEFAULTS)
    raw = {
        "name": st.text_input("Name", default_name(category, position), key=f"{key}_name"),
        "initial_cost": st.text_input("Initial cost ($)", "0", key=f"{key}_initial"),
        "annual_maintenance": st.text_input("Annual maintenance ($)", "0", key=f"{key}_maint"),
    }
    if category == Category.SERVICE:
        raw["billing_mode"] = st.selectbox(
            "Billing", ["monthly", "per-event"],
            format_func=lambda v: "Monthly (unlimited)" if v == "monthly" else "Per event",
            key=f"{key}_billing",
        )
    for field, label in FIELDS[category]:
        raw[field] = st.text_input(label, str(defaults[field]), key=f"{key}_{field}")
    st.button("Remove", key=f"{key}_remove", on_click=remove_entry, args=(category, entry_id))
    return raw


def highlight_minimums(df: pd.DataFrame, horizons) -> pd.DataFrame:
    styles = pd.DataFrame("", index=df.index, columns=df.columns)
    for h in horizons:
        col = horizon_label(h)
        styles.loc[df[f"{col} min"], col] = "background-color: #d4f4dd; font-weight: bold"
    return styles


# ============================ UI ============================

st.set_page_config(page_title="Snow removal TCO", page_icon="❄️", layout="wide")
st.title("Snow removal cost comparator")

g = get_global_defaults(DEFAULTS)
st.sidebar.markdown("### Global assumptions")
raw_globals = {
    "area": st.sidebar.number_input("Area (sq ft)", 0.0, 1_000_000.0, float(g["area"]), step=100.0),
    "events_per_season": st.sidebar.number_input("Events per season", 0, 200, int(g["events_per_season"])),
    "total_seasonal_snowfall": st.sidebar.number_input(
        "Seasonal snowfall (in)", 0.0, 1_000.0, float(g["total_seasonal_snowfall"]), step=1.0),
    "electricity_unit_cost": st.sidebar.number_input(
        "Electricity ($/kWh)", 0.0, 5.0, float(g["electricity_unit_cost"]), step=0.01),
    "fuel_unit_cost": st.sidebar.number_input("Fuel ($/gal)", 0.0, 20.0, float(g["fuel_unit_cost"]), step=0.01),
    "annual_inflation_pct": st.sidebar.number_input(
        "Inflation (%/year)", 0.0, 50.0, float(g["annual_inflation_pct"]), step=0.5),
}
globals_ = build_globals(raw_globals, DEFAULTS)

entries = _registry()
options = []
cols = st.columns(3)
for col, category in zip(cols, Category):
    with col:
        st.markdown(f"### {category.value.capitalize()}")
        st.button(f"Add {category.value} option", key=f"add_{category.value}", on_click=add_entry, args=(category,))
        for position, entry_id in enumerate(entries[category.value]):
            with st.expander(default_name(category, position), expanded=True):
                raw = entry_form(category, entry_id, position)
            options.append(build_option(category, raw, position, DEFAULTS))

# ============================ Results ============================

st.divider()
comparison = compare(options, globals_, HORIZONS)

usage = comparison.usage
st.caption(
    f"Average event: {usage.depth_per_event_in:.2f} in, {usage.tons_per_event:.2f} t "
    f"(reference 6.5 in: {usage.base_tons_per_event:.2f} t) • usage scale ×{usage.scale_factor:.2f}"
)

if comparison.is_empty:
    st.info(comparison.message)
    st.stop()

st.markdown("## Results")
table = comparison.to_frame()
money_cols = [horizon_label(h) for h in comparison.horizons]
styled = (
    table.style
    .apply(highlight_minimums, horizons=comparison.horizons, axis=None)
    .format({c: "${:,.0f}" for c in money_cols})
    .hide([f"{c} min" for c in money_cols], axis="columns")
)
st.dataframe(styled, use_container_width=True, hide_index=True)
st.plotly_chart(fig_bar_horizons(comparison), use_container_width=True)

st.subheader("Detail over one horizon")
years = st.select_slider("Horizon (years)", options=list(comparison.horizons), value=max(comparison.horizons))
projections = project_all(options, globals_, years)

df_decomp = make_decomposition_df_by_post(projections)
st.plotly_chart(fig_bar_decomposition_by_post(df_decomp, years), use_container_width=True)
st.plotly_chart(fig_line_cumulative(make_cum_df(projections)), use_container_width=True)

for label, proj in projections.items():
    with st.expander(f"Year by year: {label}"):
        if proj.replacement_years:
            st.caption("Battery set replaced in year(s) " + ", ".join(str(y) for y in proj.replacement_years))
        st.dataframe(proj.annual_table, use_container_width=True, hide_index=True)
