from __future__ import annotations
from typing import Dict
import pandas as pd
import plotly.express as px

from snow_core.models import Comparison, Projection, horizon_label


def make_decomposition_df_by_post(projections: Dict[str, Projection]) -> pd.DataFrame:
    """
    Long table with 4 posts per option:
      - Acquisition (initial cost)
      - Operating (electricity / fuel / contract)
      - Maintenance
      - Battery replacement
    The sum per option == projected total.
    """
    rows = []
    for label, proj in projections.items():
        rows += [
            {"Option": label, "Post": "Acquisition",         "USD": float(proj.option.initial_cost)},
            {"Option": label, "Post": "Operating",           "USD": proj.operating},
            {"Option": label, "Post": "Maintenance",         "USD": proj.maintenance},
            {"Option": label, "Post": "Battery replacement", "USD": proj.replacement},
        ]
    return pd.DataFrame(rows, columns=["Option", "Post", "USD"])


def fig_bar_decomposition_by_post(df_decomp: pd.DataFrame, years: int):
    fig = px.bar(
        df_decomp,
        x="Option",
        y="USD",
        color="Post",
        barmode="stack",
        text_auto=".0f",
        title=f"TCO breakdown over {years} years (nominal)",
    )
    fig.update_layout(
        plot_bgcolor="white",
        xaxis=dict(showgrid=False),
        yaxis=dict(showgrid=False, title="USD (nominal)"),
        title=dict(x=0, xanchor="left", font=dict(size=20)),
        bargap=0.3,
        legend=dict(orientation="h", x=0, y=1.1),
    )
    totals = df_decomp.groupby("Option", as_index=False)["USD"].sum()
    for _, row in totals.iterrows():
        fig.add_annotation(
            x=row["Option"],
            y=row["USD"],
            text=f"${row['USD']:,.0f}",
            showarrow=False,
            font=dict(size=14, color="black"),
            yshift=10,
        )
    return fig


def make_cum_df(projections: Dict[str, Projection]) -> pd.DataFrame:
    """Cumulative cost per year, year 0 being the purchase."""
    parts = []
    for label, proj in projections.items():
        d = proj.annual_table[["Year", "Cumulative"]].copy()
        start = pd.DataFrame({"Year": [0], "Cumulative": [float(proj.option.initial_cost)]})
        d = pd.concat([start, d], ignore_index=True)
        d["Option"] = label
        parts.append(d)
    if not parts:
        return pd.DataFrame(columns=["Year", "Cumulative", "Option"])
    return pd.concat(parts, ignore_index=True)


def fig_line_cumulative(cum_df: pd.DataFrame):
    fig = px.line(
        cum_df,
        x="Year",
        y="Cumulative",
        color="Option",
        title="Cumulative cost of ownership",
        markers=True,
    )
    fig.update_layout(
        legend=dict(orientation="h", y=-0.2, x=0.5, xanchor="center"),
        title=dict(x=0, xanchor="left", font=dict(size=15)),
        plot_bgcolor="white",
        yaxis=dict(gridcolor="lightgrey", title="USD (cumulative)", rangemode="tozero"),
        xaxis=dict(gridcolor="lightgrey"),
    )
    return fig


def fig_bar_horizons(comparison: Comparison):
    rows = [
        {"Option": r.label, "Horizon": horizon_label(h), "USD": r.totals[h]}
        for r in comparison.rows
        for h in comparison.horizons
    ]
    fig = px.bar(
        pd.DataFrame(rows, columns=["Option", "Horizon", "USD"]),
        x="Horizon",
        y="USD",
        color="Option",
        barmode="group",
        title="TCO per horizon",
    )
    fig.update_layout(
        plot_bgcolor="white",
        yaxis=dict(gridcolor="lightgrey", title="USD (nominal)"),
        title=dict(x=0, xanchor="left", font=dict(size=15)),
    )
    return fig
