# report_charts.py
# Plotly figures for the five report sections. Presentation only: every
# number drawn here was computed in report_data.

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

import report_data
import report_hook

NO_DATA = "No data"


# -----------------------------
# Helpers
# -----------------------------

def _empty_fig(msg: str):
    fig = go.Figure()
    fig.add_annotation(text=msg, showarrow=False, xref="paper", yref="paper", x=0.5, y=0.5)
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=40, r=20, t=40, b=40),
    )
    return fig


def _label(hook, key):
    return getattr(hook, "LABELS", {}).get(key, key)


def linear_fit(x, y):
    """Least-squares line through the finite (x, y) pairs -> (slope, intercept), or None."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    ok = np.isfinite(x) & np.isfinite(y)
    x, y = x[ok], y[ok]
    if len(x) < 2 or np.ptp(x) == 0:
        return None
    slope, intercept = np.polyfit(x, y, 1)
    return float(slope), float(intercept)


# -----------------------------
# Figures
# -----------------------------

def map_figure(frame, hook=report_hook):
    if frame.empty:
        return _empty_fig("No countries to draw")

    d = frame.copy()
    d["bucket"] = d["bucket"].astype(object).where(d["bucket"].notna(), NO_DATA)
    order = list(hook.LIFE_EXPECTANCY_LABELS) + [NO_DATA]
    colors = {**hook.BUCKET_COLORS, NO_DATA: hook.NO_DATA_COLOR}
    # sentinel-filled countries are coloured as MISSING_LIFE_EXPECTANCY; say so on hover
    missing_text = f"{NO_DATA} (drawn as {hook.MISSING_LIFE_EXPECTANCY:g})"
    d["life_text"] = d["life_expectancy"].map(lambda v: missing_text if pd.isna(v) else f"{v:.1f}")

    fig = px.choropleth(
        d,
        locations="iso_a3",
        color="bucket",
        hover_name="name",
        custom_data=["life_text"],
        category_orders={"bucket": order},
        color_discrete_map=colors,
        projection=hook.MAP_PROJECTION,
    )
    label = _label(hook, "life_expectancy")
    fig.update_traces(
        hovertemplate=f"%{{hovertext}}<br>{label}: %{{customdata[0]}}<extra></extra>",
    )
    fig.update_layout(
        title="Average life expectancy by country",
        legend_title_text="Life expectancy",
        margin=dict(l=10, r=10, t=40, b=10),
    )
    return fig


def bar_figure(frame, indicator, hook=report_hook):
    label = _label(hook, indicator)
    if frame.empty:
        return _empty_fig(f"No data for '{indicator}'")

    fig = go.Figure(go.Bar(
        x=frame["country"],
        y=frame["obs_value"],
        marker_color=hook.BAR_COLOR,
        customdata=np.c_[frame["missing"].to_numpy()],
        hovertemplate=f"%{{x}}<br>{label}: %{{y:,.4g}}<br>Missing values: %{{customdata[0]}}<extra></extra>",
    ))
    fig.update_layout(
        title=f"{label}: top {len(frame)} countries (average over all years)",
        xaxis_title="Country",
        yaxis_title=label,
        xaxis_tickangle=-45,
        margin=dict(l=40, r=20, t=60, b=120),
    )
    return fig


def scatter_figure(frame, hook=report_hook):
    y_label = _label(hook, hook.INDICATOR_2_LABEL)
    x_label = _label(hook, "gdp_per_capita")
    d = frame.dropna(subset=["gdp_per_capita", "obs_value"])
    if d.empty:
        return _empty_fig(f"No countries with both {x_label} and {y_label}")

    fig = go.Figure(go.Scatter(
        x=d["gdp_per_capita"],
        y=d["obs_value"],
        mode="markers",
        text=d["country"],
        name="Countries",
        marker=dict(color=hook.SCATTER_COLOR, size=9, opacity=0.8,
                    line=dict(width=0.5, color="white")),
        hovertemplate=f"%{{text}}<br>{x_label}: %{{x:,.0f}}<br>{y_label}: %{{y:,.4g}}<extra></extra>",
    ))

    fit = linear_fit(d["gdp_per_capita"], d["obs_value"])
    if fit is not None:
        slope, intercept = fit
        xx = np.array([d["gdp_per_capita"].min(), d["gdp_per_capita"].max()], dtype=float)
        fig.add_trace(go.Scatter(
            x=xx,
            y=intercept + slope * xx,
            mode="lines",
            name="Linear fit",
            line=dict(color=hook.FIT_COLOR, width=2, dash="dash"),
            hovertemplate=f"Fit: y = {intercept:.3g} + {slope:.3g}·x<extra></extra>",
        ))

    fig.update_layout(
        title=f"{y_label} vs {x_label}",
        xaxis_title=x_label,
        yaxis_title=y_label,
        template="plotly_white",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    return fig


def timeseries_figure(frame, hook=report_hook):
    if frame.empty:
        return _empty_fig("No yearly data")

    d = frame.sort_values("year")
    years = d["year"].astype(int)
    pop_name = f"{_label(hook, 'population')} (÷ {hook.POPULATION_DIVISOR:,.0f})"
    life_name = f"{_label(hook, 'life_expectancy')} (÷ {hook.LIFE_EXPECTANCY_DIVISOR:,.0f})"

    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(go.Scatter(
        x=years,
        y=d["population_scaled"],
        mode="lines+markers",
        name=pop_name,
        line=dict(color=hook.POPULATION_COLOR),
    ), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=years,
        y=d["life_expectancy_scaled"],
        mode="lines+markers",
        name=life_name,
        line=dict(color=hook.LIFE_EXPECTANCY_COLOR),
    ), secondary_y=True)

    fig.update_xaxes(title_text="Year", tickvals=list(hook.TIME_SERIES_BREAKS))
    fig.update_yaxes(title_text=pop_name, secondary_y=False)
    fig.update_yaxes(title_text=life_name, secondary_y=True)
    fig.update_layout(
        title="World population and life expectancy over time",
        hovermode="x unified",
        legend=dict(orientation="h", y=-0.2, x=0.5, xanchor="center"),
        margin=dict(l=40, r=40, t=60, b=40),
    )
    return fig


def _fmt(v):
    if isinstance(v, str):
        return v
    if pd.isna(v):
        return "–"
    return f"{v:,.4g}"


def summary_table_figure(stats, hook=report_hook):
    if stats.empty:
        return _empty_fig("No measures to describe")

    d = stats.copy()
    d["measure"] = d["measure"].map(lambda m: _label(hook, m))
    fig = go.Figure(go.Table(
        header=dict(values=[c.title() for c in d.columns], fill_color="#1cabe2",
                    font=dict(color="white"), align="left"),
        cells=dict(values=[[_fmt(v) for v in d[c]] for c in d.columns], align="left"),
    ))
    fig.update_layout(title="Descriptive statistics", margin=dict(l=10, r=10, t=40, b=10))
    return fig


def build_figures(tables, hook=report_hook, keys=None):
    """The report figures in report order; `keys` builds only the ones named."""
    builders = {
        "map": lambda: map_figure(report_data.map_frame(tables, hook), hook),
        "bar": lambda: bar_figure(report_data.bar_frame(tables, hook), hook.INDICATOR_1_LABEL, hook),
        "scatter": lambda: scatter_figure(report_data.scatter_frame(tables, hook), hook),
        "timeseries": lambda: timeseries_figure(report_data.timeseries_frame(tables, hook), hook),
        "summary": lambda: summary_table_figure(report_data.describe_tables(tables, hook), hook),
    }
    wanted = builders if keys is None else [k for k in builders if k in keys]
    return {k: builders[k]() for k in wanted}
