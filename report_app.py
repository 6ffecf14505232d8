# report_app.py
# Interactive viewer for the UNICEF report, with hot-reload of report_hook.py
#
#   python report_app.py

import importlib
import sys

from dash import Dash, dcc, html, Input, Output, exceptions, no_update

import report_charts
import report_data
import report_hook
from report_build import SECTIONS, prose


# -----------------------------
# Helpers
# -----------------------------

def build_indicator_options(df, hook):
    present = sorted(df["indicator"].dropna().unique())
    return [{"label": report_charts._label(hook, ind), "value": ind} for ind in present]


def slider_marks(start, end, step=10):
    return {y: str(y) for y in range(start, end + 1, step)}


def year_bounds(tables):
    years = tables["metadata"]["year"].dropna()
    if years.empty:
        return None
    return int(years.min()), int(years.max())


def bar_for_indicator(tables, hook, indicator):
    if not indicator:
        return report_charts._empty_fig("Pick an indicator")
    frame = report_data.bar_frame(tables, hook, indicator=indicator)
    return report_charts.bar_figure(frame, indicator, hook)


def timeseries_for_years(tables, hook, years):
    frame = report_data.timeseries_frame(tables, hook, years=years)
    return report_charts.timeseries_figure(frame, hook)


def _section(heading, text, children):
    return html.Div(
        style={"marginBottom": "32px"},
        children=[html.H3(heading), html.P(prose(text), style={"lineHeight": "1.7"})] + children,
    )


# -----------------------------
# App
# -----------------------------

def build_app(tables=None, hook=report_hook):
    state = {"hook": hook, "tables": tables if tables is not None else report_data.load_tables(hook)}

    options = build_indicator_options(state["tables"]["indicator_1"], hook)
    bounds = year_bounds(state["tables"]) or (min(hook.TIME_SERIES_BREAKS), max(hook.TIME_SERIES_BREAKS))
    graph_config = {"displaylogo": False, "modeBarButtonsToRemove": ["lasso2d", "select2d"]}

    controls = {
        "bar": [
            html.Label("Indicator"),
            dcc.Dropdown(
                id="indicator",
                options=options,
                value=hook.INDICATOR_1_LABEL if hook.INDICATOR_1_LABEL in [o["value"] for o in options]
                else (options[0]["value"] if options else None),
                clearable=False,
            ),
        ],
        "timeseries": [
            html.Label("Years"),
            dcc.RangeSlider(
                id="years",
                min=bounds[0],
                max=bounds[1],
                step=1,
                value=list(bounds),
                marks=slider_marks(bounds[0], bounds[1]),
                tooltip={"placement": "bottom", "always_visible": False},
            ),
        ],
    }

    app = Dash(__name__, title=hook.REPORT_TITLE)
    app.layout = html.Div(
        style={"fontFamily": "system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial",
               "padding": "16px", "maxWidth": "1200px", "margin": "0 auto"},
        children=[
            html.H2(hook.REPORT_TITLE, style={"marginBottom": "8px"}),
            html.P("Edit report_hook.py to change labels, colours, files or buckets, "
                   "then use the Reload button."),
            html.Div(
                style={"display": "flex", "gap": "10px", "alignItems": "center",
                       "margin": "6px 0 12px"},
                children=[
                    html.Button("🔁 Reload report_hook.py", id="btn-reload", n_clicks=0),
                    html.Div(id="reload-status", style={"color": "#555"}),
                ],
            ),
        ] + [
            _section(heading, text, controls.get(key, []) + [
                dcc.Graph(id=f"fig-{key}", config=graph_config, style={"height": "60vh"}),
            ])
            for key, heading, text in SECTIONS
        ] + [
            dcc.Store(id="settings-store"),
        ],
    )

    @app.callback(
        Output("settings-store", "data"),
        Output("reload-status", "children"),
        Input("btn-reload", "n_clicks"),
        prevent_initial_call=True,
    )
    def reload_hook(n_clicks):
        """Hot-reload report_hook.py and re-read the inputs it names."""
        try:
            if "report_hook" in sys.modules:
                new_hook = importlib.reload(sys.modules["report_hook"])
            else:
                new_hook = importlib.import_module("report_hook")
            state["tables"] = report_data.load_tables(new_hook)
            state["hook"] = new_hook
        except Exception as e:
            return no_update, f"Reload failed: {e}"
        return {"reloads": n_clicks}, "Reloaded report_hook.py ✅"

    @app.callback(
        Output("fig-map", "figure"),
        Output("fig-scatter", "figure"),
        Output("fig-summary", "figure"),
        Input("settings-store", "data"),
    )
    def update_static(_settings):
        tables, h = state["tables"], state["hook"]
        return (
            report_charts.map_figure(report_data.map_frame(tables, h), h),
            report_charts.scatter_figure(report_data.scatter_frame(tables, h), h),
            report_charts.summary_table_figure(report_data.describe_tables(tables, h), h),
        )

    @app.callback(
        Output("fig-bar", "figure"),
        Input("indicator", "value"),
        Input("settings-store", "data"),
    )
    def update_bar(indicator, _settings):
        return bar_for_indicator(state["tables"], state["hook"], indicator)

    @app.callback(
        Output("fig-timeseries", "figure"),
        Input("years", "value"),
        Input("settings-store", "data"),
    )
    def update_timeseries(years, _settings):
        if not years or len(years) != 2:
            raise exceptions.PreventUpdate
        return timeseries_for_years(state["tables"], state["hook"], tuple(years))

    return app


# -----------------------------
# Run
# -----------------------------
if __name__ == "__main__":
    app = build_app()
    app.run(debug=True, dev_tools_hot_reload=False)  # Dash 3.x
