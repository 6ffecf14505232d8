"""Tests for the Dash viewer: layout and the functions behind its callbacks."""

from dash import Dash

import report_app


def _ids(component):
    found = []
    stack = [component]
    while stack:
        node = stack.pop()
        if getattr(node, "id", None):
            found.append(node.id)
        children = getattr(node, "children", None)
        if isinstance(children, (list, tuple)):
            stack.extend(children)
        elif children is not None and not isinstance(children, str):
            stack.append(children)
    return found


class TestHelpers:

    def test_indicator_options_use_labels(self, hook, tables):
        options = report_app.build_indicator_options(tables["indicator_1"], hook)

        assert options == [
            {"label": "Other", "value": "Other"},
            {"label": "Indicator X", "value": "X"},
        ]

    def test_slider_marks(self):
        assert report_app.slider_marks(1960, 1980) == {1960: "1960", 1970: "1970", 1980: "1980"}

    def test_year_bounds(self, tables):
        assert report_app.year_bounds(tables) == (2000, 2001)

    def test_bar_for_indicator(self, hook, tables):
        fig = report_app.bar_for_indicator(tables, hook, "Other")

        assert list(fig.data[0].x) == ["A"]

    def test_bar_for_no_indicator(self, hook, tables):
        fig = report_app.bar_for_indicator(tables, hook, None)

        assert len(fig.data) == 0
        assert fig.layout.annotations[0].text == "Pick an indicator"

    def test_timeseries_for_years(self, hook, tables):
        fig = report_app.timeseries_for_years(tables, hook, (2000, 2000))

        assert list(fig.data[0].x) == [2000]


class TestBuildApp:

    def test_layout_has_every_section(self, hook, tables):
        app = report_app.build_app(tables, hook)

        assert isinstance(app, Dash)
        ids = set(_ids(app.layout))
        for key in ("map", "bar", "scatter", "timeseries", "summary"):
            assert f"fig-{key}" in ids
        assert {"indicator", "years", "btn-reload", "settings-store"} <= ids

    def test_loads_tables_when_not_given(self, hook, data_dir, capsys):
        app = report_app.build_app(hook=hook)

        assert isinstance(app, Dash)
        assert "✅ Loaded" in capsys.readouterr().out
