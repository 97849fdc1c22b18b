from datetime import date, datetime

import pandas as pd
import pytest

from chartcore.config import ChartConfig, ChartOptions
from chartcore.traces import (
    DEFAULT_COLOR_DARK,
    DEFAULT_COLOR_LIGHT,
    build_2d_trace,
    build_3d_trace,
    build_surface_grid,
    build_trace,
    color_for_scheme,
    is_3d_chart,
)


def xy_rows(n):
    return [{"x": float(i), "y": float(i * 2), "z": float(i % 3)} for i in range(n)]


def config(chart_type, z_axis=None, **options):
    return ChartConfig(chart_type=chart_type, x_axis="x", y_axis="y", z_axis=z_axis, additional_options=ChartOptions(**options))


class TestColors:
    @pytest.mark.parametrize("scheme,expected", [("viridis", "#440154"), ("plasma", "#9c179e"), ("warm", "#d13b40"), ("cool", "#3b518a")])
    def test_named_palette(self, scheme, expected):
        assert color_for_scheme(scheme) == expected
        assert color_for_scheme(scheme, is_dark_mode=True) == expected

    @pytest.mark.parametrize("scheme", [None, "default", "rainbow"])
    def test_theme_default(self, scheme):
        assert color_for_scheme(scheme) == DEFAULT_COLOR_LIGHT
        assert color_for_scheme(scheme, is_dark_mode=True) == DEFAULT_COLOR_DARK


def test_is_3d_chart():
    assert all(is_3d_chart(t) for t in ["scatter3d", "surface", "mesh3d", "line3d"])
    assert not any(is_3d_chart(t) for t in ["scatter", "bar", "line", "pie"])


class Test2D:
    def test_scatter(self):
        trace = build_trace(config("scatter"), xy_rows(3))
        assert trace == {
            "x": [0.0, 1.0, 2.0],
            "y": [0.0, 2.0, 4.0],
            "type": "scatter",
            "mode": "markers",
            "marker": {"size": 8, "color": DEFAULT_COLOR_LIGHT},
        }

    def test_line_mode(self):
        assert build_trace(config("line"), xy_rows(2))["mode"] == "lines+markers"

    def test_bar_has_no_markers(self):
        trace = build_trace(config("bar"), xy_rows(2))
        assert trace["type"] == "bar"
        assert trace["mode"] == "none"

    def test_pie(self):
        rows = [{"x": "a", "y": 1.0}, {"x": "b", "y": 2.0}]
        trace = build_trace(config("pie", color_scheme="warm"), rows)
        assert trace == {"labels": ["a", "b"], "values": [1.0, 2.0], "type": "pie", "marker": {"colors": ["#d13b40"]}}

    @pytest.mark.parametrize("n,expected", [(1000, "scatter"), (1001, "scattergl")])
    def test_webgl_threshold(self, n, expected):
        assert build_trace(config("scatter"), xy_rows(n))["type"] == expected

    def test_webgl_switch_only_for_plain_scatter(self):
        assert build_trace(config("line"), xy_rows(1001))["type"] == "line"

    def test_gl_suffix_stripped(self):
        assert build_trace(config("scattergl"), xy_rows(5))["type"] == "scatter"
        assert build_trace(config("scattergl"), xy_rows(1001))["type"] == "scatter"

    def test_marker_size_defaults_by_row_count(self):
        assert build_trace(config("scatter"), xy_rows(1000))["marker"]["size"] == 8
        assert build_trace(config("scatter"), xy_rows(1001))["marker"]["size"] == 3
        assert build_trace(config("scatter", marker_size=6), xy_rows(1001))["marker"]["size"] == 6

    def test_absent_column_yields_none(self):
        trace = build_2d_trace("scatter", [{"x": 1.0}], "x", "missing", ChartOptions())
        assert trace["y"] == [None]


class TestEmpty:
    def test_no_rows(self):
        assert build_trace(config("scatter"), []) == {}
        assert build_trace(config("surface", z_axis="z"), []) == {}

    def test_no_axis(self):
        cfg = ChartConfig(chart_type="bar", x_axis="x", y_axis=None)
        assert build_trace(cfg, xy_rows(3)) == {}


class Test3D:
    def test_scatter3d(self):
        trace = build_trace(config("scatter3d", z_axis="z", color_scheme="cool"), xy_rows(3))
        assert trace["type"] == "scatter3d"
        assert trace["mode"] == "markers"
        assert trace["z"] == [0.0, 1.0, 2.0]
        assert trace["marker"] == {
            "size": 5,
            "color": "#3b518a",
            "opacity": 0.8,
            "line": {"width": 0.5, "color": "rgba(0,0,0,0.5)"},
        }

    def test_missing_z_axis_fills_zeros(self):
        trace = build_trace(config("scatter3d"), xy_rows(4))
        assert trace["z"] == [0, 0, 0, 0]

    def test_dark_outline(self):
        trace = build_3d_trace("scatter3d", xy_rows(1), "x", "y", "z", ChartOptions(), is_dark_mode=True)
        assert trace["marker"]["line"]["color"] == "rgba(255,255,255,0.5)"
        assert trace["marker"]["color"] == DEFAULT_COLOR_DARK

    def test_mesh3d(self):
        trace = build_trace(config("mesh3d", z_axis="z", color_scheme="plasma"), xy_rows(3))
        assert trace["type"] == "mesh3d"
        assert trace["intensity"] == [0.0, 1.0, 2.0]
        assert trace["colorscale"] == "plasma"
        assert trace["opacity"] == 0.8
        assert trace["delaunayaxis"] == "z"

    def test_mesh3d_default_colorscale(self):
        assert build_trace(config("mesh3d", z_axis="z"), xy_rows(3))["colorscale"] == "Viridis"

    def test_line3d(self):
        trace = build_trace(config("line3d", z_axis="z"), xy_rows(3))
        assert trace["type"] == "scatter3d"
        assert trace["mode"] == "lines"
        assert trace["line"] == {"width": 6, "color": DEFAULT_COLOR_LIGHT, "opacity": 0.7}

    def test_surface_trace(self):
        rows = [{"x": 1.0, "y": 1.0, "z": 5.0}, {"x": 1.0, "y": 2.0, "z": 7.0}, {"x": 2.0, "y": 1.0, "z": 9.0}]
        trace = build_trace(config("surface", z_axis="z"), rows)
        assert trace["type"] == "surface"
        assert trace["x"] == [1.0, 2.0]
        assert trace["y"] == [1.0, 2.0]
        assert trace["z"] == [[5.0, 9.0], [7.0, 0]]
        assert trace["colorscale"] == "Viridis"
        assert trace["showscale"] is True
        assert trace["contours"]["z"]["project"] == {"z": True}
        assert "marker" not in trace


class TestSurfaceGrid:
    def test_missing_cell_defaults_to_zero(self):
        rows = [{"x": 1, "y": 1, "z": 5}, {"x": 1, "y": 2, "z": 7}, {"x": 2, "y": 1, "z": 9}]
        xs, ys, grid = build_surface_grid(rows, "x", "y", "z")
        assert xs == [1, 2]
        assert ys == [1, 2]
        assert len(grid) == 2 and all(len(r) == 2 for r in grid)
        assert grid[0][0] == 5  # (x=1, y=1)
        assert grid[1][0] == 7  # (x=1, y=2)
        assert grid[0][1] == 9  # (x=2, y=1)
        assert grid[1][1] == 0  # (x=2, y=2) never sampled

    def test_values_sorted_numerically(self):
        rows = [{"x": 10, "y": 2, "z": 1}, {"x": 9, "y": 1, "z": 2}, {"x": 100, "y": 3, "z": 3}]
        xs, ys, _ = build_surface_grid(rows, "x", "y", "z")
        assert xs == [9, 10, 100]
        assert ys == [1, 2, 3]

    def test_rows_with_nulls_do_not_fill_cells(self):
        rows = [{"x": 1, "y": 1, "z": None}, {"x": None, "y": 2, "z": 3}, {"x": 2, "y": 2, "z": 4}]
        xs, ys, grid = build_surface_grid(rows, "x", "y", "z")
        assert xs == [1, 2]
        assert ys == [1, 2]
        assert grid == [[0, 0], [0, 4]]

    def test_near_duplicates_are_separate_columns(self):
        rows = [{"x": 0.1 + 0.2, "y": 0, "z": 1}, {"x": 0.3, "y": 0, "z": 2}]
        xs, _, grid = build_surface_grid(rows, "x", "y", "z")
        assert len(xs) == 2
        assert grid == [[2, 1]]

    def test_dates_sort_chronologically(self):
        rows = [
            {"x": pd.Timestamp("2024-02-01"), "y": 1, "z": 1},
            {"x": pd.Timestamp("2024-01-01"), "y": 1, "z": 2},
        ]
        xs, _, grid = build_surface_grid(rows, "x", "y", "z")
        assert xs == [pd.Timestamp("2024-01-01"), pd.Timestamp("2024-02-01")]
        assert grid == [[2, 1]]

    def test_dates_outside_timestamp_range_sort(self):
        rows = [
            {"x": datetime(2024, 1, 1), "y": 1, "z": 1},
            {"x": datetime(1500, 1, 1), "y": 1, "z": 2},
            {"x": date(1400, 6, 1), "y": 1, "z": 3},
            {"x": "bad", "y": 1, "z": 4},
        ]
        xs, _, grid = build_surface_grid(rows, "x", "y", "z")
        assert xs == [date(1400, 6, 1), datetime(1500, 1, 1), datetime(2024, 1, 1), "bad"]
        assert grid == [[3, 2, 1, 4]]
