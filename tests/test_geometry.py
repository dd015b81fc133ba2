"""Tests for the chart geometry engine."""

import copy
from datetime import datetime

import numpy as np
import pytest

from bodyweight.charts.geometry import (
    ChartBox,
    ChartPadding,
    EmptyChart,
    InsufficientChart,
    RenderedChart,
    compute_chart_geometry,
    effective_range,
    summarize_change,
    toggle_selection,
    value_range,
)
from bodyweight.charts.weight_chart import build_tooltip, build_weight_chart
from bodyweight.models import WeightEntry
from bodyweight.utils import epoch_millis


@pytest.mark.unit
class TestDegenerateInputs:

    def test_no_samples_is_empty(self):
        result = compute_chart_geometry([], 300, 200)
        assert isinstance(result, EmptyChart)
        assert not result.is_rendered

    def test_single_sample_is_insufficient(self):
        result = compute_chart_geometry([150.0], 300, 200)
        assert isinstance(result, InsufficientChart)
        assert not result.is_rendered
        assert result.sample_count == 1

    def test_box_smaller_than_padding(self):
        with pytest.raises(ValueError):
            compute_chart_geometry([1.0, 2.0], 50, 40)

    def test_placeholder_text(self):
        assert "No weight data" in EmptyChart().message
        assert "at least 2 days" in InsufficientChart().hint


@pytest.mark.unit
class TestReferenceSeries:
    """[100, 102, 101, 105, 103] in a 300x200 box with default padding."""

    @pytest.fixture
    def chart(self, sample_entries):
        return compute_chart_geometry(sample_entries, 300, 200)

    def test_rendered_with_all_points(self, chart):
        assert isinstance(chart, RenderedChart)
        assert chart.is_rendered
        assert len(chart.points) == 5

    def test_points_keep_their_samples(self, chart, sample_entries):
        assert [p.sample for p in chart.points] == sample_entries
        assert [p.index for p in chart.points] == list(range(5))
        assert [p.value for p in chart.points] == [100.0, 102.0, 101.0, 105.0, 103.0]

    def test_value_axis(self, chart):
        assert chart.min_y == pytest.approx(99.5)
        assert chart.max_y == pytest.approx(105.5)

    def test_rank_based_x(self, chart):
        xs = [p.x for p in chart.points]
        assert xs == pytest.approx([40, 101, 162, 223, 284])

    def test_y_inverted_and_inside_box(self, chart):
        box = chart.box
        ys = [p.y for p in chart.points]
        assert all(box.top <= y <= box.baseline for y in ys)
        # Highest value (105) is nearest the top
        assert min(ys) == ys[3]

    def test_summary(self, chart):
        summary = chart.summary
        assert summary.net_change == pytest.approx(3.0)
        assert summary.percent_change == pytest.approx(3.0)
        assert summary.show_badge
        assert summary.badge_text == "+3.0 (+3.0%)"

    def test_ticks(self, chart):
        assert len(chart.ticks) == 4
        assert [t.value for t in chart.ticks] == [99.5, 101.5, 103.5, 105.5]
        assert chart.ticks[0].y == pytest.approx(chart.box.baseline)
        assert chart.ticks[-1].y == pytest.approx(chart.box.top)

    def test_hit_regions(self, chart):
        assert len(chart.hit_regions) == 5
        for region, point in zip(chart.hit_regions, chart.points):
            assert region.x == pytest.approx(point.x - 15)
            assert region.width == 30
            assert region.y == 0
            assert region.height == 200


@pytest.mark.unit
class TestPaths:

    @pytest.fixture
    def chart(self):
        return compute_chart_geometry([100.0, 105.0], 300, 220)

    def test_line_path(self, chart):
        assert chart.line_path == "M 40,175.83 L 284,34.17"

    def test_area_path_closes_to_baseline(self, chart):
        assert chart.area_path == "M 40,175.83 L 284,34.17 L 284,190 L 40,190 Z"

    def test_many_points_use_line_commands(self):
        chart = compute_chart_geometry([1.0, 2.0, 3.0, 4.0], 300, 220)
        commands = [token for token in chart.line_path.split() if token.isalpha()]
        assert commands == ["M", "L", "L", "L"]


@pytest.mark.unit
class TestValueRange:

    def test_flat_series_uses_minimum_effective_range(self):
        assert effective_range([150.0] * 4) == 5
        assert value_range([150.0, 150.0]) == pytest.approx((149.5, 150.5))

    def test_flat_series_is_centered(self):
        chart = compute_chart_geometry([150.0] * 4, 300, 220)
        center = chart.box.top + chart.box.inner_height / 2
        assert all(p.y == pytest.approx(center) for p in chart.points)

    def test_narrow_series_pads_by_minimum_effective_range(self):
        assert effective_range([100.0, 102.0]) == 5
        assert value_range([100.0, 102.0]) == pytest.approx((99.5, 102.5))

    def test_wide_series_keeps_its_own_range(self):
        assert effective_range([100.0, 110.0]) == pytest.approx(10.0)

    def test_flat_series_near_zero_clamps_at_zero(self):
        min_y, max_y = value_range([0.2, 0.2])
        assert min_y == 0
        assert max_y == pytest.approx(0.7)

    def test_wide_range_pads_ten_percent(self):
        min_y, max_y = value_range([50.0, 150.0])
        assert min_y == pytest.approx(40.0)
        assert max_y == pytest.approx(160.0)

    def test_lower_bound_clamped_at_zero(self):
        min_y, _ = value_range([0.5, 20.0])
        assert min_y == 0

    def test_inputs_not_mutated(self, sample_entries):
        before = copy.deepcopy(sample_entries)
        compute_chart_geometry(sample_entries, 300, 200)
        assert sample_entries == before


@pytest.mark.unit
@pytest.mark.parametrize("count", [2, 3, 7, 30, 365])
def test_random_series_properties(numpy_random_seed, count):
    values = list(np.random.uniform(40, 160, size=count))
    padding = ChartPadding(top=10, right=5, bottom=25, left=30)
    chart = compute_chart_geometry(values, 400, 250, padding)

    assert len(chart.points) == count
    box = chart.box
    for point in chart.points:
        assert box.top - 1e-9 <= point.y <= box.baseline + 1e-9
    assert chart.points[0].x == pytest.approx(box.left)
    assert chart.points[-1].x == pytest.approx(box.right)


@pytest.mark.unit
class TestSummary:

    def test_small_change_hides_badge(self):
        assert not summarize_change([70.0, 70.05]).show_badge
        assert not summarize_change([70.0, 70.0]).show_badge

    def test_change_above_threshold_shows_badge(self):
        assert summarize_change([70.0, 70.2]).show_badge

    def test_loss(self):
        summary = summarize_change([200.0, 195.0, 190.0])
        assert summary.net_change == pytest.approx(-10.0)
        assert summary.percent_change == pytest.approx(-5.0)
        assert summary.badge_text == "-10.0 (-5.0%)"


@pytest.mark.unit
class TestInteraction:

    @pytest.fixture
    def chart(self):
        return compute_chart_geometry([100.0, 105.0], 300, 220)

    def test_hit_test_resolves_index(self, chart):
        assert chart.hit_test(50) == 0
        assert chart.hit_test(270, 200) == 1

    def test_hit_test_outside_regions(self, chart):
        assert chart.hit_test(150) is None
        assert chart.hit_test(40, 500) is None

    def test_dense_points_pick_nearest(self):
        chart = compute_chart_geometry(list(np.linspace(60, 80, 40)), 300, 220)
        for point in chart.points:
            assert chart.hit_test(point.x) == point.index

    def test_toggle_selection(self):
        assert toggle_selection(None, 2) == 2
        assert toggle_selection(2, 2) is None
        assert toggle_selection(2, 3) == 3


@pytest.mark.unit
class TestWeightChart:

    def test_entries_are_plotted_oldest_first(self, sample_entries):
        chart = build_weight_chart(list(reversed(sample_entries)), 300, 200)
        assert [p.sample.date for p in chart.points] == [e.date for e in sample_entries]
        assert chart.summary.net_change == pytest.approx(3.0)

    def test_tooltip(self):
        entry = WeightEntry("2024-01-05", 151.2, epoch_millis(datetime(2024, 1, 5, 20, 5, 9)))
        other = WeightEntry("2024-01-06", 150.8, epoch_millis(datetime(2024, 1, 6, 7, 0, 0)))
        chart = build_weight_chart([entry, other], 300, 200)

        first = build_tooltip(chart.points[0])
        second = build_tooltip(chart.points[1])
        assert (first.date_label, first.value, first.time_label) == ("Jan 5", 151.2, "8:05:09 PM")
        assert second.time_label == "7:00:00 AM"

    def test_box_properties(self):
        box = ChartBox(300, 200)
        assert box.inner_width == 244
        assert box.inner_height == 150
        assert box.right == 284
        assert box.baseline == 170
