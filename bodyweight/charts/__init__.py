"""Chart geometry engine and sparkline reducers."""

from bodyweight.charts.geometry import (
    AxisTick,
    ChangeSummary,
    ChartBox,
    ChartPadding,
    ChartResult,
    EmptyChart,
    HitRegion,
    InsufficientChart,
    RenderedChart,
    compute_chart_geometry,
    effective_range,
    summarize_change,
    toggle_selection,
    value_range,
)
from bodyweight.charts.sparkline import Sparkline, StreakBar, sparkline, streak_bars, volume_sparkline
from bodyweight.charts.weight_chart import Tooltip, build_tooltip, build_weight_chart

__all__ = [
    'AxisTick',
    'ChangeSummary',
    'ChartBox',
    'ChartPadding',
    'ChartResult',
    'EmptyChart',
    'HitRegion',
    'InsufficientChart',
    'RenderedChart',
    'compute_chart_geometry',
    'effective_range',
    'summarize_change',
    'toggle_selection',
    'value_range',
    'Sparkline',
    'StreakBar',
    'sparkline',
    'streak_bars',
    'volume_sparkline',
    'Tooltip',
    'build_tooltip',
    'build_weight_chart',
]
