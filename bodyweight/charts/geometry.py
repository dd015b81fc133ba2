"""
Chart geometry engine.

Maps an ordered series of samples into pixel-space geometry for a padded
line/area chart: scaled points, path strings, axis ticks, hit regions and
the first-to-last change summary. Functions here are pure; styling is left
entirely to the renderer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from bodyweight.constants import CHART_DEFAULTS, CHART_LIMITS
from bodyweight.models import ChartPoint
from bodyweight.utils import format_coord, format_signed, safe_divide

logger = logging.getLogger(__name__)


@dataclass
class ChartPadding:
    """Fixed inset between the outer box and the plotting area."""
    top: float = CHART_DEFAULTS['padding']['top']
    right: float = CHART_DEFAULTS['padding']['right']
    bottom: float = CHART_DEFAULTS['padding']['bottom']
    left: float = CHART_DEFAULTS['padding']['left']

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, float]]) -> 'ChartPadding':
        return cls(**(data or {}))


@dataclass
class ChartBox:
    """Outer pixel box and the derived inner plotting area."""
    width: float
    height: float
    padding: ChartPadding = field(default_factory=ChartPadding)

    def __post_init__(self):
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Chart box {self.width}x{self.height} leaves no room inside padding {self.padding}"
            )

    @property
    def inner_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def inner_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom

    @property
    def left(self) -> float:
        return self.padding.left

    @property
    def right(self) -> float:
        return self.padding.left + self.inner_width

    @property
    def top(self) -> float:
        return self.padding.top

    @property
    def baseline(self) -> float:
        """y of the bottom edge of the plotting area."""
        return self.padding.top + self.inner_height


@dataclass
class AxisTick:
    value: float
    y: float


@dataclass
class HitRegion:
    """Invisible touch target around one point, spanning the full box height."""
    index: int
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: Optional[float] = None) -> bool:
        if not self.x <= x <= self.x + self.width:
            return False
        return y is None or self.y <= y <= self.y + self.height


@dataclass
class ChangeSummary:
    """Net change from the first to the last sample."""
    first_value: float
    last_value: float
    net_change: float
    percent_change: float
    show_badge: bool

    @property
    def badge_text(self) -> str:
        return f"{format_signed(self.net_change)} ({format_signed(self.percent_change)}%)"


class ChartResult:
    """Base for the three possible outcomes of a geometry call."""
    is_rendered = False
    sample_count = 0


@dataclass
class EmptyChart(ChartResult):
    """No samples: the caller shows a placeholder."""
    sample_count: int = 0
    message: str = "No weight data available"
    hint: str = "Start logging your weight to see your progress"


@dataclass
class InsufficientChart(ChartResult):
    """A single sample: not enough for a line, same placeholder path."""
    sample_count: int = 1
    message: str = "Not enough data for chart"
    hint: str = "Log weight for at least 2 days to see trends"


@dataclass
class RenderedChart(ChartResult):
    """Full geometry for two or more samples."""
    box: ChartBox
    min_y: float
    max_y: float
    points: List[ChartPoint]
    line_path: str
    area_path: str
    ticks: List[AxisTick]
    hit_regions: List[HitRegion]
    summary: ChangeSummary

    is_rendered = True

    @property
    def sample_count(self) -> int:
        return len(self.points)

    def hit_test(self, x: float, y: Optional[float] = None) -> Optional[int]:
        """Index of the sample whose hit region contains (x, y), nearest point first."""
        candidates = [region.index for region in self.hit_regions if region.contains(x, y)]
        if not candidates:
            return None
        return min(candidates, key=lambda i: abs(self.points[i].x - x))


def _default_value(sample: Any) -> float:
    if isinstance(sample, (int, float, np.number)):
        return float(sample)
    return float(sample.weight)


def effective_range(values: Sequence[float]) -> float:
    """Spread of the series, never less than MIN_EFFECTIVE_RANGE."""
    data = np.asarray(values, dtype=float)
    return max(float(np.max(data) - np.min(data)), CHART_LIMITS['MIN_EFFECTIVE_RANGE'])


def value_range(values: Sequence[float]) -> Tuple[float, float]:
    """
    Value-axis bounds (min_y, max_y) for a non-empty series.

    Both ends move out by RANGE_PADDING_FRACTION of the effective range;
    min_y is clamped at zero.
    """
    data = np.asarray(values, dtype=float)
    lo, hi = float(np.min(data)), float(np.max(data))
    pad = effective_range(data) * CHART_LIMITS['RANGE_PADDING_FRACTION']
    return max(0.0, lo - pad), hi + pad


def summarize_change(values: Sequence[float]) -> ChangeSummary:
    """First-to-last change; the badge is hidden for changes within the threshold."""
    first, last = float(values[0]), float(values[-1])
    net = last - first
    return ChangeSummary(
        first_value=first,
        last_value=last,
        net_change=net,
        percent_change=safe_divide(net, first) * 100,
        show_badge=abs(net) > CHART_LIMITS['BADGE_THRESHOLD'],
    )


def line_path(points: Sequence[ChartPoint]) -> str:
    """Move to the first point, then a line segment to each following point."""
    commands = []
    for i, point in enumerate(points):
        command = 'M' if i == 0 else 'L'
        commands.append(f"{command} {format_coord(point.x)},{format_coord(point.y)}")
    return ' '.join(commands)


def area_path(points: Sequence[ChartPoint], baseline: float) -> str:
    """Line path closed down to the baseline for the fill under the line."""
    if not points:
        return ''
    first, last = points[0], points[-1]
    return (
        f"{line_path(points)}"
        f" L {format_coord(last.x)},{format_coord(baseline)}"
        f" L {format_coord(first.x)},{format_coord(baseline)} Z"
    )


def axis_ticks(box: ChartBox, min_y: float, max_y: float) -> List[AxisTick]:
    """Evenly spaced ticks over [min_y, max_y], both ends included."""
    fractions = np.linspace(0.0, 1.0, CHART_LIMITS['TICK_COUNT'])
    values = min_y + fractions * (max_y - min_y)
    ys = box.baseline - fractions * box.inner_height
    return [
        AxisTick(value=round(float(value), CHART_LIMITS['TICK_DECIMALS']), y=float(y))
        for value, y in zip(values, ys)
    ]


def hit_regions(box: ChartBox, points: Sequence[ChartPoint]) -> List[HitRegion]:
    """One fixed-width region per point, independent of point density."""
    half_width = CHART_LIMITS['HIT_HALF_WIDTH']
    return [
        HitRegion(index=i, x=point.x - half_width, y=0.0, width=half_width * 2, height=box.height)
        for i, point in enumerate(points)
    ]


def compute_chart_geometry(samples: Sequence[Any], width: float, height: float,
                           padding: Optional[ChartPadding] = None,
                           value: Optional[Callable[[Any], float]] = None) -> ChartResult:
    """
    Compute line/area chart geometry for samples ordered oldest first.

    Points are spread evenly by rank across the inner width; gaps between
    dates are not represented. Values map linearly into the inner height
    with larger values nearer the top.

    Args:
        samples: ordered samples (numbers, or objects with a `weight`)
        width: outer box width in px
        height: outer box height in px
        padding: inset of the plotting area
        value: extracts the numeric value from a sample

    Returns:
        EmptyChart, InsufficientChart or RenderedChart

    Raises:
        ValueError: the box is too small for its padding
    """
    box = ChartBox(width=width, height=height, padding=padding or ChartPadding())

    if len(samples) == 0:
        return EmptyChart()
    if len(samples) < CHART_LIMITS['MIN_SAMPLES']:
        logger.debug(f"Not enough samples for a chart: {len(samples)}")
        return InsufficientChart(sample_count=len(samples))

    extract = value or _default_value
    values = np.array([extract(sample) for sample in samples], dtype=float)
    min_y, max_y = value_range(values)

    ranks = np.arange(len(values)) / (len(values) - 1)
    xs = box.left + ranks * box.inner_width
    ys = box.baseline - (values - min_y) / (max_y - min_y) * box.inner_height

    points = [
        ChartPoint(x=float(x), y=float(y), sample=sample, index=i, value=float(v))
        for i, (x, y, v, sample) in enumerate(zip(xs, ys, values, samples))
    ]

    return RenderedChart(
        box=box,
        min_y=min_y,
        max_y=max_y,
        points=points,
        line_path=line_path(points),
        area_path=area_path(points, box.baseline),
        ticks=axis_ticks(box, min_y, max_y),
        hit_regions=hit_regions(box, points),
        summary=summarize_change(values),
    )


def toggle_selection(current: Optional[int], index: int) -> Optional[int]:
    """Select `index`, or clear the selection when it is already selected."""
    return None if current == index else index
