"""
Sparkline reducer: compact trend glyphs for inline display.

Simplified relatives of the line chart. They render nothing instead of a
placeholder, and a collapsed value range falls back to a range of 1.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from bodyweight.constants import SPARKLINE_DEFAULTS, STREAK_BARS, VOLUME_SPARKLINE
from bodyweight.models import DailyDataPoint
from bodyweight.utils import format_coord


@dataclass
class Sparkline:
    points: List[Tuple[float, float]] = field(default_factory=list)

    @property
    def polyline(self) -> str:
        """SVG polyline `points` attribute."""
        return ' '.join(f"{format_coord(x)},{format_coord(y)}" for x, y in self.points)

    @property
    def path(self) -> str:
        return ' '.join(
            f"{'M' if i == 0 else 'L'} {format_coord(x)},{format_coord(y)}"
            for i, (x, y) in enumerate(self.points)
        )


def _normalize(values: np.ndarray) -> np.ndarray:
    """Scale into [0, 1]; a collapsed range scales by 1, mapping every value to 0."""
    lo, hi = float(values.min()), float(values.max())
    value_range = (hi - lo) or SPARKLINE_DEFAULTS['collapsed_range']
    return (values - lo) / value_range


def sparkline(values: Sequence[float], width: float = SPARKLINE_DEFAULTS['width'],
              height: float = SPARKLINE_DEFAULTS['height']) -> Optional[Sparkline]:
    """
    Trend line for any numeric sequence, with 15% vertical padding.

    Returns None only for an empty sequence. A single value, or a series
    with no spread, is drawn as a flat line through the vertical center.
    """
    if values is None or len(values) == 0:
        return None

    data = np.asarray(values, dtype=float)
    if len(data) == 1:
        middle = height / 2
        return Sparkline(points=[(0.0, middle), (float(width), middle)])

    xs = np.arange(len(data)) / (len(data) - 1) * width
    if data.min() == data.max():
        ys = np.full(len(data), height / 2)
    else:
        padding = height * SPARKLINE_DEFAULTS['vertical_padding_fraction']
        ys = height - padding - _normalize(data) * (height - 2 * padding)

    return Sparkline(points=[(float(x), float(y)) for x, y in zip(xs, ys)])


def volume_sparkline(days: Sequence[DailyDataPoint], width: float = SPARKLINE_DEFAULTS['width'],
                     height: float = SPARKLINE_DEFAULTS['height']) -> Optional[Sparkline]:
    """
    Workout volume trend over the most recent qualifying days.

    A day qualifies when it had a workout with positive volume. Fewer than
    two qualifying days renders nothing. Uses the full height; a flat
    series lies on the baseline.
    """
    workout_days = [day for day in days if day.has_workout and day.volume > 0]
    if len(workout_days) < VOLUME_SPARKLINE['MIN_QUALIFYING_DAYS']:
        return None

    recent = workout_days[-VOLUME_SPARKLINE['WINDOW']:]
    volumes = np.array([day.volume for day in recent], dtype=float)
    normalized = _normalize(volumes)

    xs = np.arange(len(recent)) / (len(recent) - 1) * width
    ys = height - normalized * height
    return Sparkline(points=[(float(x), float(y)) for x, y in zip(xs, ys)])


@dataclass
class StreakBar:
    x: float
    y: float
    width: float
    height: float
    active: bool
    is_today: bool


def streak_bars(days: Sequence[DailyDataPoint], width: float = SPARKLINE_DEFAULTS['width'],
                height: float = SPARKLINE_DEFAULTS['height']) -> List[StreakBar]:
    """
    Bar glyph of daily activity over the last 14 days, today last.

    Days with a workout or food entry get a full bar, others a stub.
    """
    if not days:
        return []

    recent = list(days)[-STREAK_BARS['WINDOW']:]
    gap = STREAK_BARS['GAP']
    bar_width = (width - (len(recent) - 1) * gap) / len(recent)
    max_height = height - STREAK_BARS['TOP_INSET']

    bars = []
    for i, day in enumerate(recent):
        active = day.has_workout or day.has_food
        bar_height = max_height if active else max_height * STREAK_BARS['INACTIVE_HEIGHT_FRACTION']
        bars.append(StreakBar(
            x=i * (bar_width + gap),
            y=height - bar_height,
            width=bar_width,
            height=bar_height,
            active=active,
            is_today=i == len(recent) - 1,
        ))
    return bars
