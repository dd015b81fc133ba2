"""
Body weight chart: stored entries in, chart geometry and tooltips out.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from bodyweight.charts.geometry import ChartPadding, ChartResult, compute_chart_geometry
from bodyweight.database.weight_store import chronological
from bodyweight.logging_utils import PerformanceTimer, chart_logger
from bodyweight.models import ChartPoint, WeightEntry
from bodyweight.utils import parse_date_key


@dataclass
class Tooltip:
    date_label: str
    value: float
    time_label: str


def build_weight_chart(entries: Iterable[WeightEntry], width: float, height: float,
                       padding: Optional[ChartPadding] = None) -> ChartResult:
    """Chart geometry for entries in any order; they are plotted oldest day first."""
    ordered = chronological(list(entries))
    with PerformanceTimer(chart_logger, "weight_chart", samples=len(ordered)):
        return compute_chart_geometry(ordered, width, height, padding)


def format_time_label(entry: WeightEntry) -> str:
    """Local time of the write, e.g. '8:05:09 PM'."""
    moment = entry.recorded_at
    hour = moment.hour % 12 or 12
    meridiem = 'AM' if moment.hour < 12 else 'PM'
    return f"{hour}:{moment:%M:%S} {meridiem}"


def build_tooltip(point: ChartPoint) -> Tooltip:
    """
    Tooltip text for a selected point.

    The date label comes from the entry's key, read as a local calendar
    day, so it never shifts across a timezone boundary.
    """
    entry = point.sample
    day = parse_date_key(entry.date)
    return Tooltip(
        date_label=f"{day:%b} {day.day}",
        value=entry.weight,
        time_label=format_time_label(entry),
    )
