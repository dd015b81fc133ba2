"""Calendar aggregation over stored weight entries."""

from bodyweight.analysis.day_status import (
    CalendarCell,
    CalendarMonth,
    calendar_layout,
    can_advance,
    month_day_statuses,
    shift_month,
)

__all__ = [
    'CalendarCell',
    'CalendarMonth',
    'calendar_layout',
    'can_advance',
    'month_day_statuses',
    'shift_month',
]
