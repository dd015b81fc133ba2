"""
Day-status aggregation for the month calendar.

This module handles:
- Mapping every day of a month to "weight logged" / "not logged"
- Laying the month out as Sunday-first calendar cells
- Month navigation that stops at the current month
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from bodyweight.models import WeightEntry
from bodyweight.utils import canonical_date_key, days_in_month


def month_day_statuses(year: int, month: int, entries: Iterable[WeightEntry]) -> Dict[date, bool]:
    """
    Map each day of a month to whether an entry exists for it.

    Every day 1..days_in_month is present in the result. Future days are
    reported like any other; hiding their status is up to the caller.

    Args:
        year: four-digit year
        month: 1-12
        entries: full entry collection, any order

    Returns:
        {date(year, month, day): logged}
    """
    logged_keys = {entry.date for entry in entries}

    statuses = {}
    for day in range(1, days_in_month(year, month) + 1):
        day_date = date(year, month, day)
        statuses[day_date] = canonical_date_key(day_date) in logged_keys
    return statuses


@dataclass
class CalendarCell:
    """One day in the calendar grid."""
    day: int
    date: date
    logged: bool
    is_future: bool
    is_today: bool
    is_selected: bool

    @property
    def show_status(self) -> bool:
        """Status highlighting applies to past and current days that are not selected."""
        return not self.is_future and not self.is_selected


@dataclass
class CalendarMonth:
    """A month laid out for a Sunday-first grid."""
    year: int
    month: int
    leading_blanks: int
    cells: List[CalendarCell] = field(default_factory=list)

    @property
    def logged_count(self) -> int:
        return sum(1 for cell in self.cells if cell.logged)


def calendar_layout(year: int, month: int, statuses: Dict[date, bool],
                    today: Optional[date] = None,
                    selected: Optional[date] = None) -> CalendarMonth:
    """Build the grid for a month from a day-status map."""
    today = today or date.today()
    first = date(year, month, 1)
    # date.weekday() is Monday=0; the grid starts on Sunday
    leading_blanks = (first.weekday() + 1) % 7

    cells = []
    for day in range(1, days_in_month(year, month) + 1):
        day_date = date(year, month, day)
        cells.append(CalendarCell(
            day=day,
            date=day_date,
            logged=statuses.get(day_date, False),
            is_future=day_date > today,
            is_today=day_date == today,
            is_selected=day_date == selected,
        ))

    return CalendarMonth(year=year, month=month, leading_blanks=leading_blanks, cells=cells)


def shift_month(year: int, month: int, amount: int) -> Tuple[int, int]:
    """Move `amount` months forward (or back when negative)."""
    index = year * 12 + (month - 1) + amount
    return index // 12, index % 12 + 1


def can_advance(year: int, month: int, today: Optional[date] = None) -> bool:
    """Whether navigating forward from (year, month) stays within the current month."""
    today = today or date.today()
    return (year, month) < (today.year, today.month)
