"""
Data models for the body weight tracker.

- WeightEntry: one stored measurement per calendar day
- DailyDataPoint: per-day activity summary consumed by sparklines
- ChartPoint: pixel-space point produced by the geometry engine
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bodyweight.utils import epoch_millis, from_epoch_millis, is_canonical_key


@dataclass
class WeightEntry:
    """A single day's body weight.

    `date` is the identity used for the one-entry-per-day rule,
    `timestamp` (epoch milliseconds) orders entries by recency.
    """
    date: str
    weight: float
    timestamp: int

    @property
    def recorded_at(self) -> datetime:
        """Local wall-clock time of the write."""
        return from_epoch_millis(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'date': self.date,
            'weight': self.weight,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeightEntry':
        """
        Build an entry from its stored form.

        Accepts epoch-millisecond timestamps and ISO 8601 strings, which
        older payloads used.

        Raises:
            ValueError: field missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"entry must be an object, got {type(data).__name__}")

        missing = {'date', 'weight', 'timestamp'} - set(data.keys())
        if missing:
            raise ValueError(f"missing fields: {', '.join(sorted(missing))}")

        date_key = data['date']
        if not isinstance(date_key, str) or not is_canonical_key(date_key):
            raise ValueError(f"date {date_key!r} is not a YYYY-MM-DD key")

        weight = data['weight']
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValueError(f"weight {weight!r} is not a number")

        timestamp = data['timestamp']
        if isinstance(timestamp, str):
            timestamp = epoch_millis(datetime.fromisoformat(timestamp.replace('Z', '+00:00')))
        elif isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError(f"timestamp {timestamp!r} is not a number")

        return cls(date=date_key, weight=float(weight), timestamp=int(timestamp))


@dataclass
class DailyDataPoint:
    """One day of a reporting window. Recomputed per render, never persisted."""
    date: str
    has_workout: bool = False
    volume: float = 0.0
    has_food: bool = False


@dataclass
class ChartPoint:
    """Pixel coordinates plus the sample and value they were computed from."""
    x: float
    y: float
    sample: Any = field(default=None, repr=False)
    index: Optional[int] = None
    value: Optional[float] = None
