"""
Body Weight Tracker Package
"""

# Models
from .models import WeightEntry, DailyDataPoint, ChartPoint

# Storage
from .database import (
    PersistenceAdapter,
    MemoryAdapter,
    JsonFileAdapter,
    WeightRecordStore,
    chronological,
)

# Calendar
from .analysis import month_day_statuses, calendar_layout

# Charts
from .charts import (
    ChartPadding,
    EmptyChart,
    InsufficientChart,
    RenderedChart,
    compute_chart_geometry,
    build_weight_chart,
    build_tooltip,
    toggle_selection,
    sparkline,
    volume_sparkline,
    streak_bars,
)

# Capture boundary
from .validation import parse_weight_input, is_valid_weight

# Errors
from .exceptions import StorageFailure, MalformedPayload, InvalidSample

# Utilities
from .utils import canonical_date_key, parse_date_key

__all__ = [
    # Models
    'WeightEntry',
    'DailyDataPoint',
    'ChartPoint',

    # Storage
    'PersistenceAdapter',
    'MemoryAdapter',
    'JsonFileAdapter',
    'WeightRecordStore',
    'chronological',

    # Calendar
    'month_day_statuses',
    'calendar_layout',

    # Charts
    'ChartPadding',
    'EmptyChart',
    'InsufficientChart',
    'RenderedChart',
    'compute_chart_geometry',
    'build_weight_chart',
    'build_tooltip',
    'toggle_selection',
    'sparkline',
    'volume_sparkline',
    'streak_bars',

    # Capture boundary
    'parse_weight_input',
    'is_valid_weight',

    # Errors
    'StorageFailure',
    'MalformedPayload',
    'InvalidSample',

    # Utilities
    'canonical_date_key',
    'parse_date_key',
]
