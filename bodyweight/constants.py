"""
Constants for the body weight tracker.
Hard-coded values for capture limits, chart layout and sparkline policy.
"""

# Storage
DEFAULT_STORAGE_KEY = '@weight_entries'
DATE_KEY_FORMAT = '%Y-%m-%d'
DATE_KEY_PATTERN = r'^\d{4}-\d{2}-\d{2}$'

# Capture boundary (exclusive on both ends)
WEIGHT_LIMITS = {
    'MIN_EXCLUSIVE': 0.0,
    'MAX_EXCLUSIVE': 1000.0,
}

# Line chart layout
CHART_DEFAULTS = {
    'width': 300,
    'height': 220,
    'padding': {'top': 20, 'right': 16, 'bottom': 30, 'left': 40},
}

CHART_LIMITS = {
    'MIN_SAMPLES': 2,
    'MIN_EFFECTIVE_RANGE': 5.0,  # sample units
    'RANGE_PADDING_FRACTION': 0.10,
    'TICK_COUNT': 4,
    'TICK_DECIMALS': 1,
    'HIT_HALF_WIDTH': 15.0,  # px
    'BADGE_THRESHOLD': 0.1,  # sample units, strictly greater shows the badge
}

# Sparklines
SPARKLINE_DEFAULTS = {
    'width': 120,
    'height': 40,
    'vertical_padding_fraction': 0.15,
    'collapsed_range': 1.0,
}

VOLUME_SPARKLINE = {
    'MIN_QUALIFYING_DAYS': 2,
    'WINDOW': 10,
}

STREAK_BARS = {
    'WINDOW': 14,
    'GAP': 2.0,  # px between bars
    'TOP_INSET': 4.0,  # px kept free above a full bar
    'INACTIVE_HEIGHT_FRACTION': 0.2,
}
