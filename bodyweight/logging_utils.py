"""
Structured logging utilities for the weight tracker.
JSON lines for errors and metrics, plain `logging` for everything else.
"""

import json
import logging
import sys
from datetime import datetime
from enum import Enum


class LogLevel(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    METRIC = "METRIC"


_structured_enabled = True


def set_structured_logging(enabled: bool):
    """Turn JSON-line output on or off for every StructuredLogger."""
    global _structured_enabled
    _structured_enabled = enabled


def configure_logging(level: str = "WARNING", structured: bool = True):
    """Configure the root logger and structured output from config values."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    set_structured_logging(structured)


class StructuredLogger:
    """Simple structured logger for production use."""

    def __init__(self, name: str, enabled: bool = True):
        self.name = name
        self.enabled = enabled

    def _log(self, level: LogLevel, message: str, **kwargs):
        if not (self.enabled and _structured_enabled):
            return

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level.value,
            "logger": self.name,
            "message": message,
            **kwargs
        }

        # Errors and warnings to stderr, metrics to stdout for collection
        if level in (LogLevel.ERROR, LogLevel.WARNING):
            print(json.dumps(log_entry, default=str), file=sys.stderr)
        elif level == LogLevel.METRIC:
            print(json.dumps(log_entry, default=str))

    def error(self, message: str, **kwargs):
        self._log(LogLevel.ERROR, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(LogLevel.WARNING, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(LogLevel.INFO, message, **kwargs)

    def metric(self, metric_name: str, value: float, **tags):
        """Log a metric."""
        self._log(LogLevel.METRIC, f"Metric: {metric_name}",
                  metric=metric_name, value=value, tags=tags)


class PerformanceTimer:
    """Context manager emitting `<operation>_duration_ms` on exit."""

    def __init__(self, logger: StructuredLogger, operation: str, **tags):
        self.logger = logger
        self.operation = operation
        self.tags = tags
        self.start_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            self.duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
            self.logger.metric(f"{self.operation}_duration_ms", self.duration_ms,
                               operation=self.operation, failed=exc_type is not None,
                               **self.tags)


# Global logger instances
store_logger = StructuredLogger("store")
chart_logger = StructuredLogger("charts")
