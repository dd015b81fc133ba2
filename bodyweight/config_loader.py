"""
Configuration loader: built-in defaults overridden section by section
from a TOML file.
"""
import copy
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from bodyweight.constants import CHART_DEFAULTS, DEFAULT_STORAGE_KEY, SPARKLINE_DEFAULTS

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and interprets configuration."""

    PADDING_SIDES = ("top", "right", "bottom", "left")

    DEFAULT_VIZ = {
        "line_color": "#34C759",
        "fill_color": "rgba(52, 199, 89, 0.12)",
        "marker_fill": "#FFFFFF",
        "grid_color": "#E5E5EA",
        "label_color": "#8E8E93",
        "output_dir": "output",
    }

    @classmethod
    def load(cls, config_path: str = "config.toml") -> Dict[str, Any]:
        """Load and interpret a configuration file. Missing files fall back to defaults."""
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            raw_config = {}
        else:
            with open(path, "rb") as f:
                raw_config = tomllib.load(f)

        config = cls._build_base_config()
        cls._apply_overrides(config, raw_config)
        return config

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        """Configuration used when no file is given."""
        return cls._build_base_config()

    @classmethod
    def _build_base_config(cls) -> Dict[str, Any]:
        """Build the base configuration structure."""
        return {
            "storage": {
                "path": "data",
                "key": DEFAULT_STORAGE_KEY,
            },
            "chart": copy.deepcopy(CHART_DEFAULTS),
            "sparkline": {
                "width": SPARKLINE_DEFAULTS["width"],
                "height": SPARKLINE_DEFAULTS["height"],
            },
            "logging": {
                "level": "WARNING",
                "structured": False,
            },
            "viz": dict(cls.DEFAULT_VIZ),
        }

    @classmethod
    def _apply_overrides(cls, config: Dict, raw_config: Dict):
        """Apply explicit values from the file over the defaults."""
        for section in ("storage", "sparkline", "logging", "viz"):
            if section in raw_config:
                config[section].update(raw_config[section])

        chart = raw_config.get("chart", {})
        for dim in ("width", "height"):
            if dim in chart:
                config["chart"][dim] = chart[dim]

        padding = chart.get("padding", {})
        unknown = set(padding) - set(cls.PADDING_SIDES)
        if unknown:
            logger.warning(f"Ignoring unknown chart padding keys: {', '.join(sorted(unknown))}")
        for side in cls.PADDING_SIDES:
            if side in padding:
                config["chart"]["padding"][side] = padding[side]


def load_config(config_path: str = "config.toml") -> Dict[str, Any]:
    """Load configuration with defaults applied."""
    return ConfigLoader.load(config_path)
