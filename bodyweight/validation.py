"""
Capture-boundary validation for weight input.

Values are checked here, before they reach the store; the store itself
accepts whatever it is given.
"""

import math
from typing import Optional, Tuple, Union

from bodyweight.constants import WEIGHT_LIMITS
from bodyweight.exceptions import InvalidSample


class WeightValidator:
    """Validates captured weights against the accepted numeric domain."""

    MIN_EXCLUSIVE = WEIGHT_LIMITS['MIN_EXCLUSIVE']
    MAX_EXCLUSIVE = WEIGHT_LIMITS['MAX_EXCLUSIVE']

    @staticmethod
    def validate_weight(weight: float) -> Tuple[bool, Optional[str]]:
        """Check a numeric weight. Returns (is_valid, reason)."""
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            return False, f"not a number ({type(weight).__name__})"
        if math.isnan(weight) or math.isinf(weight):
            return False, "not a finite number"
        if weight <= WeightValidator.MIN_EXCLUSIVE:
            return False, f"must be greater than {WeightValidator.MIN_EXCLUSIVE:g}"
        if weight >= WeightValidator.MAX_EXCLUSIVE:
            return False, f"must be less than {WeightValidator.MAX_EXCLUSIVE:g}"
        return True, None


def is_valid_weight(weight) -> bool:
    is_valid, _ = WeightValidator.validate_weight(weight)
    return is_valid


def parse_weight_input(raw: Union[str, int, float]) -> float:
    """
    Parse user input into an accepted weight.

    Args:
        raw: text from an input field, or a number

    Returns:
        The weight as a float

    Raises:
        InvalidSample: input is not a number or is outside 0 < w < 1000
    """
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidSample(raw, "empty input")
        try:
            value = float(text)
        except ValueError:
            raise InvalidSample(raw, "not a number")
    else:
        value = raw

    is_valid, reason = WeightValidator.validate_weight(value)
    if not is_valid:
        raise InvalidSample(raw, reason)
    return float(value)
