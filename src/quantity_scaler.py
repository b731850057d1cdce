#!/usr/bin/env python3
"""
Ingredient Quantity Scaling
Parses free-form ingredient amounts and nutrition values, scales them by a
serving-count ratio and renders them back to display strings.
"""

import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

Number = Union[int, float]

# Display unit per nutrition key
NUTRITION_UNITS: Dict[str, str] = {
    "calories": "cal",
    "protein": "g",
    "carbs": "g",
    "fat": "g",
    "fiber": "g",
    "sugar": "g",
    "sodium": "mg",
}

MIXED_NUMBER_PATTERN = re.compile(r'^(\d+)\s+(\d+)/(\d+)$')
FRACTION_PATTERN = re.compile(r'^(\d+)/(\d+)$')
NON_NUMERIC_CHARS = re.compile(r'[^0-9.\-]')
RANGE_PATTERN = re.compile(r'\d\s*-\s*\d')
RANGE_SIDE_PATTERN = re.compile(r'^(\d+(\.\d+)?|\.\d+|\d+/\d+|\d+\s+\d+/\d+)$')

TWO_PLACES = Decimal("0.01")
# Wide enough for any finite float at two decimals
WIDE_CONTEXT = Context(prec=400)


def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Parse a quantity string into a number.

    Tries a mixed number ("2 1/4"), a simple fraction ("1/2") and finally a
    plain decimal with every non-numeric character stripped. Text holding a
    "/" that is not a clean fraction or mixed number is not a quantity, so
    "1/2 cup" gives None instead of collapsing to 12.

    Args:
        text: Quantity text

    Returns:
        Parsed value, or None when the text is not a numeric quantity
    """
    if text is None:
        return None

    trimmed = str(text).strip()
    if not trimmed:
        return None

    mixed_match = MIXED_NUMBER_PATTERN.match(trimmed)
    if mixed_match:
        whole, numerator, denominator = (int(g) for g in mixed_match.groups())
        if denominator == 0:
            return float(whole)
        return whole + numerator / denominator

    fraction_match = FRACTION_PATTERN.match(trimmed)
    if fraction_match:
        numerator, denominator = (int(g) for g in fraction_match.groups())
        if denominator == 0:
            return float(numerator)
        return numerator / denominator

    # "1 1/2 cups" would otherwise collapse to 112
    if '/' in trimmed:
        return None

    stripped = NON_NUMERIC_CHARS.sub('', trimmed)
    if not stripped:
        return None

    try:
        value = float(stripped)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return value


def format_number(value: Number) -> str:
    """Format a number with at most two decimals and no trailing zeros."""
    if not math.isfinite(value):
        return "0"

    rounded = Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP, context=WIDE_CONTEXT)
    fixed = format(rounded, 'f')
    if fixed.endswith(".00"):
        fixed = fixed[:-3]
    elif fixed.endswith("0"):
        fixed = fixed[:-1]

    if fixed == "-0":
        return "0"
    return fixed


def scale_ratio(base_servings: Number, target_servings: Number) -> float:
    """Target/base ratio; 1 when the base serving count is not positive."""
    if base_servings and base_servings > 0:
        return target_servings / base_servings
    return 1.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scale_range(text: str, ratio: float) -> Optional[str]:
    """
    Scale both ends of a quantity range such as "10-12".

    Returns None unless the text is exactly two plain quantities joined by a
    hyphen.
    """
    parts = str(text).strip().split('-')
    if len(parts) != 2:
        return None

    left_text, right_text = (part.strip() for part in parts)
    if not (RANGE_SIDE_PATTERN.match(left_text) and RANGE_SIDE_PATTERN.match(right_text)):
        return None

    left = parse_number(left_text)
    right = parse_number(right_text)
    if left is None or right is None:
        return None

    return f"{format_number(left * ratio)}-{format_number(right * ratio)}"


def _scale_amount_by_ratio(amount: Optional[str], ratio: float) -> Optional[str]:
    if not amount:
        return amount

    raw = str(amount).strip()

    if RANGE_PATTERN.search(raw):
        scaled_range = scale_range(raw, ratio)
        return scaled_range if scaled_range is not None else amount

    value = parse_number(raw)
    if value is None:
        return amount
    return format_number(value * ratio)


def _format_scaled_nutrition(key: str, scaled: float) -> str:
    rounded = _round_half_up(scaled) if math.isfinite(scaled) else 0
    return f"{rounded}{nutrition_unit(key)}"


def scale_amount(amount: Optional[str], base_servings: Number,
                 target_servings: Number) -> Optional[str]:
    """
    Scale an ingredient amount string to a new serving count.

    Ranges such as "10-12" have both ends scaled. Text that is not a numeric
    quantity ("to taste", "a pinch") comes back unchanged, as does a range
    whose ends cannot both be parsed.

    Args:
        amount: Amount as authored for the base serving count
        base_servings: Servings the recipe was written for
        target_servings: Servings to display

    Returns:
        Scaled display amount
    """
    return _scale_amount_by_ratio(amount, scale_ratio(base_servings, target_servings))


def scale_nutrition_value(value: Number, base_servings: Number,
                          target_servings: Number) -> float:
    """Scale a plain nutrition number by the serving ratio."""
    return value * scale_ratio(base_servings, target_servings)


def nutrition_unit(key: str) -> str:
    """Display unit for a nutrition key, empty for unknown keys."""
    return NUTRITION_UNITS.get(str(key).lower(), "")


def format_nutrition_value(key: str, value: Number, base_servings: Number,
                           target_servings: Number) -> str:
    """
    Format a nutrition value for display, e.g. "400cal" or "5g".

    Nutrition values are shown as whole numbers.
    """
    return _format_scaled_nutrition(key, scale_nutrition_value(value, base_servings, target_servings))


class QuantityScaler:
    """Scales amounts and nutrition values for one serving selection."""

    def __init__(self, base_servings: Number, target_servings: Number):
        self.base_servings = base_servings
        self.target_servings = target_servings
        self.ratio = scale_ratio(base_servings, target_servings)

    def scale_amount(self, amount: Optional[str]) -> Optional[str]:
        return _scale_amount_by_ratio(amount, self.ratio)

    def scale_nutrition(self, value: Number) -> float:
        return value * self.ratio

    def format_nutrition(self, key: str, value: Number) -> str:
        return _format_scaled_nutrition(key, self.scale_nutrition(value))

    def __repr__(self) -> str:
        return (f"QuantityScaler(base_servings={self.base_servings}, "
                f"target_servings={self.target_servings})")
