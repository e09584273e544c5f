"""
PRECISION HEALTH UTILITIES v1.0
===============================
Shared helpers for safe type handling of questionnaire values.

USAGE:
    from precision_health.utils import safe_float, safe_int, safe_bool

    # Instead of:
    height = float(form.get('height'))   # CRASH if height is None or ""!

    # Use:
    height = safe_float(form.get('height'), 170)   # never crashes
"""

import math
from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)

# Strings that mean "no value" in form payloads
MISSING_TOKENS = ('', 'null', 'unknown', 'n/a', 'none', 'nan', '-')

TRUE_TOKENS = ('yes', 'y', 'true', 't', '1', 'on')
FALSE_TOKENS = ('no', 'n', 'false', 'f', '0', 'off')


def safe_float(value, default=0.0):
    """
    Converts a value to float without ever raising.

    Handles:
    - None → default
    - "" / "null" / "N/A" / "unknown" → default
    - numbers → float
    - numeric strings ("170", "65.5") → float
    - comma decimals ("65,5") → 65.5
    - NaN / infinity → default

    Examples:
        >>> safe_float(None, 170)
        170.0
        >>> safe_float("65,5")
        65.5
        >>> safe_float("N/A")
        0.0
    """
    if value is None or isinstance(value, bool):
        return float(default)

    if isinstance(value, str):
        value = value.strip()
        if value.lower() in MISSING_TOKENS:
            return float(default)
        value = value.replace(',', '.')

    try:
        result = float(value)
    except (ValueError, TypeError):
        return float(default)

    if math.isnan(result) or math.isinf(result):
        return float(default)
    return result


def safe_int(value, default=0):
    """
    Converts a value to int without ever raising.
    Fractional values are truncated ("40.7" → 40).
    """
    result = safe_float(value, float(default))
    return int(result)


def safe_bool(value, default=False):
    """
    Converts form values to bool.

    Accepts real booleans, numbers (0 / non-zero) and the strings
    yes/no, true/false, 1/0, on/off (any case).
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
    return default


def safe_choice(value, enum_cls: Type[E], default: E) -> E:
    """
    Maps a raw value onto an Enum member by value (case-insensitive).

    Returns the default for anything that is not a known member.

    Example:
        >>> safe_choice("Current", Smoking, Smoking.NEVER)
        <Smoking.CURRENT: 'current'>
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    token = str(value).strip().lower()
    for member in enum_cls:
        if member.value == token:
            return member
    return default


def clamp(value: float, low: float, high: float) -> float:
    """Clamps value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for positive values (2.5 → 3, not 2)."""
    return int(math.floor(value + 0.5))


def calculate_bmi(height_cm, weight_kg) -> Optional[float]:
    """
    BMI in kg/m², or None when height or weight is not positive.

    Args:
        height_cm: Height in centimetres (may be None)
        weight_kg: Weight in kilograms (may be None)
    """
    height = safe_float(height_cm, 0)
    weight = safe_float(weight_kg, 0)

    if height <= 0 or weight <= 0:
        return None

    return weight / (height / 100) ** 2
