"""
PRECISION HEALTH - Questionnaire Inputs
=======================================
Typed record of the questionnaire answers consumed by the engines.

The presentation layer delivers loosely typed payloads (strings for
numbers, "yes"/"no" for flags): UserData.from_dict() normalizes them
without ever raising, falling back to the questionnaire defaults.
"""

import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional

from .utils import calculate_bmi, clamp, safe_bool, safe_choice, safe_float, safe_int

log = logging.getLogger("precision_health.inputs")


# =============================================================================
# ENUMS
# =============================================================================

class Sex(Enum):
    MALE = "male"
    FEMALE = "female"


class Alcohol(Enum):
    NONE = "none"
    MODERATE = "moderate"
    HEAVY = "heavy"


class Smoking(Enum):
    NEVER = "never"
    PAST = "past"
    CURRENT = "current"


class Exercise(Enum):
    YES = "yes"
    NO = "no"


class Pylori(Enum):
    """Helicobacter pylori infection status"""
    UNKNOWN = "unknown"
    NEGATIVE = "negative"
    ERADICATED = "eradicated"
    CURRENT = "current"


class AtrophicGastritis(Enum):
    UNKNOWN = "unknown"
    NO = "no"
    YES = "yes"


class Polypharmacy(Enum):
    """Number of regular prescription drugs"""
    NONE = "0"
    SOME = "1-4"
    MANY = "5+"


# =============================================================================
# DATACLASS
# =============================================================================

@dataclass(frozen=True)
class UserData:
    """Questionnaire answers (defaults match the empty questionnaire)"""
    age: int = 40
    sex: Sex = Sex.MALE
    height: float = 170.0  # cm
    weight: float = 65.0   # kg
    alcohol: Alcohol = Alcohol.NONE
    smoking: Smoking = Smoking.NEVER
    exercise: Exercise = Exercise.NO
    pylori: Pylori = Pylori.UNKNOWN
    atrophic_gastritis: AtrophicGastritis = AtrophicGastritis.UNKNOWN
    polypharmacy: Polypharmacy = Polypharmacy.NONE

    # History flags
    fam_cancer: bool = False
    parent_long: bool = False
    allergy: bool = False
    hist_cancer: bool = False
    hist_stroke: bool = False
    hist_heart: bool = False
    dm: bool = False
    htn: bool = False
    dl: bool = False
    inf_hep: bool = False
    inf_hpv: bool = False

    @property
    def bmi(self) -> Optional[float]:
        return calculate_bmi(self.height, self.weight)

    def with_age_clamped(self, last_age: int) -> "UserData":
        """Copy with age clamped into the reference table range [0, last_age]."""
        clamped = int(clamp(self.age, 0, last_age))
        if clamped == self.age:
            return self
        log.debug("Age %s clamped to %s", self.age, clamped)
        return replace(self, age=clamped)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "UserData":
        """
        Builds UserData from a loosely typed mapping.

        Missing keys take the default; unrecognized categorical values
        fall back to the default with a warning.
        """
        data = data or {}
        defaults = cls()
        values = {}

        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            default = getattr(defaults, f.name)

            if isinstance(default, Enum):
                parsed = safe_choice(raw, type(default), default)
                if parsed is default and raw is not None and str(raw).strip().lower() != default.value:
                    log.warning("Unrecognized %s=%r, using '%s'", f.name, raw, default.value)
            elif isinstance(default, bool):
                parsed = safe_bool(raw, default)
            elif isinstance(default, int):
                parsed = safe_int(raw, default)
            else:
                parsed = safe_float(raw, default)

            values[f.name] = parsed

        return cls(**values)

    def to_dict(self) -> dict:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.value if isinstance(value, Enum) else value
        return out


def coerce_inputs(inputs) -> UserData:
    """Accepts a UserData or a plain mapping."""
    if isinstance(inputs, UserData):
        return inputs
    return UserData.from_dict(inputs)
