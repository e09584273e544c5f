"""
PRECISION HEALTH - Hazard Ratio Aggregator
==========================================
Maps questionnaire answers to named hazard factors and combines them
multiplicatively into one aggregate mortality multiplier.

Also derives the "ideal lifestyle" multiplier used by the economic
model: what the hazard would be if modifiable habits were fixed.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .inputs import Alcohol, Exercise, Polypharmacy, Pylori, Smoking, UserData
from .reference_data import ReferenceData

log = logging.getLogger("precision_health.hazard")

# Factor definitions (ratios live in the reference data)
#   bonus:     protective lifestyle factor, kept as observed in the ideal scenario
#   immutable: history/constitution, kept as observed in the ideal scenario
FACTOR_DEFINITIONS = {
    # BMI
    "bmi_underweight": {"label": "Underweight (BMI < 18.5)", "bonus": False, "immutable": False},
    "bmi_obese": {"label": "Obesity (BMI >= 30)", "bonus": False, "immutable": False},
    "bmi_overweight": {"label": "Overweight (BMI 25-30)", "bonus": False, "immutable": False},

    # Lifestyle
    "alcohol_moderate": {"label": "Moderate drinking (bonus)", "bonus": True, "immutable": False},
    "alcohol_heavy": {"label": "Heavy drinking", "bonus": False, "immutable": False},
    "smoking_never": {"label": "Never smoked (bonus)", "bonus": True, "immutable": False},
    "smoking_past": {"label": "Former smoker", "bonus": False, "immutable": False},
    "smoking_current": {"label": "Current smoker", "bonus": False, "immutable": False},
    "exercise_yes": {"label": "Regular exercise (bonus)", "bonus": True, "immutable": False},
    "exercise_no": {"label": "Physical inactivity", "bonus": False, "immutable": False},
    "polypharmacy_some": {"label": "Regular medication (1-4 drugs)", "bonus": False, "immutable": False},
    "polypharmacy_many": {"label": "Polypharmacy (5+ drugs)", "bonus": False, "immutable": False},

    # H. pylori
    "pylori_negative": {"label": "H. pylori never infected (bonus)", "bonus": True, "immutable": False},
    "pylori_current": {"label": "H. pylori current infection", "bonus": False, "immutable": False},
    "pylori_eradicated": {"label": "H. pylori eradicated (bonus)", "bonus": True, "immutable": False},

    # Family / constitution
    "fam_cancer": {"label": "Family history of cancer", "bonus": False, "immutable": True},
    "parent_long": {"label": "Long-lived parents (bonus)", "bonus": True, "immutable": True},
    "allergy": {"label": "Allergic constitution", "bonus": False, "immutable": True},

    # Personal history / chronic conditions
    "hist_cancer": {"label": "History of cancer", "bonus": False, "immutable": True},
    "hist_stroke": {"label": "History of stroke", "bonus": False, "immutable": True},
    "hist_heart": {"label": "History of heart disease", "bonus": False, "immutable": True},
    "dm": {"label": "Diabetes", "bonus": False, "immutable": True},
    "htn": {"label": "Hypertension", "bonus": False, "immutable": True},
    "dl": {"label": "Dyslipidemia", "bonus": False, "immutable": True},

    # Infections
    "inf_hep": {"label": "Hepatitis virus", "bonus": False, "immutable": False},
    "inf_hpv": {"label": "HPV", "bonus": False, "immutable": False},
}

# Boolean history flags in questionnaire order
FLAG_FACTORS = (
    "fam_cancer", "parent_long", "allergy",
    "hist_cancer", "hist_stroke", "hist_heart",
    "dm", "htn", "dl", "inf_hep", "inf_hpv",
)

# Protective multipliers applied in the ideal scenario when the
# current habit is not already optimal
IDEAL_SMOKING_HR = 0.85
IDEAL_EXERCISE_HR = 0.85
IDEAL_ALCOHOL_HR = 0.9


@dataclass(frozen=True)
class HazardFactor:
    key: str
    label: str
    hr: float
    bonus: bool = False
    immutable: bool = False


def _factor(key: str, reference: ReferenceData) -> HazardFactor:
    info = FACTOR_DEFINITIONS[key]
    return HazardFactor(
        key=key,
        label=info["label"],
        hr=reference.hazard_ratio(key),
        bonus=info["bonus"],
        immutable=info["immutable"],
    )


def _bmi_factor_key(bmi: Optional[float]) -> Optional[str]:
    if bmi is None:
        return None
    if bmi < 18.5:
        return "bmi_underweight"
    if bmi >= 30:
        return "bmi_obese"
    if bmi >= 25:
        return "bmi_overweight"
    return None


def collect_hazard_factors(data: UserData, reference: ReferenceData) -> List[HazardFactor]:
    """
    Ordered list of active hazard factors for the questionnaire.

    Neutral answers (normal BMI, no alcohol, no medication, unknown
    pylori status, unset flags) contribute nothing.
    """
    keys = []

    bmi_key = _bmi_factor_key(data.bmi)
    if bmi_key:
        keys.append(bmi_key)

    if data.alcohol == Alcohol.MODERATE:
        keys.append("alcohol_moderate")
    elif data.alcohol == Alcohol.HEAVY:
        keys.append("alcohol_heavy")

    if data.smoking == Smoking.NEVER:
        keys.append("smoking_never")
    elif data.smoking == Smoking.PAST:
        keys.append("smoking_past")
    else:
        keys.append("smoking_current")

    if data.exercise == Exercise.YES:
        keys.append("exercise_yes")
    else:
        keys.append("exercise_no")

    if data.polypharmacy == Polypharmacy.SOME:
        keys.append("polypharmacy_some")
    elif data.polypharmacy == Polypharmacy.MANY:
        keys.append("polypharmacy_many")

    if data.pylori == Pylori.NEGATIVE:
        keys.append("pylori_negative")
    elif data.pylori == Pylori.CURRENT:
        keys.append("pylori_current")
    elif data.pylori == Pylori.ERADICATED:
        keys.append("pylori_eradicated")

    keys.extend(flag for flag in FLAG_FACTORS if getattr(data, flag))

    return [_factor(key, reference) for key in keys]


def aggregate_hazard_ratio(factors: List[HazardFactor], floor: float = 0.3) -> float:
    """Product of all factor ratios, floored (max 70% risk reduction)."""
    total = 1.0
    for f in factors:
        total *= f.hr
    return max(total, floor)


def ideal_hazard_ratio(data: UserData, factors: List[HazardFactor]) -> float:
    """
    Hazard multiplier of the "ideal lifestyle" scenario.

    Immutable factors and every bonus factor are kept exactly as
    observed; all other factors are dropped. Then smoking, exercise
    and heavy drinking are replaced by fixed protective multipliers
    when the current choice is not already the optimal one.
    """
    # Bonus factors stay even when they are lifestyle factors
    # (a moderate drinker keeps alcohol_moderate).
    hr_ideal = 1.0
    for f in factors:
        if f.immutable:
            hr_ideal *= f.hr
        elif f.bonus:
            hr_ideal *= f.hr

    if data.smoking != Smoking.NEVER:
        hr_ideal *= IDEAL_SMOKING_HR
    if data.exercise != Exercise.YES:
        hr_ideal *= IDEAL_EXERCISE_HR
    if data.alcohol == Alcohol.HEAVY:
        hr_ideal *= IDEAL_ALCOHOL_HR

    log.debug("Ideal HR %.4f from %d observed factors", hr_ideal, len(factors))
    return hr_ideal
