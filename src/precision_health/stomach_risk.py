"""
PRECISION HEALTH - Stomach Cancer Risk Scorer
=============================================
Logistic regression on birth cohort, sex, H. pylori status, atrophic
gastritis, family history, diabetes, smoking and drinking.

    logit       = intercept + Σ terms
    probability = 1 / (1 + e^-logit)
    score       = round(probability × 98) + 1        → [1, 99]

Every term is reported as a signed log-odds contribution (SHAP-like
explanation of the score). H. pylori and atrophic gastritis dominate
the model: when either is unknown no numeric estimate is produced.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from scipy.special import expit

from .inputs import Alcohol, AtrophicGastritis, Pylori, Sex, Smoking, UserData, coerce_inputs
from .reference_data import ReferenceData, load_reference_data
from .utils import round_half_up

log = logging.getLogger("precision_health.stomach")


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


ADVICE = {
    RiskLevel.UNKNOWN: (
        "An accurate risk estimate needs an H. pylori test and an assessment of "
        "atrophic gastritis (e.g. by gastroscopy). Please consult your family doctor first."
    ),
    RiskLevel.LOW: (
        "Your risk currently appears low. Keep up a healthy lifestyle and attend the "
        "stomach cancer screening recommended by your municipality (from age 50)."
    ),
    RiskLevel.MEDIUM: (
        "Some risk factors are present. Ask your family doctor about regular stomach "
        "examinations such as gastroscopy. Reviewing your lifestyle is also recommended."
    ),
    RiskLevel.HIGH: (
        "Your stomach cancer risk appears relatively high. Yearly endoscopic follow-up is "
        "recommended even without symptoms. Please see a gastroenterologist soon to plan "
        "further examinations."
    ),
}


@dataclass(frozen=True)
class Contribution:
    label: str
    value: float  # log-odds

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value, "is_positive": self.is_positive}


@dataclass(frozen=True)
class StomachCancerResult:
    score: int
    level: RiskLevel
    advice: str
    contributions: List[Contribution] = field(default_factory=list)
    probability: Optional[float] = None
    logit: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "advice": self.advice,
            "contributions": [c.to_dict() for c in self.contributions],
            "probability": self.probability,
            "logit": self.logit,
        }


def unknown_result() -> StomachCancerResult:
    return StomachCancerResult(score=0, level=RiskLevel.UNKNOWN,
                               advice=ADVICE[RiskLevel.UNKNOWN], contributions=[])


def classify_probability(probability: float, medium: float, high: float) -> RiskLevel:
    if probability < medium:
        return RiskLevel.LOW
    if probability < high:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def probability_to_score(probability: float) -> int:
    """Maps a probability in [0, 1] onto the 1..99 display score."""
    return round_half_up(probability * 98) + 1


def calculate_stomach_risk(inputs, reference: Optional[ReferenceData] = None,
                           current_year: Optional[int] = None) -> StomachCancerResult:
    """
    Stomach cancer risk score for the questionnaire.

    Args:
        inputs: UserData or a plain mapping of answers
        reference: Reference dataset (bundled default if None)
        current_year: Year used to derive the birth cohort (today if None)

    Returns:
        StomachCancerResult; the "unknown" result when H. pylori or atrophic
        gastritis status is unknown
    """
    data: UserData = coerce_inputs(inputs)

    if data.pylori == Pylori.UNKNOWN or data.atrophic_gastritis == AtrophicGastritis.UNKNOWN:
        log.debug("Stomach risk not computed: screening data missing")
        return unknown_result()

    reference = reference or load_reference_data()
    coeffs = reference.stomach
    year = current_year if current_year is not None else date.today().year
    birth_year = year - data.age

    pylori = 0.0
    if data.pylori == Pylori.CURRENT:
        pylori = coeffs.term("pylori_current")
    elif data.pylori == Pylori.ERADICATED:
        pylori = coeffs.term("pylori_eradicated")

    smoking = 0.0
    if data.smoking == Smoking.CURRENT:
        smoking = coeffs.term("smoking_current")
    elif data.smoking == Smoking.PAST:
        smoking = coeffs.term("smoking_past")

    drinking = 0.0
    if data.alcohol == Alcohol.HEAVY:
        drinking = coeffs.term("drinking_heavy")
    elif data.alcohol == Alcohol.MODERATE:
        drinking = coeffs.term("drinking_moderate")

    terms = [
        Contribution("Birth cohort", coeffs.birth_year_term(birth_year)),
        Contribution("Sex", coeffs.term("sex_male") if data.sex == Sex.MALE else 0.0),
        Contribution("H. pylori", pylori),
        Contribution("Atrophic gastritis",
                     coeffs.term("atrophy_yes") if data.atrophic_gastritis == AtrophicGastritis.YES else 0.0),
        Contribution("Family history", coeffs.term("family_history_yes") if data.fam_cancer else 0.0),
        Contribution("Diabetes", coeffs.term("diabetes_yes") if data.dm else 0.0),
        Contribution("Smoking", smoking),
        Contribution("Drinking", drinking),
    ]

    logit = coeffs.intercept + sum(c.value for c in terms)
    probability = float(expit(logit))
    level = classify_probability(probability, coeffs.medium_threshold, coeffs.high_threshold)

    contributions = sorted(
        (c for c in terms if c.value != 0),
        key=lambda c: -abs(c.value),
    )

    log.debug("Stomach logit %.3f → p=%.3f (%s)", logit, probability, level.value)
    return StomachCancerResult(
        score=probability_to_score(probability),
        level=level,
        advice=ADVICE[level],
        contributions=contributions,
        probability=probability,
        logit=logit,
    )
