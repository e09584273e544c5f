"""
PRECISION HEALTH ENGINE v1.0
============================
Personalized life expectancy, survival trajectory, economic value of
health and stomach cancer risk from the questionnaire.

Flow:
  1. Hazard factors → aggregate hazard ratio
  2. Three survival runs: population (hr = 1.0), user, ideal lifestyle
  3. Calibration bias = official ex − population run
  4. Economic value on the three curves, per-factor impact breakdown
  5. Stomach cancer risk (independent model) merged into the result
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .config import EngineConfig
from .economics import EconomicValue, value_of_health
from .factor_impact import FactorImpact, decompose_factors
from .hazard_ratios import aggregate_hazard_ratio, collect_hazard_factors, ideal_hazard_ratio
from .inputs import UserData, coerce_inputs
from .reference_data import ReferenceData, load_reference_data
from .stomach_risk import StomachCancerResult, calculate_stomach_risk
from .survival import calibration_bias, median_age, simulate

log = logging.getLogger("precision_health.engine")


# =============================================================================
# DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class CurvePoint:
    age: int
    survival: float
    avg_survival: float


@dataclass(frozen=True)
class SimulationResult:
    """Full analysis result"""
    le: float              # remaining life expectancy (years)
    lifespan: float        # age + le
    median: float          # age at which survival reaches 50%
    diff: float            # le − official
    official: float        # official remaining life expectancy
    curve: List[CurvePoint]
    economic: EconomicValue
    factors: List[FactorImpact]
    hazard_ratio: float
    ideal_hazard_ratio: float
    reference_version: str
    stomach: Optional[StomachCancerResult] = None
    inputs: Optional[UserData] = field(default=None, repr=False)

    def curve_frame(self) -> pd.DataFrame:
        """Display curve as a DataFrame (age, survival, avg_survival)."""
        return pd.DataFrame(
            [(p.age, p.survival, p.avg_survival) for p in self.curve],
            columns=["age", "survival", "avg_survival"],
        )

    def to_dict(self) -> dict:
        return {
            "le": self.le,
            "lifespan": self.lifespan,
            "median": self.median,
            "diff": self.diff,
            "official": self.official,
            "curve": [
                {"age": p.age, "survival": p.survival, "avg_survival": p.avg_survival}
                for p in self.curve
            ],
            "economic": self.economic.to_dict(),
            "factors": [f.to_dict() for f in self.factors],
            "hazard_ratio": self.hazard_ratio,
            "ideal_hazard_ratio": self.ideal_hazard_ratio,
            "reference_version": self.reference_version,
            "stomach": self.stomach.to_dict() if self.stomach else None,
        }


# =============================================================================
# ANALYSIS
# =============================================================================

def _display_curve(age: int, user_curve: List[float], avg_curve: List[float],
                   max_age: int) -> List[CurvePoint]:
    points = []
    for i, prob in enumerate(user_curve):
        if age + i > max_age:
            break
        avg = avg_curve[i] if i < len(avg_curve) else 0.0
        points.append(CurvePoint(age=age + i, survival=prob, avg_survival=avg))
    return points


def run_health_analysis(inputs, reference: Optional[ReferenceData] = None,
                        config: Optional[EngineConfig] = None,
                        current_year: Optional[int] = None) -> SimulationResult:
    """
    Full life expectancy / economic / factor analysis.

    Args:
        inputs: UserData or a plain mapping of questionnaire answers
        reference: Reference dataset (bundled default if None)
        config: Engine parameters (PRECISION_HEALTH_* environment if None)
        current_year: Passed to the stomach cancer scorer

    Returns:
        SimulationResult with the embedded stomach cancer result
    """
    reference = reference or load_reference_data()
    config = config or EngineConfig.from_env()

    data = coerce_inputs(inputs)
    table = reference.table(data.sex)
    data = data.with_age_clamped(table.last_age)
    age = data.age

    official_ex = table.official_life_expectancy(age)

    # === Hazard ratio ===
    factors = collect_hazard_factors(data, reference)
    hr_total = aggregate_hazard_ratio(factors, config.hazard_floor)

    # === Simulation ===
    sim_base = simulate(age, table, 1.0, config)
    bias = calibration_bias(official_ex, sim_base)

    sim_user = simulate(age, table, hr_total, config)
    final_le = max(config.min_life_expectancy, sim_user.life_expectancy + bias)
    diff = final_le - official_ex

    median = median_age(age, sim_user.curve, final_le)

    # === Economic & ideal analysis ===
    hr_ideal = ideal_hazard_ratio(data, factors)
    sim_ideal = simulate(age, table, hr_ideal, config)

    economic = value_of_health(age, sim_base.curve, sim_user.curve, sim_ideal.curve, config)

    # === Factor breakdown ===
    impacts = decompose_factors(age, table, factors, bias, official_ex, config)

    stomach = calculate_stomach_risk(data, reference, current_year=current_year)

    log.info("Analysis age=%d sex=%s hr=%.3f le=%.2f (official %.2f)",
             age, data.sex.value, hr_total, final_le, official_ex)

    return SimulationResult(
        le=round(final_le, 2),
        lifespan=round(age + final_le, 1),
        median=round(median, 1),
        diff=round(diff, 2),
        official=round(official_ex, 2),
        curve=_display_curve(age, sim_user.curve, sim_base.curve, config.display_max_age),
        economic=economic,
        factors=impacts,
        hazard_ratio=hr_total,
        ideal_hazard_ratio=hr_ideal,
        reference_version=reference.version,
        stomach=stomach,
        inputs=data,
    )
