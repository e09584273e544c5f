"""
PRECISION HEALTH - Survival Simulator
=====================================
Cohort life-table stepper under a multiplicative hazard ratio.

For each year of age the baseline death probability qx is adjusted by
the hazard ratio (q_adj = 1 - (1 - qx) ** hr), survival is advanced and
remaining life expectancy is accumulated with the trapezoidal rule.

Calibration: the run at hr = 1.0 is compared with the official life
expectancy for the same age/sex; the difference (bias) is added to every
simulated figure so the model stays anchored to the official statistic
while isolating the marginal effect of the risk factors.
"""

import logging
from dataclasses import dataclass
from typing import List

from .config import DEFAULT_CONFIG, EngineConfig
from .reference_data import MortalityTable

log = logging.getLogger("precision_health.survival")


@dataclass(frozen=True)
class SurvivalRun:
    """Single simulator run"""
    start_age: int
    hazard_ratio: float
    life_expectancy: float   # remaining years, uncalibrated
    curve: List[float]       # survival from start_age, curve[0] == 1.0


def adjusted_mortality(q_base: float, hazard_ratio: float) -> float:
    """
    Hazard-adjusted annual death probability, capped at 1.0.

    Scaling the survival probability by the exponent keeps the result in
    [0, 1] for any q_base in [0, 1] and any non-negative hazard ratio.
    """
    q_adj = 1.0 - (1.0 - q_base) ** hazard_ratio
    return min(q_adj, 1.0)


def simulate(start_age: int, table: MortalityTable, hazard_ratio: float,
             config: EngineConfig = DEFAULT_CONFIG) -> SurvivalRun:
    """
    Steps survival year by year from start_age to config.max_age.

    Args:
        start_age: Integer age, clamped to the last table entry
        table: Mortality table of the subject's sex
        hazard_ratio: Multiplier applied to the baseline hazard

    Returns:
        SurvivalRun with remaining life expectancy and survival curve
    """
    age = min(start_age, table.last_age)
    lx = 1.0
    le = 0.0
    curve = []

    for t in range(age, config.max_age):
        q_adj = adjusted_mortality(table.death_probability(t), hazard_ratio)
        lx_next = lx * (1.0 - q_adj)

        le += (lx + lx_next) / 2.0
        curve.append(lx)
        lx = lx_next

        if lx < config.survival_floor:
            break

    return SurvivalRun(start_age=age, hazard_ratio=hazard_ratio,
                       life_expectancy=le, curve=curve)


def calibration_bias(official_ex: float, baseline: SurvivalRun) -> float:
    """Official remaining life expectancy minus the hr = 1.0 simulation."""
    bias = official_ex - baseline.life_expectancy
    log.debug("Calibration bias %.4f (official %.2f, simulated %.4f)",
              bias, official_ex, baseline.life_expectancy)
    return bias


def median_age(age: int, curve: List[float], life_expectancy: float) -> float:
    """
    Age at which survival crosses 0.5, linearly interpolated.

    Falls back to age + life_expectancy when the curve never drops to
    0.5 within the simulated horizon.
    """
    for i, curr in enumerate(curve):
        if curr <= 0.5:
            prev = curve[i - 1] if i > 0 else 1.0
            frac = (prev - 0.5) / (prev - curr)
            return (age + i - 1) + frac
    return age + life_expectancy
