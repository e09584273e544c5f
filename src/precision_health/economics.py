"""
PRECISION HEALTH - Economic Valuator
====================================
Expected pre-retirement earnings on top of a survival curve.

Each working year contributes survival_probability × annual wage, so
risk factors lower expected earnings a little every year even when life
expectancy extends well past retirement.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import DEFAULT_CONFIG, EngineConfig

log = logging.getLogger("precision_health.economics")


@dataclass(frozen=True)
class EconomicValue:
    """Value of health for the three scenarios (JPY)"""
    earnings_average: float
    earnings_current: float
    earnings_ideal: float
    current_loss: float       # average − current, floored at 0
    potential_gain: float     # ideal − current, floored at 0

    def to_dict(self) -> dict:
        return {
            "current_loss": self.current_loss,
            "potential_gain": self.potential_gain,
            "earnings_average": self.earnings_average,
            "earnings_current": self.earnings_current,
            "earnings_ideal": self.earnings_ideal,
        }


def expected_earnings(age: int, curve: Sequence[float],
                      config: EngineConfig = DEFAULT_CONFIG) -> float:
    """
    Σ survival(age + i) × hourly_wage × annual_hours for every year until
    retirement. Years past the simulated horizon count as zero.
    """
    years_to_work = max(0, config.retirement_age - age)
    if years_to_work == 0:
        return 0.0

    probs = np.zeros(years_to_work)
    available = min(years_to_work, len(curve))
    probs[:available] = curve[:available]

    return float(np.sum(probs * config.annual_wage))


def value_of_health(age: int, average_curve: Sequence[float], user_curve: Sequence[float],
                    ideal_curve: Sequence[float],
                    config: EngineConfig = DEFAULT_CONFIG) -> EconomicValue:
    """
    Expected earnings for the population, the user and the ideal lifestyle.

    Only asymmetric figures are reported: a loss when the user earns less
    than the average person, a gain when the ideal lifestyle earns more
    than the user. Neither is ever negative.
    """
    avg = expected_earnings(age, average_curve, config)
    current = expected_earnings(age, user_curve, config)
    ideal = expected_earnings(age, ideal_curve, config)

    value = EconomicValue(
        earnings_average=avg,
        earnings_current=current,
        earnings_ideal=ideal,
        current_loss=max(0.0, avg - current),
        potential_gain=max(0.0, ideal - current),
    )
    log.debug("Earnings avg=%.0f current=%.0f ideal=%.0f", avg, current, ideal)
    return value
