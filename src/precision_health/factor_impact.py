"""
PRECISION HEALTH - Factor Decomposer
====================================
Approximate years-of-life impact of each hazard factor.

Each factor is re-simulated on its own (its ratio as the only hazard
multiplier), calibrated with the same bias as the main run and compared
with the official life expectancy. This is an isolated single-factor
approximation, not an additive decomposition of the combined hazard:
the impacts do not sum to the total difference.
"""

from dataclasses import dataclass
from typing import List

from .config import DEFAULT_CONFIG, EngineConfig
from .hazard_ratios import HazardFactor
from .reference_data import MortalityTable
from .survival import simulate


@dataclass(frozen=True)
class FactorImpact:
    key: str
    label: str
    hr: float
    impact: float  # years vs official life expectancy, positive = life-extending

    def to_dict(self) -> dict:
        return {"key": self.key, "label": self.label, "hr": self.hr, "impact": self.impact}


def decompose_factors(age: int, table: MortalityTable, factors: List[HazardFactor],
                      bias: float, official_ex: float,
                      config: EngineConfig = DEFAULT_CONFIG) -> List[FactorImpact]:
    """Per-factor impacts, most life-extending first."""
    impacts = []
    for f in factors:
        run = simulate(age, table, f.hr, config)
        impacts.append(FactorImpact(
            key=f.key,
            label=f.label,
            hr=f.hr,
            impact=(run.life_expectancy + bias) - official_ex,
        ))

    return sorted(impacts, key=lambda x: -x.impact)
