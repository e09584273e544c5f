"""
PRECISION HEALTH ENGINE
=======================
Personalized life expectancy and stomach cancer risk from a lifestyle
questionnaire.

Modules:
  - reference_data: Version-stamped mortality and coefficient tables
  - hazard_ratios:  Questionnaire → hazard factors → aggregate multiplier
  - survival:       Life-table stepper, calibration, median age
  - economics:      Expected pre-retirement earnings (value of health)
  - factor_impact:  Per-factor years-of-life approximation
  - stomach_risk:   Logistic regression stomach cancer score
  - health_engine:  run_health_analysis() orchestration
  - advice:         Lifestyle improvement suggestions
  - symptom_guide:  Symptom self-care guide
"""

from .config import EngineConfig
from .inputs import (
    Alcohol,
    AtrophicGastritis,
    Exercise,
    Polypharmacy,
    Pylori,
    Sex,
    Smoking,
    UserData,
)
from .reference_data import ReferenceData, ReferenceDataError, load_reference_data
from .hazard_ratios import HazardFactor
from .stomach_risk import RiskLevel, StomachCancerResult, calculate_stomach_risk
from .health_engine import SimulationResult, run_health_analysis
from .advice import lifestyle_suggestions
from .symptom_guide import get_symptom_guidance

__version__ = "1.0.0"
__all__ = [
    # Inputs
    "UserData",
    "Sex",
    "Alcohol",
    "Smoking",
    "Exercise",
    "Pylori",
    "AtrophicGastritis",
    "Polypharmacy",
    # Configuration / reference data
    "EngineConfig",
    "ReferenceData",
    "ReferenceDataError",
    "load_reference_data",
    # Engines
    "HazardFactor",
    "SimulationResult",
    "run_health_analysis",
    "StomachCancerResult",
    "RiskLevel",
    "calculate_stomach_risk",
    "lifestyle_suggestions",
    "get_symptom_guidance",
]
