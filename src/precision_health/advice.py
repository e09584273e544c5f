"""
PRECISION HEALTH - Lifestyle Suggestions
========================================
Concrete lifestyle actions when the ideal scenario shows room for
improvement (potential gain > 0).
"""

from dataclasses import dataclass, field
from typing import List

from .health_engine import SimulationResult
from .inputs import Alcohol, Exercise, Smoking, UserData, coerce_inputs

SUGGESTIONS = {
    "quit_smoking": "Quit smoking",
    "start_exercise": "Build an exercise habit",
    "reduce_drinking": "Cut down on drinking",
    "lose_weight": "Lose weight towards a healthy BMI",
    "improve_nutrition": "Improve nutrition",
}

NO_GAIN_MESSAGE = "Excellent health management! Your current lifestyle is a strong asset."
GENERIC_ACTION = "Work on improving your lifestyle habits."


@dataclass(frozen=True)
class AdviceResult:
    potential_gain: float
    suggestions: List[str] = field(default_factory=list)  # SUGGESTIONS keys
    message: str = ""


def lifestyle_suggestions(inputs, result: SimulationResult) -> AdviceResult:
    """
    Suggested actions ordered by the questionnaire sections
    (smoking, exercise, drinking, weight).
    """
    data: UserData = coerce_inputs(inputs)
    gain = result.economic.potential_gain

    if gain <= 0:
        return AdviceResult(potential_gain=0.0, suggestions=[], message=NO_GAIN_MESSAGE)

    keys = []
    if data.smoking == Smoking.CURRENT:
        keys.append("quit_smoking")
    if data.exercise == Exercise.NO:
        keys.append("start_exercise")
    if data.alcohol == Alcohol.HEAVY:
        keys.append("reduce_drinking")

    bmi = data.bmi
    if bmi is not None and bmi >= 25:
        keys.append("lose_weight")
    if bmi is not None and bmi < 18.5:
        keys.append("improve_nutrition")

    if keys:
        message = "Start with: " + ", ".join(SUGGESTIONS[k] for k in keys) + "."
    else:
        message = GENERIC_ACTION

    return AdviceResult(potential_gain=gain, suggestions=keys, message=message)
