"""
PRECISION HEALTH Test Suite - Pytest Fixtures
=============================================
Shared fixtures for engine testing.
"""

import os
import sys
from pathlib import Path

import pytest

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from precision_health.inputs import (  # noqa: E402
    Alcohol,
    AtrophicGastritis,
    Exercise,
    Pylori,
    Sex,
    Smoking,
    UserData,
)
from precision_health.reference_data import load_reference_data  # noqa: E402

# Fixed year so birth cohorts are reproducible
TEST_YEAR = 2026


@pytest.fixture
def current_year():
    return TEST_YEAR


# =============================================================================
# REFERENCE DATA
# =============================================================================

@pytest.fixture
def reference():
    """Bundled reference dataset."""
    return load_reference_data()


@pytest.fixture
def male_table(reference):
    return reference.table(Sex.MALE)


@pytest.fixture
def female_table(reference):
    return reference.table(Sex.FEMALE)


# =============================================================================
# QUESTIONNAIRE FIXTURES
# =============================================================================

@pytest.fixture
def default_user():
    """Empty questionnaire: 40 y/o male, normal BMI, never smoker, no exercise."""
    return UserData()


@pytest.fixture
def high_risk_user():
    """60 y/o male smoker, inactive, BMI 32, heavy drinker."""
    return UserData(
        age=60,
        sex=Sex.MALE,
        height=170,
        weight=92.5,
        alcohol=Alcohol.HEAVY,
        smoking=Smoking.CURRENT,
        exercise=Exercise.NO,
    )


@pytest.fixture
def healthy_user():
    """35 y/o female with optimal habits."""
    return UserData(
        age=35,
        sex=Sex.FEMALE,
        height=160,
        weight=52,
        smoking=Smoking.NEVER,
        exercise=Exercise.YES,
    )


@pytest.fixture
def stomach_high_risk_user():
    """Current H. pylori infection + atrophic gastritis, 60 y/o male, family history."""
    return UserData(
        age=60,
        sex=Sex.MALE,
        pylori=Pylori.CURRENT,
        atrophic_gastritis=AtrophicGastritis.YES,
        fam_cancer=True,
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Runs every test without PRECISION_HEALTH_* overrides from the shell."""
    for name in list(os.environ):
        if name.startswith("PRECISION_HEALTH_"):
            monkeypatch.delenv(name)
