"""
PRECISION HEALTH Test Suite - Economic Valuator & Factor Decomposer
===================================================================
"""

import pytest

from precision_health.config import EngineConfig
from precision_health.economics import expected_earnings, value_of_health
from precision_health.factor_impact import decompose_factors
from precision_health.hazard_ratios import HazardFactor
from precision_health.survival import calibration_bias, simulate

ANNUAL_WAGE = 1300 * 2080


class TestExpectedEarnings:
    """Σ survival × annual wage until retirement."""

    def test_single_working_year(self):
        assert expected_earnings(64, [1.0, 0.9]) == pytest.approx(ANNUAL_WAGE)

    def test_missing_years_count_as_zero(self):
        assert expected_earnings(60, [1.0, 0.5]) == pytest.approx(1.5 * ANNUAL_WAGE)

    @pytest.mark.parametrize("age", [65, 70, 100])
    def test_retired_earns_nothing(self, age):
        assert expected_earnings(age, [1.0, 0.99, 0.98]) == 0.0

    def test_custom_wage_and_retirement(self):
        config = EngineConfig(hourly_wage=1000, annual_hours=2000, retirement_age=62)
        assert expected_earnings(60, [1.0, 1.0, 1.0], config) == pytest.approx(2 * 2_000_000)

    def test_lower_survival_lowers_earnings(self, male_table):
        base = simulate(30, male_table, 1.0)
        risky = simulate(30, male_table, 3.0)
        assert expected_earnings(30, risky.curve) < expected_earnings(30, base.curve)


class TestValueOfHealth:
    """Asymmetric loss / gain."""

    def test_loss_and_gain(self):
        value = value_of_health(63, [1.0, 1.0], [1.0, 0.5], [1.0, 0.75])

        assert value.current_loss == pytest.approx(0.5 * ANNUAL_WAGE)
        assert value.potential_gain == pytest.approx(0.25 * ANNUAL_WAGE)

    def test_never_negative(self):
        # User better than average and than the ideal scenario
        value = value_of_health(63, [1.0, 0.5], [1.0, 1.0], [1.0, 0.8])

        assert value.current_loss == 0.0
        assert value.potential_gain == 0.0
        assert value.earnings_current > value.earnings_average

    def test_to_dict(self):
        d = value_of_health(60, [1.0], [1.0], [1.0]).to_dict()
        assert set(d) == {"current_loss", "potential_gain", "earnings_average",
                          "earnings_current", "earnings_ideal"}


class TestFactorDecomposer:
    """Single-factor re-simulation."""

    def _decompose(self, table, factors, age=50):
        official = table.official_life_expectancy(age)
        bias = calibration_bias(official, simulate(age, table, 1.0))
        return decompose_factors(age, table, factors, bias, official)

    def test_sorted_most_life_extending_first(self, male_table):
        factors = [
            HazardFactor("hist_stroke", "History of stroke", 2.0),
            HazardFactor("smoking_never", "Never smoked (bonus)", 0.85, bonus=True),
            HazardFactor("htn", "Hypertension", 1.2),
        ]
        impacts = self._decompose(male_table, factors)

        assert [i.key for i in impacts] == ["smoking_never", "htn", "hist_stroke"]
        assert impacts[0].impact > 0
        assert impacts[-1].impact < impacts[1].impact < 0

    def test_neutral_factor_has_no_impact(self, female_table):
        impacts = self._decompose(female_table, [HazardFactor("allergy", "Allergic constitution", 1.0)])
        assert impacts[0].impact == pytest.approx(0.0, abs=1e-9)

    def test_impact_matches_isolated_simulation(self, male_table):
        age = 50
        official = male_table.official_life_expectancy(age)
        bias = calibration_bias(official, simulate(age, male_table, 1.0))
        impacts = decompose_factors(age, male_table, [HazardFactor("dm", "Diabetes", 1.3)], bias, official)

        expected = simulate(age, male_table, 1.3).life_expectancy + bias - official
        assert impacts[0].impact == pytest.approx(expected)
        assert impacts[0].to_dict()["hr"] == 1.3

    def test_empty_factor_list(self, male_table):
        assert self._decompose(male_table, []) == []
