"""
PRECISION HEALTH Test Suite - Inputs, Utilities & Symptom Guide
===============================================================
"""

import pytest

from precision_health.inputs import (
    Alcohol,
    AtrophicGastritis,
    Exercise,
    Polypharmacy,
    Pylori,
    Sex,
    Smoking,
    UserData,
    coerce_inputs,
)
from precision_health.symptom_guide import SYMPTOM_GUIDE, get_symptom_guidance
from precision_health.utils import calculate_bmi, round_half_up, safe_bool, safe_float, safe_int


class TestSafeConversions:
    """Never-crash conversions for form values."""

    @pytest.mark.parametrize("value,default,expected", [
        (None, 170, 170.0),
        ("", 0, 0.0),
        ("N/A", 5, 5.0),
        ("65,5", 0, 65.5),
        (" 72 ", 0, 72.0),
        ("abc", 1, 1.0),
        (float("nan"), 2, 2.0),
        (True, 3, 3.0),
        (58, 0, 58.0),
    ])
    def test_safe_float(self, value, default, expected):
        assert safe_float(value, default) == expected

    def test_safe_int_truncates(self):
        assert safe_int("40.7") == 40
        assert safe_int(None, 40) == 40

    @pytest.mark.parametrize("value,expected", [
        ("yes", True), ("No", False), ("TRUE", True), ("0", False),
        (1, True), (0, False), (True, True), ("maybe", False), (None, False),
    ])
    def test_safe_bool(self, value, expected):
        assert safe_bool(value) is expected

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2

    def test_bmi(self):
        assert calculate_bmi(170, 65) == pytest.approx(65 / 1.7 ** 2)
        assert calculate_bmi(0, 65) is None
        assert calculate_bmi(170, None) is None


class TestUserData:
    """Questionnaire record."""

    def test_defaults(self):
        data = UserData()

        assert data.age == 40
        assert data.sex == Sex.MALE
        assert data.pylori == Pylori.UNKNOWN
        assert data.atrophic_gastritis == AtrophicGastritis.UNKNOWN
        assert data.polypharmacy == Polypharmacy.NONE
        assert not data.fam_cancer

    def test_from_dict_coerces_values(self):
        data = UserData.from_dict({
            "age": "45",
            "sex": "FEMALE",
            "height": "160,5",
            "weight": 55,
            "alcohol": "Moderate",
            "exercise": "yes",
            "polypharmacy": "5+",
            "fam_cancer": "yes",
            "dm": 1,
            "htn": "false",
        })

        assert data.age == 45
        assert data.sex == Sex.FEMALE
        assert data.height == 160.5
        assert data.alcohol == Alcohol.MODERATE
        assert data.exercise == Exercise.YES
        assert data.polypharmacy == Polypharmacy.MANY
        assert data.fam_cancer is True
        assert data.dm is True
        assert data.htn is False

    def test_from_dict_unknown_choice_falls_back(self, caplog):
        data = UserData.from_dict({"smoking": "sometimes"})

        assert data.smoking == Smoking.NEVER
        assert "smoking" in caplog.text

    def test_from_dict_empty(self):
        assert UserData.from_dict(None) == UserData()
        assert UserData.from_dict({"unrelated": 1}) == UserData()

    def test_age_clamp(self):
        assert UserData(age=130).with_age_clamped(105).age == 105
        assert UserData(age=-2).with_age_clamped(105).age == 0
        data = UserData(age=50)
        assert data.with_age_clamped(105) is data

    def test_to_dict_roundtrip(self):
        data = UserData(age=52, sex=Sex.FEMALE, pylori=Pylori.ERADICATED, dl=True)
        d = data.to_dict()

        assert d["sex"] == "female"
        assert d["pylori"] == "eradicated"
        assert UserData.from_dict(d) == data

    def test_coerce_passthrough(self):
        data = UserData(age=33)
        assert coerce_inputs(data) is data
        assert coerce_inputs({"age": 33}).age == 33


class TestSymptomGuide:
    """Self-care guidance lookup."""

    def test_selected_symptoms_in_guide_order(self):
        guidance = get_symptom_guidance(["injury", "FEVER"])
        assert [g.symptom_id for g in guidance] == ["fever", "injury"]

    def test_unknown_ids_ignored(self):
        assert get_symptom_guidance(["headache"]) == []

    def test_every_entry_has_red_flags(self):
        for guide in SYMPTOM_GUIDE.values():
            assert guide.red_flags
            assert guide.action
