"""Tests for blood-pressure classification and thresholds."""

import pytest

from conftest import make_bp_observation
from epa_bots.blood_pressure import (
    extract_blood_pressure_values,
    is_blood_pressure_observation,
    is_elevated,
)
from epa_bots.schemas import BloodPressureReading


# =============================================================================
# Classifier
# =============================================================================


def test_panel_code_is_blood_pressure():
    assert is_blood_pressure_observation(make_bp_observation()) is True


def test_missing_panel_code_is_not_blood_pressure():
    assert is_blood_pressure_observation(make_bp_observation(with_panel_code=False)) is False


@pytest.mark.parametrize(
    "observation",
    [
        {"resourceType": "Observation"},
        {"resourceType": "Observation", "code": {}},
        {"resourceType": "Observation", "code": {"text": "BP"}},
        {"resourceType": "Observation", "code": {"coding": None}},
        {"resourceType": "Observation", "code": None},
    ],
)
def test_observation_without_coding_is_not_blood_pressure(observation):
    assert is_blood_pressure_observation(observation) is False


def test_panel_code_requires_loinc_system():
    observation = {"code": {"coding": [{"system": "http://snomed.info/sct", "code": "85354-9"}]}}
    assert is_blood_pressure_observation(observation) is False


# =============================================================================
# Extraction
# =============================================================================


def test_extracts_systolic_and_diastolic():
    reading = extract_blood_pressure_values(make_bp_observation(150, 95))
    assert (reading.systolic, reading.diastolic) == (150, 95)


def test_no_components_defaults_to_zero():
    reading = extract_blood_pressure_values({"resourceType": "Observation"})
    assert (reading.systolic, reading.diastolic) == (0, 0)


def test_missing_component_defaults_to_zero():
    reading = extract_blood_pressure_values(make_bp_observation(systolic=None, diastolic=88))
    assert (reading.systolic, reading.diastolic) == (0, 88)


def test_component_order_is_irrelevant():
    observation = make_bp_observation(150, 95)
    observation["component"].reverse()
    reading = extract_blood_pressure_values(observation)
    assert (reading.systolic, reading.diastolic) == (150, 95)


def test_last_duplicate_component_wins():
    observation = make_bp_observation(150, 95)
    observation["component"].append(
        {
            "code": {"coding": [{"code": "8480-6"}]},
            "valueQuantity": {"value": 132},
        }
    )
    assert extract_blood_pressure_values(observation).systolic == 132


def test_component_without_value_is_ignored():
    observation = make_bp_observation(150, 95)
    observation["component"].append({"code": {"coding": [{"code": "8462-4"}]}})
    observation["component"].append({"code": {}, "valueQuantity": {"value": 200}})
    reading = extract_blood_pressure_values(observation)
    assert (reading.systolic, reading.diastolic) == (150, 95)


# =============================================================================
# Thresholds
# =============================================================================


@pytest.mark.parametrize(
    "systolic,diastolic,expected",
    [
        (140, 90, False),
        (141, 90, True),
        (140, 91, True),
        (120, 80, False),
        (150, 95, True),
        (0, 0, False),
    ],
)
def test_threshold_boundary(systolic, diastolic, expected):
    assert is_elevated(BloodPressureReading(systolic=systolic, diastolic=diastolic)) is expected
