"""Blood-pressure classification and hypertension thresholds."""

from __future__ import annotations

from typing import Any

from .measurements import (
    BLOOD_PRESSURE_PANEL_CODE,
    DIASTOLIC_CODE,
    LOINC_SYSTEM,
    SYSTOLIC_CODE,
)
from .schemas import BloodPressureReading

SYSTOLIC_THRESHOLD = 140
DIASTOLIC_THRESHOLD = 90


def is_blood_pressure_observation(observation: dict[str, Any]) -> bool:
    """True if the Observation is coded as a LOINC blood pressure panel."""
    codings = (observation.get("code") or {}).get("coding") or []
    return any(
        coding.get("code") == BLOOD_PRESSURE_PANEL_CODE and coding.get("system") == LOINC_SYSTEM
        for coding in codings
    )


def extract_blood_pressure_values(observation: dict[str, Any]) -> BloodPressureReading:
    """Pull systolic/diastolic values out of the Observation's components.

    Components are matched on their first coding. Missing or empty values
    leave the 0 default; when a code repeats, the last component wins.
    """
    systolic: float = 0
    diastolic: float = 0

    for component in observation.get("component") or []:
        codings = (component.get("code") or {}).get("coding") or [{}]
        code = codings[0].get("code")
        value = (component.get("valueQuantity") or {}).get("value")
        if not value:
            continue

        if code == SYSTOLIC_CODE:
            systolic = value
        elif code == DIASTOLIC_CODE:
            diastolic = value

    return BloodPressureReading(systolic=systolic, diastolic=diastolic)


def is_systolic_elevated(systolic: float) -> bool:
    return systolic > SYSTOLIC_THRESHOLD


def is_diastolic_elevated(diastolic: float) -> bool:
    return diastolic > DIASTOLIC_THRESHOLD


def is_elevated(reading: BloodPressureReading) -> bool:
    """Hypertensive if either value is strictly above its threshold."""
    return is_systolic_elevated(reading.systolic) or is_diastolic_elevated(reading.diastolic)
