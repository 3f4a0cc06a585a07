"""Measurement mapper: textual vital-sign readings to FHIR Observations.

Each supported measurement label maps to one entry of ``MEASUREMENTS``, which
holds its LOINC codings, UCUM unit and whether the value is stored as a single
``valueQuantity`` or as blood-pressure components.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

LOINC_SYSTEM = "http://loinc.org"
UCUM_SYSTEM = "http://unitsofmeasure.org"
OBSERVATION_CATEGORY_SYSTEM = "http://terminology.hl7.org/CodeSystem/observation-category"

BLOOD_PRESSURE_PANEL_CODE = "85354-9"
SYSTOLIC_CODE = "8480-6"
DIASTOLIC_CODE = "8462-4"

# Leading numeric prefix, the way a lenient text-to-float parse reads input
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class MeasurementType(str, Enum):
    """Measurement labels accepted by the mapper."""

    BLOOD_PRESSURE = "blood pressure"
    AXILLARY_TEMPERATURE = "axillary temperature"
    HEIGHT = "height"
    RESPIRATORY_RATE = "respiratory rate"
    HEART_RATE = "heart rate"
    WEIGHT = "weight"


@dataclass(frozen=True)
class Coding:
    """A LOINC coding."""

    code: str
    display: str

    def to_fhir(self) -> dict[str, str]:
        return {"system": LOINC_SYSTEM, "code": self.code, "display": self.display}


@dataclass(frozen=True)
class MeasurementDefinition:
    """How one measurement type is shaped as an Observation."""

    codings: tuple[Coding, ...]
    unit: str
    text: str
    # Blood pressure: (diastolic, systolic) component codings
    components: tuple[Coding, ...] = field(default_factory=tuple)

    @property
    def has_components(self) -> bool:
        return bool(self.components)


MEASUREMENTS: dict[MeasurementType, MeasurementDefinition] = {
    MeasurementType.BLOOD_PRESSURE: MeasurementDefinition(
        codings=(Coding(BLOOD_PRESSURE_PANEL_CODE, "Blood pressure panel with all children optional"),),
        unit="mm[Hg]",
        text="Blood pressure",
        components=(
            Coding(DIASTOLIC_CODE, "Diastolic blood pressure"),
            Coding(SYSTOLIC_CODE, "Systolic blood pressure"),
        ),
    ),
    MeasurementType.AXILLARY_TEMPERATURE: MeasurementDefinition(
        codings=(
            Coding("8310-5", "Body temperature"),
            Coding("8331-1", "Oral temperature"),
        ),
        unit="Cel",
        text="Axillary temperature",
    ),
    MeasurementType.HEIGHT: MeasurementDefinition(
        codings=(Coding("8302-2", "Body height"),),
        unit="cm",
        text="Height",
    ),
    MeasurementType.RESPIRATORY_RATE: MeasurementDefinition(
        codings=(Coding("9279-1", "Respiratory rate"),),
        unit="/min",
        text="Respiratory rate",
    ),
    MeasurementType.HEART_RATE: MeasurementDefinition(
        codings=(Coding("8867-4", "Heart rate"),),
        unit="/min",
        text="Heart rate",
    ),
    MeasurementType.WEIGHT: MeasurementDefinition(
        codings=(Coding("29463-7", "Body weight"),),
        unit="kg",
        text="Weight",
    ),
}


def parse_value(text: str | None) -> float:
    """Parse a leading number from *text*; anything else is NaN."""
    if text is None:
        return math.nan
    match = _NUMBER_PREFIX.match(str(text))
    if not match:
        return math.nan
    return float(match.group(1))


def _quantity(value: float, unit: str) -> dict[str, Any]:
    return {"value": value, "unit": unit, "system": UCUM_SYSTEM, "code": unit}


def build_observation(
    measurement_type: MeasurementType | str,
    subject: str,
    first_value: str | None,
    second_value: str | None = None,
) -> dict[str, Any]:
    """Build an Observation for one measurement.

    Args:
        measurement_type: A ``MeasurementType`` or its label
        subject: Patient reference, e.g. ``"Patient/123"``
        first_value: Value as text (diastolic for blood pressure)
        second_value: Systolic value as text, blood pressure only

    Returns:
        A final vital-signs Observation, or ``{"resourceType": "Observation"}``
        when the label is not recognised.
    """
    try:
        kind = MeasurementType(measurement_type)
    except ValueError:
        return {"resourceType": "Observation"}

    definition = MEASUREMENTS[kind]
    observation: dict[str, Any] = {
        "resourceType": "Observation",
        "status": "final",
        "category": [
            {
                "coding": [
                    {
                        "system": OBSERVATION_CATEGORY_SYSTEM,
                        "code": "vital-signs",
                        "display": "Vital Signs",
                    }
                ]
            }
        ],
        "code": {
            "coding": [coding.to_fhir() for coding in definition.codings],
            "text": definition.text,
        },
        "subject": {"reference": subject},
        "effectiveDateTime": datetime.now(timezone.utc).isoformat(),
    }

    if definition.has_components:
        values = (parse_value(first_value), parse_value(second_value))
        observation["component"] = [
            {
                "code": {"coding": [coding.to_fhir()], "text": coding.display},
                "valueQuantity": _quantity(value, definition.unit),
            }
            for coding, value in zip(definition.components, values)
        ]
    else:
        observation["valueQuantity"] = _quantity(parse_value(first_value), definition.unit)

    return observation
