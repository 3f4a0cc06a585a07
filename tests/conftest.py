"""Pytest configuration and fixtures for epa-bots tests."""

from __future__ import annotations

from typing import Any

import pytest

from epa_bots.config import BotConfig
from epa_bots.fhir import FhirJsonStore
from epa_bots.mail import EmailDeliveryError
from epa_bots.schemas import EmailMessage, SendEmailResult

DOCTOR_EMAIL = "dra.gomez@hospital.example"
ADMIN_EMAIL = "admin@epa-bienestar.com.ar"


class FakeMailer:
    """Records messages instead of sending them; optionally fails."""

    def __init__(self, fail: bool = False):
        self.sent: list[EmailMessage] = []
        self.fail = fail

    async def send(self, message: EmailMessage) -> SendEmailResult:
        self.sent.append(message)
        if self.fail:
            raise EmailDeliveryError("SES unavailable")
        return SendEmailResult(message_id=f"msg-{len(self.sent)}")


def make_bp_observation(
    systolic: float | None = 150,
    diastolic: float | None = 95,
    *,
    with_panel_code: bool = True,
    patient_id: str = "pat-1",
    obs_id: str = "obs-1",
) -> dict[str, Any]:
    """Create a minimal blood-pressure Observation for testing."""
    codings = [{"system": "http://loinc.org", "code": "55284-4", "display": "Blood pressure systolic and diastolic"}]
    if with_panel_code:
        codings.append({"system": "http://loinc.org", "code": "85354-9"})

    components = []
    if systolic is not None:
        components.append(
            {
                "code": {"coding": [{"system": "http://loinc.org", "code": "8480-6"}]},
                "valueQuantity": {"value": systolic, "unit": "mm[Hg]"},
            }
        )
    if diastolic is not None:
        components.append(
            {
                "code": {"coding": [{"system": "http://loinc.org", "code": "8462-4"}]},
                "valueQuantity": {"value": diastolic, "unit": "mm[Hg]"},
            }
        )

    return {
        "resourceType": "Observation",
        "id": obs_id,
        "status": "final",
        "code": {"coding": codings},
        "subject": {"reference": f"Patient/{patient_id}"},
        "effectiveDateTime": "2024-03-05T13:04:05Z",
        "component": components,
    }


def make_patient(
    patient_id: str = "pat-1",
    *,
    general_practitioners: list[str] | None = None,
) -> dict[str, Any]:
    patient: dict[str, Any] = {
        "resourceType": "Patient",
        "id": patient_id,
        "name": [{"given": ["Ana"], "family": "Pérez"}],
    }
    if general_practitioners:
        patient["generalPractitioner"] = [{"reference": f"Practitioner/{gp}"} for gp in general_practitioners]
    return patient


def make_practitioner(practitioner_id: str = "dr-1", email: str | None = DOCTOR_EMAIL) -> dict[str, Any]:
    practitioner: dict[str, Any] = {
        "resourceType": "Practitioner",
        "id": practitioner_id,
        "name": [{"given": ["Laura"], "family": "Gómez"}],
        "telecom": [{"system": "phone", "use": "work", "value": "+54 11 5555-0000"}],
    }
    if email:
        practitioner["telecom"].append({"system": "email", "use": "work", "value": email})
    return practitioner


def make_care_team(
    practitioner_id: str | None = "dr-1",
    *,
    patient_id: str = "pat-1",
    status: str = "active",
) -> dict[str, Any]:
    participants = [{"member": {"reference": "RelatedPerson/rp-1"}}]
    if practitioner_id:
        participants.append({"member": {"reference": f"Practitioner/{practitioner_id}"}})
    return {
        "resourceType": "CareTeam",
        "id": "ct-1",
        "status": status,
        "subject": {"reference": f"Patient/{patient_id}"},
        "participant": participants,
    }


def tags_of(resources: list[dict[str, Any]]) -> list[str]:
    return sorted(r["meta"]["tag"][0]["code"] for r in resources)


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(timezone="UTC", admin_email=ADMIN_EMAIL)


@pytest.fixture
def store(tmp_path) -> FhirJsonStore:
    return FhirJsonStore(tmp_path / "fhir")


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()
