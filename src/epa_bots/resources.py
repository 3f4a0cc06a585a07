"""FHIR resource builders for alert Communications and AuditEvents."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

TAG_SYSTEM = "http://epa-bienestar.com.ar/tags"
COMMUNICATION_CATEGORY_SYSTEM = "http://terminology.hl7.org/CodeSystem/communication-category"

# Communication.meta.tag codes
TAG_HTA_ALERT = "hta-alert"
TAG_HTA_PATIENT_ALERT = "hta-patient-alert"
TAG_PRACTITIONER_ALERT = "practitioner-alert"
TAG_DOCTOR_EMAIL_NOTIFICATION = "doctor-email-notification"

BOT_DISPLAY = "Sistema EPA Bienestar IA"

_FRACTION = re.compile(r"\.(\d+)")


# -- Formatting helpers --------------------------------------------------------


def now_iso() -> str:
    """Current UTC instant as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_value(value: float) -> str:
    """Render a measurement without a trailing '.0' (150.0 -> '150')."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def _six_digit_fraction(value: str) -> str:
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits
    return _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)


def format_local_datetime(value: str | datetime | None, tz: str) -> str:
    """Render a timestamp the way es-AR locale does: ``d/m/yyyy, HH:MM:SS``.

    Naive timestamps are taken as UTC. Missing or unparseable values render
    as "Fecha no disponible".
    """
    if value is None or value == "":
        return "Fecha no disponible"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(_six_digit_fraction(value.replace("Z", "+00:00")))
        except ValueError:
            return "Fecha no disponible"
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local = value.astimezone(ZoneInfo(tz))
    return f"{local.day}/{local.month}/{local.year}, {local:%H:%M:%S}"


def given_name(resource: dict[str, Any], default: str = "") -> str:
    """First given name of the first HumanName."""
    names = resource.get("name") or [{}]
    given = names[0].get("given") or []
    return given[0] if given else default


def family_name(resource: dict[str, Any], default: str = "") -> str:
    """Family name of the first HumanName."""
    names = resource.get("name") or [{}]
    return names[0].get("family") or default


def full_name(resource: dict[str, Any], default_family: str = "") -> str:
    return f"{given_name(resource)} {family_name(resource, default_family)}".strip()


# -- Resource literals ---------------------------------------------------------


def build_communication(
    *,
    category: str,
    patient: dict[str, Any],
    topic: str,
    payload: str,
    tag: str,
    recipient: dict[str, Any] | None = None,
    based_on: dict[str, Any] | None = None,
    sender_display: str | None = None,
) -> dict[str, Any]:
    """Build a completed, urgent Communication about *patient*.

    Args:
        category: Communication category code ("alert" or "notification")
        patient: Patient resource the communication is about
        topic: Topic text
        payload: Free-text content
        tag: ``meta.tag`` code used to query alerts downstream
        recipient: Practitioner resource, if addressed to one
        based_on: Observation that triggered the communication
        sender_display: Display text for ``sender``
    """
    communication: dict[str, Any] = {
        "resourceType": "Communication",
        "status": "completed",
        "category": [
            {
                "coding": [
                    {
                        "system": COMMUNICATION_CATEGORY_SYSTEM,
                        "code": category,
                        "display": category.capitalize(),
                    }
                ]
            }
        ],
        "priority": "urgent",
        "subject": {"reference": f"Patient/{patient.get('id')}"},
    }
    if recipient is not None:
        communication["recipient"] = [{"reference": f"Practitioner/{recipient.get('id')}"}]
    if sender_display is not None:
        communication["sender"] = {"display": sender_display}
    communication["topic"] = {"text": topic}
    communication["sent"] = now_iso()
    communication["payload"] = [{"contentString": payload}]
    if based_on is not None:
        communication["basedOn"] = [{"reference": f"Observation/{based_on.get('id')}"}]
    communication["meta"] = {"tag": [{"system": TAG_SYSTEM, "code": tag}]}
    return communication


def build_email_audit_event(
    patient: dict[str, Any],
    recipient: dict[str, Any],
    message_id: str,
) -> dict[str, Any]:
    """Build the AuditEvent recording that an alert email was sent."""
    person_type = {
        "system": "http://terminology.hl7.org/CodeSystem/audit-entity-type",
        "code": "1",
        "display": "Person",
    }
    return {
        "resourceType": "AuditEvent",
        "type": {
            "system": "http://terminology.hl7.org/CodeSystem/audit-event-type",
            "code": "rest",
            "display": "RESTful Operation",
        },
        "subtype": [
            {
                "system": "http://epa-bienestar.com.ar/audit-codes",
                "code": "email-sent",
                "display": "Email Sent",
            }
        ],
        "action": "C",
        "recorded": now_iso(),
        "outcome": "0",
        "agent": [
            {
                "type": {
                    "coding": [
                        {
                            "system": "http://terminology.hl7.org/CodeSystem/extra-security-role-type",
                            "code": "humanuser",
                            "display": "human user",
                        }
                    ]
                },
                "who": {"display": "EPA Bienestar IA Bot"},
                "requestor": False,
            }
        ],
        "source": {
            "observer": {"display": "EPA Bienestar IA System"},
            "type": [
                {
                    "system": "http://terminology.hl7.org/CodeSystem/security-source-type",
                    "code": "4",
                    "display": "Application Server",
                }
            ],
        },
        "entity": [
            {
                "what": {"reference": f"Patient/{patient.get('id')}"},
                "type": person_type,
            },
            {
                "what": {"reference": f"Practitioner/{recipient.get('id')}"},
                "type": person_type,
                "detail": [{"type": "messageId", "valueString": message_id}],
            },
        ],
    }
