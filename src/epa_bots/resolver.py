"""Practitioner lookup for a patient.

Two strategies:
- find_primary_doctor: CareTeam participant, then Patient.generalPractitioner
- find_patient_practitioners: direct Practitioner search by patient
"""

from __future__ import annotations

import logging
from typing import Any

from .protocols import ClinicalDataStore

logger = logging.getLogger(__name__)


async def find_primary_doctor(
    store: ClinicalDataStore,
    patient: dict[str, Any],
) -> dict[str, Any] | None:
    """Find the patient's primary doctor.

    Looks at the first active CareTeam for a Practitioner participant, then
    falls back to the first ``generalPractitioner`` reference. Lookup errors
    are logged and reported as "no doctor" so alerting can continue.

    Args:
        store: Clinical data store
        patient: Patient resource

    Returns:
        The Practitioner resource, or None if none could be resolved
    """
    try:
        care_teams = await store.search_resources(
            "CareTeam",
            {"subject": f"Patient/{patient.get('id')}", "status": "active"},
        )

        if care_teams:
            participant = next(
                (
                    p
                    for p in care_teams[0].get("participant") or []
                    if ((p.get("member") or {}).get("reference") or "").startswith("Practitioner/")
                ),
                None,
            )
            if participant is not None:
                logger.info(f"[RESOLVER] Doctor from CareTeam/{care_teams[0].get('id')}")
                return await store.read_reference(participant["member"])

        general_practitioners = patient.get("generalPractitioner") or []
        if general_practitioners and general_practitioners[0].get("reference"):
            logger.info("[RESOLVER] Doctor from Patient.generalPractitioner")
            return await store.read_reference(general_practitioners[0])

        return None

    except Exception as e:
        logger.error(f"[RESOLVER] Error finding primary doctor: {type(e).__name__}: {e}")
        return None


async def find_patient_practitioners(
    store: ClinicalDataStore,
    patient: dict[str, Any],
) -> list[dict[str, Any]]:
    """Return every Practitioner linked to the patient (errors propagate)."""
    return await store.search_resources("Practitioner", {"patient": str(patient.get("id"))})


def get_work_email(practitioner: dict[str, Any]) -> str | None:
    """First work email in the practitioner's telecom list."""
    for contact in practitioner.get("telecom") or []:
        if contact.get("system") == "email" and contact.get("use") == "work":
            return contact.get("value") or None
    return None
