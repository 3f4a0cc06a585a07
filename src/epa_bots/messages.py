"""Rendering of alert texts and emails from the templates."""

from __future__ import annotations

from html import escape
from typing import Any

from . import templates
from .blood_pressure import (
    DIASTOLIC_THRESHOLD,
    SYSTOLIC_THRESHOLD,
    is_diastolic_elevated,
    is_elevated,
    is_systolic_elevated,
)
from .config import BotConfig
from .resources import (
    family_name,
    format_local_datetime,
    format_value,
    full_name,
    given_name,
    now_iso,
)
from .schemas import BloodPressureReading, EmailMessage


def render_patient_alert(
    patient: dict[str, Any],
    reading: BloodPressureReading,
    config: BotConfig,
    *,
    doctor_notified: bool,
) -> str:
    """Patient-facing alert text.

    ``doctor_notified`` selects the email-mode wording, which tells the
    patient their doctor has been informed.
    """
    systolic = format_value(reading.systolic)
    diastolic = format_value(reading.diastolic)
    date = format_local_datetime(now_iso(), config.timezone)
    patient_name = given_name(patient, "Paciente")

    if doctor_notified:
        return templates.PATIENT_ALERT_EMAIL_MODE.format(
            patient_name=patient_name,
            systolic=systolic,
            diastolic=diastolic,
            systolic_note=(
                f"(ELEVADA - Normal <{SYSTOLIC_THRESHOLD})" if is_systolic_elevated(reading.systolic) else ""
            ),
            diastolic_note=(
                f"(ELEVADA - Normal <{DIASTOLIC_THRESHOLD})" if is_diastolic_elevated(reading.diastolic) else ""
            ),
            date=date,
        )

    return templates.PATIENT_ALERT.format(
        patient_name=patient_name,
        systolic=systolic,
        diastolic=diastolic,
        systolic_status=(
            f"{systolic} mmHg (>{SYSTOLIC_THRESHOLD})"
            if is_systolic_elevated(reading.systolic)
            else f"{systolic} mmHg (normal)"
        ),
        diastolic_status=(
            f"{diastolic} mmHg (>{DIASTOLIC_THRESHOLD})"
            if is_diastolic_elevated(reading.diastolic)
            else f"{diastolic} mmHg (normal)"
        ),
        date=date,
    )


def render_practitioner_alert(patient: dict[str, Any], reading: BloodPressureReading) -> str:
    return templates.PRACTITIONER_ALERT.format(
        patient_given=given_name(patient),
        systolic=format_value(reading.systolic),
        diastolic=format_value(reading.diastolic),
    )


def render_doctor_notification(
    patient: dict[str, Any],
    doctor: dict[str, Any],
    reading: BloodPressureReading,
) -> str:
    return templates.DOCTOR_NOTIFICATION.format(
        doctor_given=given_name(doctor),
        doctor_family=family_name(doctor),
        patient_given=given_name(patient),
        patient_family=family_name(patient),
        systolic=format_value(reading.systolic),
        diastolic=format_value(reading.diastolic),
    )


def render_doctor_email(
    patient: dict[str, Any],
    doctor: dict[str, Any],
    reading: BloodPressureReading,
    observation: dict[str, Any],
    doctor_email: str,
    config: BotConfig,
) -> EmailMessage:
    """Compose the HTML + text alert email for the patient's doctor."""
    systolic = format_value(reading.systolic)
    diastolic = format_value(reading.diastolic)
    systolic_high = is_systolic_elevated(reading.systolic)
    diastolic_high = is_diastolic_elevated(reading.diastolic)

    fields = {
        "patient_name": full_name(patient),
        "doctor_name": full_name(doctor, default_family="Doctor"),
        "measurement_date": format_local_datetime(observation.get("effectiveDateTime"), config.timezone),
        "systolic": systolic,
        "diastolic": diastolic,
        "observation_url": f"{config.portal_url.rstrip('/')}/health-record/Observation/{observation.get('id')}",
        "admin_email": config.admin_email,
    }

    html = templates.DOCTOR_EMAIL_HTML.format(
        **{
            **fields,
            "patient_name": escape(fields["patient_name"]),
            "doctor_name": escape(fields["doctor_name"]),
        },
        systolic_status=(
            f"🔴 Sistólica elevada ({systolic} > {SYSTOLIC_THRESHOLD} mmHg)"
            if systolic_high
            else "🟢 Sistólica normal"
        ),
        diastolic_status=(
            f"🔴 Diastólica elevada ({diastolic} > {DIASTOLIC_THRESHOLD} mmHg)"
            if diastolic_high
            else "🟢 Diastólica normal"
        ),
    )
    text = templates.DOCTOR_EMAIL_TEXT.format(
        **fields,
        overall_status="ELEVADA" if is_elevated(reading) else "NORMAL",
        systolic_label=f"(ELEVADA - >{SYSTOLIC_THRESHOLD})" if systolic_high else "(NORMAL)",
        diastolic_label=f"(ELEVADA - >{DIASTOLIC_THRESHOLD})" if diastolic_high else "(NORMAL)",
    )

    return EmailMessage(
        sender=config.from_email,
        to=[doctor_email],
        cc=[config.admin_email],
        subject=templates.DOCTOR_EMAIL_SUBJECT.format(
            patient_given=given_name(patient),
            patient_family=family_name(patient),
        ).strip(),
        html_body=html,
        text_body=text,
        tags={"Type": "BloodPressureAlert", "PatientId": patient.get("id") or "unknown"},
    )


def render_admin_fallback_email(
    patient: dict[str, Any],
    reading: BloodPressureReading,
    config: BotConfig,
) -> EmailMessage:
    """Plain-text email telling the admin a hypertensive patient has no doctor."""
    return EmailMessage(
        sender=config.from_email,
        to=[config.admin_email],
        subject=templates.ADMIN_FALLBACK_SUBJECT.format(patient_given=given_name(patient)).strip(),
        text_body=templates.ADMIN_FALLBACK_TEXT.format(
            patient_given=given_name(patient),
            patient_family=family_name(patient),
            systolic=format_value(reading.systolic),
            diastolic=format_value(reading.diastolic),
        ),
    )
