"""Hypertension alert fan-out.

HtaNotifier writes the patient alert Communication and then notifies the
care team in one of two modes:

- EMAIL: resolve the primary doctor (CareTeam, then generalPractitioner),
  email them with the admin in CC, audit the send and record a
  doctor-email-notification Communication. With no doctor, email the admin.
- DIRECT: search every Practitioner linked to the patient and record one
  practitioner-alert Communication each.

Primary-path failures (doctor email, per-practitioner writes) propagate.
Advisory-path failures (admin fallback email, audit write) are logged only.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from . import messages
from .config import BotConfig
from .protocols import ClinicalDataStore, MailSender
from .resolver import find_patient_practitioners, find_primary_doctor, get_work_email
from .resources import (
    BOT_DISPLAY,
    TAG_DOCTOR_EMAIL_NOTIFICATION,
    TAG_HTA_ALERT,
    TAG_HTA_PATIENT_ALERT,
    TAG_PRACTITIONER_ALERT,
    build_communication,
    build_email_audit_event,
    given_name,
)
from .schemas import BloodPressureReading

logger = logging.getLogger(__name__)


class NotificationMode(str, Enum):
    """How the care team is notified."""

    EMAIL = "email"
    DIRECT = "direct"


class HtaNotifier:
    """Sends the alerts for one hypertensive reading."""

    def __init__(
        self,
        store: ClinicalDataStore,
        config: BotConfig,
        mailer: MailSender | None = None,
        mode: NotificationMode | str | None = None,
    ):
        self._store = store
        self._config = config
        self._mailer = mailer
        self.mode = NotificationMode(mode or config.notification_mode)

    async def notify(
        self,
        patient: dict[str, Any],
        observation: dict[str, Any],
        reading: BloodPressureReading,
    ) -> None:
        """Run the full fan-out for *reading*."""
        communication = await self.create_patient_alert(patient, observation, reading)
        logger.info(f"[NOTIFY] Patient alert Communication/{communication.get('id')} created")

        if self.mode is NotificationMode.DIRECT:
            await self.notify_practitioners(patient, reading)
            return

        doctor = await find_primary_doctor(self._store, patient)
        if doctor is None:
            logger.warning(f"[NOTIFY] No primary doctor for Patient/{patient.get('id')}")
            await self.send_admin_fallback(patient, reading)
            return

        logger.info(f"[NOTIFY] Primary doctor: Practitioner/{doctor.get('id')} ({given_name(doctor)})")
        await self.email_doctor(patient, doctor, observation, reading)
        if self._mailer is None:
            logger.info("[NOTIFY] Doctor email not sent, skipping doctor notification record")
            return
        await self.create_doctor_notification(patient, doctor, reading)

    async def create_patient_alert(
        self,
        patient: dict[str, Any],
        observation: dict[str, Any],
        reading: BloodPressureReading,
    ) -> dict[str, Any]:
        """Create the patient-facing alert Communication linked to the Observation."""
        email_mode = self.mode is NotificationMode.EMAIL
        communication = build_communication(
            category="alert",
            patient=patient,
            topic="Alerta: Presión Arterial Elevada",
            payload=messages.render_patient_alert(
                patient, reading, self._config, doctor_notified=email_mode
            ),
            tag=TAG_HTA_PATIENT_ALERT if email_mode else TAG_HTA_ALERT,
            based_on=observation,
        )
        return await self._store.create_resource(communication)

    async def notify_practitioners(
        self,
        patient: dict[str, Any],
        reading: BloodPressureReading,
    ) -> list[dict[str, Any]]:
        """One practitioner-alert Communication per linked practitioner.

        Writes are sequential; the first failure aborts the rest.
        """
        practitioners = await find_patient_practitioners(self._store, patient)
        logger.info(f"[NOTIFY] {len(practitioners)} practitioner(s) linked to Patient/{patient.get('id')}")

        created = []
        for practitioner in practitioners:
            notification = build_communication(
                category="notification",
                patient=patient,
                recipient=practitioner,
                topic="Notificación: Paciente con HTA",
                payload=messages.render_practitioner_alert(patient, reading),
                tag=TAG_PRACTITIONER_ALERT,
            )
            created.append(await self._store.create_resource(notification))
        return created

    async def email_doctor(
        self,
        patient: dict[str, Any],
        doctor: dict[str, Any],
        observation: dict[str, Any],
        reading: BloodPressureReading,
    ) -> str | None:
        """Email the doctor and audit the send.

        Returns the provider message ID, or None if nothing was sent. Send
        failures propagate to the caller.
        """
        doctor_email = get_work_email(doctor)
        if not doctor_email:
            logger.warning(f"[NOTIFY] Practitioner/{doctor.get('id')} has no work email, not sending")
            return None
        if self._mailer is None:
            logger.warning("[NOTIFY] No mail sender configured, skipping doctor email")
            return None

        message = messages.render_doctor_email(
            patient, doctor, reading, observation, doctor_email, self._config
        )
        result = await self._mailer.send(message)
        await self.log_email_sent(patient, doctor, result.message_id)
        return result.message_id

    async def log_email_sent(
        self,
        patient: dict[str, Any],
        recipient: dict[str, Any],
        message_id: str,
    ) -> None:
        """Record an AuditEvent for the email. Failures are logged only."""
        try:
            await self._store.create_resource(build_email_audit_event(patient, recipient, message_id))
            logger.info("[NOTIFY] AuditEvent created for email send")
        except Exception as e:
            logger.error(f"[NOTIFY] Error creating audit log: {type(e).__name__}: {e}")

    async def create_doctor_notification(
        self,
        patient: dict[str, Any],
        doctor: dict[str, Any],
        reading: BloodPressureReading,
    ) -> dict[str, Any]:
        """Record that the doctor was notified by email."""
        notification = build_communication(
            category="notification",
            patient=patient,
            recipient=doctor,
            sender_display=BOT_DISPLAY,
            topic="Notificación médica: Presión arterial elevada",
            payload=messages.render_doctor_notification(patient, doctor, reading),
            tag=TAG_DOCTOR_EMAIL_NOTIFICATION,
        )
        return await self._store.create_resource(notification)

    async def send_admin_fallback(
        self,
        patient: dict[str, Any],
        reading: BloodPressureReading,
    ) -> None:
        """Tell the admin about a hypertensive patient without a doctor.

        Advisory only: any failure is logged and swallowed.
        """
        if self._mailer is None:
            logger.warning("[NOTIFY] No mail sender configured, skipping admin email")
            return
        try:
            await self._mailer.send(messages.render_admin_fallback_email(patient, reading, self._config))
            logger.info("[NOTIFY] Admin fallback email sent")
        except Exception as e:
            logger.error(f"[NOTIFY] Error sending admin email: {type(e).__name__}: {e}")
