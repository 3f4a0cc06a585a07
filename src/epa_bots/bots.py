"""Bot entry points invoked by the runtime, one ``handle(event)`` per bot."""

from __future__ import annotations

import logging
from typing import Any

from .blood_pressure import extract_blood_pressure_values, is_blood_pressure_observation, is_elevated
from .measurements import build_observation
from .notifier import HtaNotifier
from .protocols import ClinicalDataStore
from .resources import format_value
from .schemas import BotEvent, MeasurementInput

logger = logging.getLogger(__name__)


class BloodPressureAlertBot:
    """Watches new Observations and alerts on hypertensive blood pressure."""

    def __init__(self, store: ClinicalDataStore, notifier: HtaNotifier):
        self._store = store
        self._notifier = notifier

    async def handle(self, event: BotEvent) -> None:
        """Process one Observation event.

        Non-BP and normal readings are a no-op. Any exception raised by the
        primary notification path propagates to the runtime.
        """
        observation = event.input
        logger.info(f"[HTA] Processing Observation/{observation.get('id')}")

        if not is_blood_pressure_observation(observation):
            logger.info("[HTA] Not a blood pressure observation")
            return

        reading = extract_blood_pressure_values(observation)
        logger.info(
            f"[HTA] Values: systolic {format_value(reading.systolic)}, "
            f"diastolic {format_value(reading.diastolic)}"
        )

        if not is_elevated(reading):
            logger.info("[HTA] Values within normal range")
            return

        logger.warning("[HTA] Elevated blood pressure detected")
        patient = await self._store.read_reference(observation["subject"])
        await self._notifier.notify(patient, observation, reading)
        logger.info(
            f"[HTA] ALERT handled: Patient/{patient.get('id')} - "
            f"{format_value(reading.systolic)}/{format_value(reading.diastolic)} mmHg"
        )


class MeasurementBot:
    """Records a submitted measurement as an Observation."""

    def __init__(self, store: ClinicalDataStore):
        self._store = store

    async def handle(self, event: BotEvent) -> dict[str, Any] | None:
        """Build and create the Observation for ``event.input``.

        Returns the created resource, or None for an unrecognised label.
        """
        measurement = MeasurementInput.model_validate(event.input)
        observation = build_observation(
            measurement.type,
            measurement.subject,
            measurement.first_value,
            measurement.second_value,
        )
        if "code" not in observation:
            logger.warning(f"[MEASUREMENT] Unrecognised measurement type {measurement.type!r}, skipping")
            return None

        created = await self._store.create_resource(observation)
        logger.info(
            f"[MEASUREMENT] Observation/{created.get('id')} recorded "
            f"({measurement.type}) for {measurement.subject}"
        )
        return created
