"""EPA Bienestar bots - vital-sign mapping and hypertension alerts on FHIR.

Usage:
    from epa_bots import BloodPressureAlertBot, HtaNotifier, BotConfig
    from epa_bots.fhir import MedplumClient

    config = BotConfig.from_env()
    store = MedplumClient(config)
    bot = BloodPressureAlertBot(store, HtaNotifier(store, config, SesMailSender(config)))
    await bot.handle(BotEvent(input=observation))
"""

from .blood_pressure import (
    extract_blood_pressure_values,
    is_blood_pressure_observation,
    is_elevated,
)
from .bots import BloodPressureAlertBot, MeasurementBot
from .config import BotConfig, get_config
from .mail import EmailDeliveryError, SesMailSender
from .measurements import MeasurementType, build_observation
from .notifier import HtaNotifier, NotificationMode
from .resolver import find_patient_practitioners, find_primary_doctor
from .schemas import BloodPressureReading, BotEvent, EmailMessage, MeasurementInput, SendEmailResult

__all__ = [
    # Bots
    "BloodPressureAlertBot",
    "MeasurementBot",
    "HtaNotifier",
    "NotificationMode",
    # Configuration
    "BotConfig",
    "get_config",
    # Mail
    "SesMailSender",
    "EmailDeliveryError",
    # Pure logic
    "MeasurementType",
    "build_observation",
    "is_blood_pressure_observation",
    "extract_blood_pressure_values",
    "is_elevated",
    "find_primary_doctor",
    "find_patient_practitioners",
    # Schemas
    "BotEvent",
    "MeasurementInput",
    "BloodPressureReading",
    "EmailMessage",
    "SendEmailResult",
]
