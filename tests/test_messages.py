"""Tests for alert text and email rendering."""

from datetime import datetime, timezone

import pytest

from conftest import ADMIN_EMAIL, DOCTOR_EMAIL, make_bp_observation, make_patient, make_practitioner
from epa_bots import messages
from epa_bots.resources import format_local_datetime, format_value, full_name
from epa_bots.schemas import BloodPressureReading


@pytest.fixture
def reading() -> BloodPressureReading:
    return BloodPressureReading(systolic=150, diastolic=85)


def test_doctor_email_content(config, reading):
    message = messages.render_doctor_email(
        make_patient(),
        make_practitioner(),
        reading,
        make_bp_observation(150, 85),
        DOCTOR_EMAIL,
        config,
    )

    assert message.sender == "alertas@epa-bienestar.com.ar"
    assert message.to == [DOCTOR_EMAIL]
    assert message.cc == [ADMIN_EMAIL]
    assert message.subject == "🚨 EPA Bienestar IA - Alerta HTA: Ana Pérez"
    assert message.tags == {"Type": "BloodPressureAlert", "PatientId": "pat-1"}

    assert "Estimado/a Dr./Dra. Laura Gómez" in message.html_body
    assert "🔴 Sistólica elevada (150 > 140 mmHg)" in message.html_body
    assert "🟢 Diastólica normal" in message.html_body
    assert "5/3/2024, 13:04:05" in message.html_body
    assert "https://cardio.epa-bienestar.com.ar/health-record/Observation/obs-1" in message.html_body

    assert "- Estado: ELEVADA" in message.text_body
    assert "- Sistólica: 150 mmHg (ELEVADA - >140)" in message.text_body
    assert "- Diastólica: 85 mmHg (NORMAL)" in message.text_body
    assert "Presión Arterial: 150/85 mmHg" in message.text_body


def test_doctor_without_name_is_addressed_as_doctor(config, reading):
    message = messages.render_doctor_email(
        make_patient(),
        {"resourceType": "Practitioner", "id": "dr-x"},
        reading,
        make_bp_observation(),
        DOCTOR_EMAIL,
        config,
    )
    assert "Estimado/a Dr./Dra. Doctor," in message.text_body


def test_missing_measurement_time(config, reading):
    observation = make_bp_observation()
    del observation["effectiveDateTime"]

    message = messages.render_doctor_email(
        make_patient(), make_practitioner(), reading, observation, DOCTOR_EMAIL, config
    )

    assert "Fecha y Hora: Fecha no disponible" in message.text_body


def test_admin_fallback_email(config, reading):
    message = messages.render_admin_fallback_email(make_patient(), reading, config)

    assert message.to == [ADMIN_EMAIL]
    assert message.cc == []
    assert message.html_body is None
    assert message.subject == "🚨 EPA Bienestar IA - Paciente sin médico asignado con HTA: Ana"
    assert "(150/85 mmHg)" in message.text_body
    assert "no tiene médico de cabecera asignado" in message.text_body


def test_patient_alert_email_mode(config, reading):
    text = messages.render_patient_alert(make_patient(), reading, config, doctor_notified=True)

    assert text.startswith("🚨 ALERTA PRESIÓN ARTERIAL ELEVADA")
    assert "Estimado/a Ana," in text
    assert "- Presión Sistólica: 150 mmHg (ELEVADA - Normal <140)" in text
    assert "Su médico de cabecera ha sido notificado" in text


def test_patient_alert_direct_mode(config, reading):
    text = messages.render_patient_alert(make_patient(), reading, config, doctor_notified=False)

    assert "Paciente: Ana" in text
    assert "- Sistólica: 150 mmHg (>140)" in text
    assert "- Diastólica: 85 mmHg (normal)" in text
    assert "Plataforma: EPA Bienestar IA" in text


def test_patient_alert_unnamed_patient(config, reading):
    text = messages.render_patient_alert({"id": "p"}, reading, config, doctor_notified=False)
    assert "Paciente: Paciente" in text


def test_practitioner_and_doctor_notification_payloads(reading):
    assert messages.render_practitioner_alert(make_patient(), reading) == (
        "Paciente Ana presenta presión arterial elevada: 150/85 mmHg. Requiere evaluación médica."
    )
    assert messages.render_doctor_notification(make_patient(), make_practitioner(), reading) == (
        "Email enviado al Dr./Dra. Laura Gómez notificando presión arterial elevada "
        "del paciente Ana Pérez: 150/85 mmHg"
    )


@pytest.mark.parametrize(
    "value,expected",
    [
        (150.0, "150"),
        (150.5, "150.5"),
        (90, "90"),
        (141.1234567, "141.1234567"),
        (1234567.0, "1234567"),
        (float("nan"), "nan"),
    ],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_local_datetime():
    assert format_local_datetime("2024-03-05T13:04:05Z", "UTC") == "5/3/2024, 13:04:05"
    assert format_local_datetime("2024-03-05T13:04:05.1Z", "UTC") == "5/3/2024, 13:04:05"
    assert format_local_datetime("2024-03-05T13:04:05.12345678-03:00", "UTC") == "5/3/2024, 16:04:05"
    assert format_local_datetime(datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc), "UTC") == "31/12/2024, 23:00:00"
    assert format_local_datetime("not a date", "UTC") == "Fecha no disponible"
    assert format_local_datetime(None, "UTC") == "Fecha no disponible"


def test_full_name():
    assert full_name(make_patient()) == "Ana Pérez"
    assert full_name({}) == ""
