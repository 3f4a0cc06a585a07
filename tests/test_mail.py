"""Tests for the SES mail sender using botocore's Stubber."""

import boto3
import pytest
from botocore.stub import Stubber

from epa_bots.config import BotConfig
from epa_bots.mail import EmailDeliveryError, SesMailSender
from epa_bots.schemas import EmailMessage


@pytest.fixture
def ses_client():
    return boto3.client(
        "ses",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def doctor_message() -> EmailMessage:
    return EmailMessage(
        sender="alertas@epa-bienestar.com.ar",
        to=["dra.gomez@hospital.example"],
        cc=["admin@epa-bienestar.com.ar"],
        subject="Alerta HTA",
        text_body="texto",
        html_body="<p>html</p>",
        tags={"Type": "BloodPressureAlert", "PatientId": "pat-1"},
    )


def test_build_request_with_html_cc_and_tags():
    request = SesMailSender.build_request(doctor_message())

    assert request == {
        "Source": "alertas@epa-bienestar.com.ar",
        "Destination": {
            "ToAddresses": ["dra.gomez@hospital.example"],
            "CcAddresses": ["admin@epa-bienestar.com.ar"],
        },
        "Message": {
            "Subject": {"Data": "Alerta HTA", "Charset": "UTF-8"},
            "Body": {
                "Text": {"Data": "texto", "Charset": "UTF-8"},
                "Html": {"Data": "<p>html</p>", "Charset": "UTF-8"},
            },
        },
        "Tags": [
            {"Name": "Type", "Value": "BloodPressureAlert"},
            {"Name": "PatientId", "Value": "pat-1"},
        ],
    }


def test_build_request_text_only():
    message = EmailMessage(sender="a@x.test", to=["b@x.test"], subject="s", text_body="t")
    request = SesMailSender.build_request(message)

    assert request["Destination"] == {"ToAddresses": ["b@x.test"]}
    assert request["Message"]["Body"] == {"Text": {"Data": "t", "Charset": "UTF-8"}}
    assert "Tags" not in request


@pytest.mark.asyncio
async def test_send_returns_message_id(ses_client):
    sender = SesMailSender(BotConfig(), client=ses_client)
    message = doctor_message()

    with Stubber(ses_client) as stubber:
        stubber.add_response(
            "send_email",
            {"MessageId": "ses-123"},
            SesMailSender.build_request(message),
        )
        result = await sender.send(message)
        stubber.assert_no_pending_responses()

    assert result.message_id == "ses-123"


@pytest.mark.asyncio
async def test_send_failure_raises_delivery_error(ses_client):
    sender = SesMailSender(BotConfig(), client=ses_client)

    with Stubber(ses_client) as stubber:
        stubber.add_client_error(
            "send_email",
            service_error_code="MessageRejected",
            service_message="Email address is not verified.",
        )
        with pytest.raises(EmailDeliveryError):
            await sender.send(doctor_message())


def test_client_built_from_config():
    sender = SesMailSender(BotConfig(aws_region="sa-east-1", aws_access_key_id="k", aws_secret_access_key="s"))
    assert sender._client.meta.region_name == "sa-east-1"
