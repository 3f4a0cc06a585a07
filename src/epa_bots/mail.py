"""AWS SES mail sender.

Wraps the blocking boto3 ``send_email`` call in a worker thread so bots can
await it like the FHIR calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import BotConfig
from .schemas import EmailMessage, SendEmailResult

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"


class EmailDeliveryError(RuntimeError):
    """Raised when SES rejects or fails to deliver a message."""


class SesMailSender:
    """Mail sender backed by an SES client built from BotConfig."""

    def __init__(self, config: BotConfig, client: Any | None = None):
        self._config = config
        self._client = client or boto3.client(
            "ses",
            region_name=config.aws_region,
            aws_access_key_id=config.aws_access_key_id or None,
            aws_secret_access_key=config.aws_secret_access_key or None,
        )

    @staticmethod
    def build_request(message: EmailMessage) -> dict[str, Any]:
        """Translate an EmailMessage into SES ``send_email`` keyword arguments."""
        body: dict[str, Any] = {"Text": {"Data": message.text_body, "Charset": CHARSET}}
        if message.html_body is not None:
            body["Html"] = {"Data": message.html_body, "Charset": CHARSET}

        destination: dict[str, Any] = {"ToAddresses": list(message.to)}
        if message.cc:
            destination["CcAddresses"] = list(message.cc)

        request: dict[str, Any] = {
            "Source": message.sender,
            "Destination": destination,
            "Message": {
                "Subject": {"Data": message.subject, "Charset": CHARSET},
                "Body": body,
            },
        }
        if message.tags:
            request["Tags"] = [{"Name": name, "Value": value} for name, value in message.tags.items()]
        return request

    async def send(self, message: EmailMessage) -> SendEmailResult:
        """Send *message* through SES.

        Raises:
            EmailDeliveryError: If SES or the transport fails
        """
        request = self.build_request(message)
        try:
            response = await asyncio.to_thread(self._client.send_email, **request)
        except (ClientError, BotoCoreError) as e:
            raise EmailDeliveryError(f"SES send to {', '.join(message.to)} failed: {e}") from e

        message_id = response.get("MessageId") or "unknown"
        logger.info(f"[MAIL] Sent '{message.subject}' to {message.to} (MessageId: {message_id})")
        return SendEmailResult(message_id=message_id)
