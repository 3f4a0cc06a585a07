"""Pydantic schemas for bot events, readings and outbound email."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Bot events
# =============================================================================


class BotEvent(BaseModel):
    """Event delivered by the bot runtime when a resource is created/updated."""

    model_config = ConfigDict(populate_by_name=True)

    input: dict[str, Any] = Field(..., description="The triggering FHIR resource")
    content_type: str = Field(
        default="application/fhir+json",
        alias="contentType",
        description="MIME type of the input payload",
    )


class MeasurementInput(BaseModel):
    """Input for the measurement bot: a label and its textual values."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="Measurement label, e.g. 'blood pressure'")
    subject: str = Field(
        ...,
        description="Patient reference (e.g. 'Patient/123')",
        min_length=1,
    )
    first_value: str = Field(..., alias="firstValue", description="First value as text")
    second_value: str | None = Field(
        default=None,
        alias="secondValue",
        description="Second value as text (systolic, for blood pressure)",
    )


# =============================================================================
# Blood pressure
# =============================================================================


class BloodPressureReading(BaseModel):
    """Systolic/diastolic pair extracted from an Observation."""

    systolic: float = Field(default=0, description="Systolic pressure in mm[Hg]")
    diastolic: float = Field(default=0, description="Diastolic pressure in mm[Hg]")


# =============================================================================
# Email
# =============================================================================


class EmailMessage(BaseModel):
    """An outbound email with optional HTML part."""

    sender: str = Field(..., description="From address")
    to: list[str] = Field(..., description="To addresses", min_length=1)
    cc: list[str] = Field(default_factory=list, description="CC addresses")
    subject: str = Field(..., description="Subject line")
    text_body: str = Field(..., description="Plain-text body")
    html_body: str | None = Field(default=None, description="HTML body")
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Message tags (name -> value) for delivery tracking",
    )


class SendEmailResult(BaseModel):
    """Result of a successful send."""

    message_id: str = Field(..., description="Provider message ID")
