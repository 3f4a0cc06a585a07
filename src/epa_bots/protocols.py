"""Protocol definitions for the bots' external collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .schemas import EmailMessage, SendEmailResult


@runtime_checkable
class ClinicalDataStore(Protocol):
    """Protocol for the FHIR data store the bots read from and write to.

    Both MedplumClient and the local FhirJsonStore implement this interface,
    so bots can run against a live server or a directory of JSON files.
    """

    async def read_reference(self, reference: dict[str, Any] | str) -> dict[str, Any]:
        """Read the resource a FHIR reference points at.

        Args:
            reference: A Reference object (``{"reference": "Patient/123"}``)
                or the bare reference string.

        Returns:
            The resource as a dict.
        """
        ...

    async def search_resources(
        self,
        resource_type: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """Search resources of one type and return the matches (no Bundle)."""
        ...

    async def create_resource(self, resource: dict[str, Any]) -> dict[str, Any]:
        """Create a resource. Returns it with its server-assigned ``id``."""
        ...


@runtime_checkable
class MailSender(Protocol):
    """Protocol for the outbound email service."""

    async def send(self, message: EmailMessage) -> SendEmailResult:
        """Send one email.

        Raises:
            EmailDeliveryError: On transport or authentication failure.
        """
        ...
