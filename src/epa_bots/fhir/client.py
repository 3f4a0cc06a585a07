"""Medplum OAuth2 client with token management.

Provides an async HTTP client for the Medplum FHIR R4 API with automatic
OAuth2 client credentials token refresh, exposing the read/search/create
operations the bots need.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import BotConfig, get_config
from .encoding import dumps

logger = logging.getLogger(__name__)


class MissingCredentialsError(RuntimeError):
    """Raised when Medplum client credentials are not configured."""


class MedplumClient:
    """Async Medplum FHIR client with OAuth2 token management."""

    def __init__(
        self,
        config: BotConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = config or get_config()
        base_url = config.medplum_base_url.rstrip("/")
        self.token_url = f"{base_url}/oauth2/token"
        self.fhir_url = f"{base_url}/fhir/R4"
        self._client_id = config.medplum_client_id
        self._client_secret = config.medplum_client_secret
        self._transport = transport
        self._token: str | None = None
        self._token_expires: float = 0
        self._timeout = 30.0

    def _check_credentials(self) -> None:
        """Raise if credentials are not configured."""
        if not self._client_id or not self._client_secret:
            raise MissingCredentialsError(
                "Medplum credentials not configured (MEDPLUM_CLIENT_ID, MEDPLUM_CLIENT_SECRET)"
            )

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _get_token(self) -> str:
        """Get valid token, refreshing if expired."""
        # Check if current token is still valid (with 60s buffer)
        if self._token and time.time() < self._token_expires - 60:
            return self._token

        self._check_credentials()
        async with self._http() as client:
            response = await client.post(
                self.token_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            data = response.json()

            self._token = data["access_token"]
            # Default to 1 hour if expires_in not provided
            expires_in = data.get("expires_in", 3600)
            self._token_expires = time.time() + expires_in
            logger.debug("[MEDPLUM] Token refreshed, expires in %ss", expires_in)

            return self._token

    async def get(self, path: str, params: dict | None = None) -> dict:
        """GET request to FHIR API.

        Args:
            path: API path (e.g., "/Patient" or "/Patient/123")
            params: Optional query parameters

        Returns:
            Response JSON as dict

        Raises:
            httpx.HTTPStatusError: On HTTP errors
        """
        token = await self._get_token()
        url = f"{self.fhir_url}{path}"

        async with self._http() as client:
            response = await client.get(
                url,
                params=params,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/fhir+json",
                },
            )
            response.raise_for_status()
            return response.json()

    async def post(self, path: str, data: dict) -> dict:
        """POST request to FHIR API.

        Args:
            path: API path (e.g., "/Communication")
            data: FHIR resource body

        Returns:
            Response JSON as dict

        Raises:
            httpx.HTTPStatusError: On HTTP errors
        """
        token = await self._get_token()
        url = f"{self.fhir_url}{path}"

        async with self._http() as client:
            response = await client.post(
                url,
                content=dumps(data),
                headers={
                    "Authorization": f"Bearer {token}",
                    "Content-Type": "application/fhir+json",
                    "Accept": "application/fhir+json",
                },
            )
            response.raise_for_status()
            return response.json()

    # ------------------------------------------------------------------
    # ClinicalDataStore interface
    # ------------------------------------------------------------------

    async def read_reference(self, reference: dict[str, Any] | str) -> dict[str, Any]:
        """Read the resource behind a ``ResourceType/id`` reference."""
        ref = reference.get("reference", "") if isinstance(reference, dict) else reference
        if "/" not in ref:
            raise ValueError(f"Invalid reference: {ref!r}")
        return await self.get(f"/{ref}")

    async def search_resources(
        self,
        resource_type: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """Search and unwrap the Bundle into a list of resources."""
        bundle = await self.get(f"/{resource_type}", params=params)
        return [
            entry["resource"]
            for entry in bundle.get("entry", [])
            if "resource" in entry
        ]

    async def create_resource(self, resource: dict[str, Any]) -> dict[str, Any]:
        """Create a resource via POST to its type endpoint."""
        return await self.post(f"/{resource['resourceType']}", resource)
