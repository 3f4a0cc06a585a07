"""Local JSON-based FHIR R4 store.

Stands in for MedplumClient with a local filesystem-backed store that reads
and writes FHIR R4 resources as JSON files under {data_dir}/{ResourceType}/{id}.json.
"""

from __future__ import annotations

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .encoding import dumps


class ResourceNotFoundError(Exception):
    """Raised when a requested FHIR resource does not exist on disk."""


class FhirJsonStore:
    """Local FHIR store backed by JSON files on disk.

    Same read_reference()/search_resources()/create_resource() interface as
    MedplumClient, but reads/writes ``{data_dir}/{ResourceType}/{id}.json``.
    """

    def __init__(self, data_dir: str | Path | None = None):
        if data_dir is None:
            data_dir = os.getenv("FHIR_DATA_DIR", "data/fhir")
        self._data_dir = Path(data_dir)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def read_reference(self, reference: dict[str, Any] | str) -> dict[str, Any]:
        """Read the resource behind a ``ResourceType/id`` reference.

        Raises ResourceNotFoundError if the file is missing.
        """
        ref = reference.get("reference", "") if isinstance(reference, dict) else reference
        parts = ref.strip("/").split("/")
        if len(parts) != 2:
            raise ValueError(f"Reference must be ResourceType/id, got: {ref!r}")
        return self._read_resource(parts[0], parts[1])

    async def search_resources(
        self,
        resource_type: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every stored resource of *resource_type* matching *params*.

        Recognised search parameters: subject, patient, status, _count.
        Results are ordered by file name so repeated searches are stable.
        """
        params = params or {}
        resource_dir = self._data_dir / resource_type
        if not resource_dir.is_dir():
            return []

        resources: list[dict[str, Any]] = []
        for file_path in sorted(resource_dir.iterdir()):
            if not file_path.suffix == ".json":
                continue
            resource = json.loads(file_path.read_text(encoding="utf-8"))
            if self._matches(resource, params):
                resources.append(resource)

        count = params.get("_count")
        if count is not None:
            resources = resources[: int(count)]
        return resources

    async def create_resource(self, resource: dict[str, Any]) -> dict[str, Any]:
        """Write a new FHIR resource to disk.

        Assigns a UUID ``id`` and ``meta.lastUpdated`` and writes to
        ``{data_dir}/{ResourceType}/{id}.json``. The input dict is not mutated.
        """
        resource_type = resource["resourceType"]
        created = dict(resource)
        created["id"] = str(uuid.uuid4())
        meta = dict(created.get("meta") or {})
        meta["lastUpdated"] = datetime.now(timezone.utc).isoformat()
        created["meta"] = meta
        self.put(created)
        return created

    def put(self, resource: dict[str, Any]) -> dict[str, Any]:
        """Write *resource* under its existing ``id`` (used for seeding)."""
        resource_dir = self._data_dir / resource["resourceType"]
        resource_dir.mkdir(parents=True, exist_ok=True)
        dest = resource_dir / f"{resource['id']}.json"
        dest.write_text(dumps(resource, indent=2), encoding="utf-8")
        return resource

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_resource(self, resource_type: str, resource_id: str) -> dict[str, Any]:
        """Read a single resource file. Raises ResourceNotFoundError if missing."""
        file_path = self._data_dir / resource_type / f"{resource_id}.json"
        if not file_path.exists():
            raise ResourceNotFoundError(f"{resource_type}/{resource_id} not found")
        return json.loads(file_path.read_text(encoding="utf-8"))

    def _matches(self, resource: dict[str, Any], params: dict[str, str]) -> bool:
        """Check whether *resource* matches all non-meta search params."""
        for key, value in params.items():
            if key.startswith("_"):
                continue

            if key == "patient" and resource.get("resourceType") == "Practitioner":
                if not self._is_patient_practitioner(resource, value):
                    return False

            elif key in ("subject", "patient"):
                ref = self._extract_reference(resource)
                # Accept "Patient/123" or bare "123"
                if ref != value and ref != f"Patient/{value}":
                    return False

            elif key == "status":
                if resource.get("status", "") != value:
                    return False

        return True

    def _is_patient_practitioner(self, practitioner: dict[str, Any], patient: str) -> bool:
        """True if the patient lists *practitioner* as a general practitioner."""
        patient_id = patient.split("/")[-1]
        try:
            patient_resource = self._read_resource("Patient", patient_id)
        except ResourceNotFoundError:
            return False
        wanted = f"Practitioner/{practitioner.get('id', '')}"
        return any(
            gp.get("reference") == wanted
            for gp in patient_resource.get("generalPractitioner", [])
        )

    @staticmethod
    def _extract_reference(resource: dict[str, Any]) -> str:
        """Pull the reference string for 'subject' or 'patient' fields."""
        for field in ("subject", "patient"):
            ref_obj = resource.get(field)
            if isinstance(ref_obj, dict):
                return ref_obj.get("reference", "")
        return ""
