"""FHIR data store clients.

- MedplumClient: async client for the Medplum FHIR R4 API
- FhirJsonStore: local file-based store with the same interface

Usage:
    from epa_bots.fhir import FhirJsonStore

    store = FhirJsonStore("data/fhir")
    patient = await store.read_reference({"reference": "Patient/123"})
"""

from .client import MedplumClient, MissingCredentialsError
from .store import FhirJsonStore, ResourceNotFoundError

__all__ = [
    "MedplumClient",
    "MissingCredentialsError",
    "FhirJsonStore",
    "ResourceNotFoundError",
]
