"""JSON encoding of FHIR resources for the wire and for disk."""

from __future__ import annotations

import json
import math
from typing import Any


def strip_non_finite(value: Any) -> Any:
    """Copy of *value* with NaN/Infinity floats replaced by None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: strip_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [strip_non_finite(item) for item in value]
    return value


def dumps(resource: dict[str, Any], indent: int | None = None) -> str:
    """Serialize a resource as strict JSON (non-finite numbers become null)."""
    return json.dumps(strip_non_finite(resource), indent=indent, ensure_ascii=False, allow_nan=False)
