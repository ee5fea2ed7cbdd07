"""
Record-level validation for accident rows entering the store.

Every record is checked on its own against the field schema in the
YAML schema config; a bad record is rejected with a per-field reason and
never reaches the risk engine. Batches are never rejected as a whole.
"""

from __future__ import annotations

import logging
import math
import numbers
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd
import yaml
from django.conf import settings
from django.core.exceptions import FieldDoesNotExist
from django.db import connection

from risk.engine import is_blank

logger = logging.getLogger(__name__)

UNKNOWN_AREA = "Unknown"
REQUIRED_MESSAGE = "This field is required."

# -----------------------------------------------------------------------
# Schema configuration (externalized so other regions can be configured)
# -----------------------------------------------------------------------


def _get_schema_config_path() -> Path:
    configured = getattr(settings, "ACCIDENTS_SCHEMA_CONFIG_PATH", None)
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parent / "config" / "accident_schema.yml"


def _load_schema_config() -> Dict[str, Any]:
    config_path = _get_schema_config_path()
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Accident schema config not found at %s; using defaults.", config_path)
        data = {}
    return data


_SCHEMA_CONFIG: Dict[str, Any] = _load_schema_config()
SCHEMA_VERSION: str = _SCHEMA_CONFIG.get("schema_version", "unknown")
FIELD_SPECS: Dict[str, Dict[str, Any]] = _SCHEMA_CONFIG.get("fields", {})

REQUIRED_FIELDS = sorted(name for name, spec in FIELD_SPECS.items() if spec.get("required"))

_GEO = _SCHEMA_CONFIG.get("geo_bounds", {})
LAT_RANGE: Tuple[float, float] = (
    float(_GEO.get("latitude", {}).get("min", 28.4)),
    float(_GEO.get("latitude", {}).get("max", 28.88)),
)
LON_RANGE: Tuple[float, float] = (
    float(_GEO.get("longitude", {}).get("min", 76.84)),
    float(_GEO.get("longitude", {}).get("max", 77.35)),
)


def is_within_bounds(lat: float, lng: float) -> bool:
    return LAT_RANGE[0] <= lat <= LAT_RANGE[1] and LON_RANGE[0] <= lng <= LON_RANGE[1]


# -----------------------------------------------------------------------
# Per-type coercion
# -----------------------------------------------------------------------


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("Must be an integer.")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        if float(value).is_integer():
            return int(value)
        raise ValueError("Must be an integer.")
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        as_float = float(str(value).strip())
    except ValueError:
        raise ValueError("Must be an integer.") from None
    if not as_float.is_integer():
        raise ValueError("Must be an integer.")
    return int(as_float)


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("Must be a number.")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValueError("Must be a number.") from None
    if not math.isfinite(result):
        raise ValueError("Must be a finite number.")
    return result


def _coerce_date(value: Any) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        raise ValueError("Must be a calendar date (YYYY-MM-DD).")
    return parsed.date().isoformat()


def _coerce_string(value: Any, max_length: Optional[int]) -> str:
    text = str(value).strip()
    if max_length is not None and len(text) > max_length:
        raise ValueError(f"Must be at most {max_length} characters.")
    return text


def _model_max_length(name: str) -> Optional[int]:
    from .models import AccidentRecord

    try:
        return getattr(AccidentRecord._meta.get_field(name), "max_length", None)
    except FieldDoesNotExist:
        return None


def _model_integer_range(name: str) -> Tuple[Optional[int], Optional[int]]:
    """Inclusive range the database column backing ``name`` can store."""
    from .models import AccidentRecord

    try:
        field = AccidentRecord._meta.get_field(name)
    except FieldDoesNotExist:
        return None, None
    return connection.ops.integer_field_range(field.get_internal_type())


def _check_range(value: float, spec: Mapping[str, Any]) -> None:
    lower = spec.get("min")
    upper = spec.get("max")
    if lower is not None and value < lower:
        raise ValueError(f"Must be greater than or equal to {lower}.")
    if upper is not None and value > upper:
        raise ValueError(f"Must be less than or equal to {upper}.")


def _coerce_field(name: str, spec: Mapping[str, Any], raw: Any) -> Any:
    """Coerce one non-blank value per its schema entry; ValueError on failure."""
    col_type = spec.get("type", "string")
    if col_type == "int":
        value = _coerce_int(raw)
        _check_range(value, spec)
        lower, upper = _model_integer_range(name)
        _check_range(value, {"min": lower, "max": upper})
        return value
    if col_type == "float":
        value = _coerce_float(raw)
        _check_range(value, spec)
        return value
    if col_type == "date":
        return _coerce_date(raw)
    return _coerce_string(raw, _model_max_length(name))


# -----------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------


def validate_record(data: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Validate and normalise one input record.

    Returns ``(cleaned, errors)``. ``errors`` maps field name to a reason
    and is empty when the record may be admitted. Unknown keys are dropped.
    Defaults applied here: blank ``area`` becomes ``"Unknown"`` and absent
    ``fatalities`` / ``injuries`` become 0.
    """
    if not isinstance(data, Mapping):
        return {}, {"non_field_errors": "Each record must be a JSON object."}

    cleaned: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for name, spec in FIELD_SPECS.items():
        raw = data.get(name)
        if is_blank(raw):
            if spec.get("required"):
                errors[name] = REQUIRED_MESSAGE
            else:
                cleaned[name] = None
            continue

        try:
            cleaned[name] = _coerce_field(name, spec, raw)
        except ValueError as exc:
            errors[name] = str(exc)

    if not cleaned.get("area"):
        cleaned["area"] = UNKNOWN_AREA
    for name in ("fatalities", "injuries"):
        if name in FIELD_SPECS and cleaned.get(name) is None and name not in errors:
            cleaned[name] = 0

    lat = cleaned.get("latitude")
    lng = cleaned.get("longitude")
    if "latitude" not in errors and "longitude" not in errors and lat is not None and lng is not None:
        if not is_within_bounds(lat, lng):
            errors["location"] = (
                f"Coordinates ({lat}, {lng}) fall outside the configured bounding box "
                f"lat {LAT_RANGE[0]}..{LAT_RANGE[1]}, lng {LON_RANGE[0]}..{LON_RANGE[1]}."
            )

    return cleaned, errors


def validate_numeric_fields(data: Mapping[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Type and range checks for the numeric fields present in ``data``.

    For records that are scored without being stored: identity, date and
    location fields are not required and blank numeric values are simply
    left out of ``cleaned``.
    """
    if not isinstance(data, Mapping):
        return {}, {"non_field_errors": "Each record must be a JSON object."}

    cleaned: Dict[str, Any] = {}
    errors: Dict[str, str] = {}
    for name, spec in FIELD_SPECS.items():
        if spec.get("type") not in ("int", "float"):
            continue
        raw = data.get(name)
        if is_blank(raw):
            continue
        try:
            cleaned[name] = _coerce_field(name, spec, raw)
        except ValueError as exc:
            errors[name] = str(exc)
    return cleaned, errors


def format_errors(errors: Mapping[str, str]) -> str:
    """Flatten a field->reason mapping into one human-readable line."""
    return "; ".join(f"{field}: {reason}" for field, reason in errors.items())


def validate_records(records: List[Mapping[str, Any]]) -> Dict[str, Any]:
    """Validate a batch and summarise it without writing anything."""
    valid = 0
    rejected: List[Dict[str, Any]] = []
    for index, record in enumerate(records):
        _, errors = validate_record(record)
        if errors:
            rejected.append({"index": index, "errors": errors})
        else:
            valid += 1
    return {
        "schema_version": SCHEMA_VERSION,
        "total": len(records),
        "valid": valid,
        "rejected": rejected,
    }
