from __future__ import annotations

import io
import logging
import os
import time
from typing import Any, Dict, List, Tuple

import pandas as pd

from .storage import InsertResult, insert_many
from .validation import FIELD_SPECS, REQUIRED_FIELDS, validate_records


class ImportError(Exception):
    """Raised when an accident CSV import cannot be completed."""


logger = logging.getLogger(__name__)

# Real-world header names -> canonical field names.
COLUMN_ALIASES: Dict[str, str] = {
    "Accident ID": "accident_id",
    "Date": "date",
    "Time": "time",
    "Area": "area",
    "Latitude": "latitude",
    "Longitude": "longitude",
    "Severity": "severity",
    "Primary Cause": "cause_primary",
    "Fatalities": "fatalities",
    "Injuries": "injuries",
}


def load_dataframe_from_bytes(file_bytes: bytes, extension: str) -> pd.DataFrame:
    """Load an uploaded CSV / Parquet payload into a DataFrame."""
    ext = extension.lower()
    if ext == ".csv":
        text = file_bytes.decode("utf-8", errors="replace")
        return pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skipinitialspace=True)
    if ext == ".parquet":
        return pd.read_parquet(io.BytesIO(file_bytes))

    raise ValueError(f"Unsupported file type for dataframe load: {extension!r}")


def _apply_column_aliases(df: pd.DataFrame) -> pd.DataFrame:
    rename_map: Dict[str, str] = {}
    for original in df.columns:
        stripped = str(original).strip()
        if stripped in COLUMN_ALIASES:
            rename_map[original] = COLUMN_ALIASES[stripped]
        elif stripped != original:
            rename_map[original] = stripped
    if rename_map:
        df = df.rename(columns=rename_map)
    return df


def dataframe_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Turn the known columns of ``df`` into input dicts for ``insert_many``.

    Cells are stripped and blanks become ``None``; type checks are left to
    the record validator so each bad row gets its own reason.
    """
    df = _apply_column_aliases(df)
    missing = [c for c in REQUIRED_FIELDS if c not in df.columns]
    if missing:
        raise ImportError(
            "Uploaded data is missing required columns: " + ", ".join(sorted(missing))
        )

    known = [c for c in df.columns if c in FIELD_SPECS]
    working = df[known].astype(object).where(df[known].notna(), None)

    records: List[Dict[str, Any]] = []
    for row in working.to_dict(orient="records"):
        record: Dict[str, Any] = {}
        for key, value in row.items():
            if isinstance(value, str):
                value = value.strip() or None
            record[key] = value
        records.append(record)
    return records


def import_accidents_from_path(path: str, *, dry_run: bool = False) -> Tuple[int, List[Dict[str, Any]]]:
    """
    Import an accident CSV (or Parquet) file into the store.

    Returns ``(imported_count, rejected)`` where ``rejected`` lists
    ``{"index", "errors"}`` per refused row. Raises :class:`ImportError`
    when the file cannot be read or nothing in it is importable.
    """
    if not os.path.exists(path):
        raise ImportError(f"File not found: {path}")

    overall_start = time.monotonic()
    ext = os.path.splitext(path)[1].lower() or ".csv"
    with open(path, "rb") as f:
        raw_bytes = f.read()
    if not raw_bytes:
        raise ImportError(f"File is empty: {path}")

    try:
        df = load_dataframe_from_bytes(raw_bytes, ext)
    except ValueError as exc:
        raise ImportError(str(exc)) from exc
    logger.info(
        "Loaded accident dataframe",
        extra={"path": path, "shape": (int(df.shape[0]), int(df.shape[1]))},
    )

    records = dataframe_to_records(df)
    if not records:
        raise ImportError("File contains no accident rows.")

    if dry_run:
        report = validate_records(records)
        return 0, report["rejected"]

    result: InsertResult = insert_many(records)
    if not result.admitted:
        raise ImportError(
            f"No valid accidents to import ({len(result.rejected)} rows rejected)."
        )

    logger.info(
        "Import accidents complete",
        extra={
            "path": path,
            "imported": len(result.admitted),
            "rejected": len(result.rejected),
            "overall_sec": round(time.monotonic() - overall_start, 3),
        },
    )
    return len(result.admitted), result.rejected
