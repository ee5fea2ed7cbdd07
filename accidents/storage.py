"""
Keyed store over :class:`AccidentRecord`.

This is the only module that queries accident rows for the risk engine.
Callers get plain lists back so each request works on its own snapshot.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, QuerySet

from .filters import AccidentRecordFilter
from .models import AccidentRecord
from .validation import validate_record

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


def fetch_all() -> List[AccidentRecord]:
    """Every record, newest first."""
    return list(AccidentRecord.objects.all().order_by("-created_at"))


def fetch_filtered(params: Mapping[str, Any]) -> List[AccidentRecord]:
    """Records matching the list-endpoint query params, newest first."""
    filterset = AccidentRecordFilter(params, queryset=AccidentRecord.objects.all().order_by("-created_at"))
    return list(filterset.qs)


def fetch_by_id(pk: Any) -> Optional[AccidentRecord]:
    try:
        return AccidentRecord.objects.get(pk=pk)
    except (AccidentRecord.DoesNotExist, ValidationError, ValueError):
        # Malformed UUIDs raise ValidationError on lookup.
        return None


def fetch_by_group_key(area: str) -> List[AccidentRecord]:
    return list(AccidentRecord.objects.filter(area=area))


def fetch_by_date_range(start_date: str, end_date: str) -> List[AccidentRecord]:
    """Records with ``start_date <= date <= end_date`` (ISO date strings)."""
    qs: QuerySet = AccidentRecord.objects.filter(date__gte=start_date, date__lte=end_date)
    return list(qs.order_by("date", "time"))


def fetch_by_severity(severity: str) -> List[AccidentRecord]:
    return list(AccidentRecord.objects.filter(severity__iexact=severity))


def area_counts() -> List[Dict[str, Any]]:
    """``[{"area": ..., "count": ...}]``, busiest area first."""
    qs = (
        AccidentRecord.objects.values("area")
        .annotate(count=Count("id"))
        .order_by("-count", "area")
    )
    return [{"area": row["area"], "count": row["count"]} for row in qs]


@dataclass
class InsertResult:
    admitted: List[AccidentRecord] = field(default_factory=list)
    rejected: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.admitted) + len(self.rejected)


def insert_many(inputs: Iterable[Mapping[str, Any]], *, batch_size: Optional[int] = None) -> InsertResult:
    """
    Validate and insert a batch of records.

    Each input is validated on its own; invalid ones are reported in
    ``rejected`` as ``{"index": i, "errors": {field: reason}}`` and the rest
    are written. Duplicate ``accident_id`` values (against the store or
    earlier in the same batch) are rejected too.
    """
    inputs = list(inputs)
    batch_size = batch_size or getattr(settings, "ACCIDENTS_BULK_BATCH_SIZE", DEFAULT_BATCH_SIZE)
    result = InsertResult()
    start = time.monotonic()

    candidate_ids = {
        str(item.get("accident_id")).strip()
        for item in inputs
        if isinstance(item, Mapping) and item.get("accident_id") is not None
    }
    existing_ids = set(
        AccidentRecord.objects.filter(accident_id__in=candidate_ids).values_list("accident_id", flat=True)
    )

    seen_ids: set[str] = set()
    to_create: List[AccidentRecord] = []
    for index, item in enumerate(inputs):
        cleaned, errors = validate_record(item)
        accident_id = cleaned.get("accident_id")
        if not errors and accident_id in existing_ids:
            errors = {"accident_id": f"Accident {accident_id!r} already exists."}
        elif not errors and accident_id in seen_ids:
            errors = {"accident_id": f"Accident {accident_id!r} appears more than once in this batch."}

        if errors:
            result.rejected.append({"index": index, "errors": errors})
            continue

        seen_ids.add(accident_id)
        to_create.append(AccidentRecord(**cleaned))

    if to_create:
        with transaction.atomic():
            for offset in range(0, len(to_create), batch_size):
                batch = to_create[offset : offset + batch_size]
                result.admitted.extend(AccidentRecord.objects.bulk_create(batch))

    logger.info(
        "Inserted accident records",
        extra={
            "admitted": len(result.admitted),
            "rejected": len(result.rejected),
            "batch_size": batch_size,
            "duration_sec": round(time.monotonic() - start, 3),
        },
    )
    return result
