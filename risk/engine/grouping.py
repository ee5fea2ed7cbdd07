from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple, TypeVar

from .records import UNKNOWN, IncidentRecord
from .temporal import parse_hour

R = TypeVar("R")
K = TypeVar("K", bound=Hashable)


def group_by(records: Iterable[R], key_fn: Callable[[R], K]) -> Dict[K, List[R]]:
    """
    Partition ``records`` by ``key_fn``.

    Keys come out in first-seen order and each group keeps the input order
    of its records. Empty input gives an empty dict.
    """
    groups: Dict[K, List[R]] = {}
    for record in records:
        groups.setdefault(key_fn(record), []).append(record)
    return groups


def area_key(record: IncidentRecord) -> str:
    return record.area or UNKNOWN


def area_hour_key(record: IncidentRecord) -> Tuple[str, Optional[int]]:
    return (area_key(record), parse_hour(record.time))
