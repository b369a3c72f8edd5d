"""Aggregation across vehicles: due buckets, history views and spend summaries."""

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .calculations import DEFAULT_LEAD_DAYS, DEFAULT_LEAD_MILES
from .dates import parse_date
from .due_item import DueItem
from .engine import compute_due
from .schedule import tracked_types
from .service_record import ServiceRecord
from .service_type import ServiceType, type_token
from .status import Status
from .vehicle import Vehicle


def compute_all_due(
    vehicles: Iterable[Vehicle],
    records: Sequence[ServiceRecord],
    today: Union[str, date],
    lead_miles: int = DEFAULT_LEAD_MILES,
    lead_days: int = DEFAULT_LEAD_DAYS,
    types: Optional[Iterable[Union[str, ServiceType]]] = None,
) -> List[DueItem]:
    """Run compute_due for every (vehicle, type) pair, dropping unschedulable types."""
    types = list(types) if types is not None else tracked_types()
    items = []
    for vehicle in vehicles:
        for service_type in types:
            item = compute_due(
                vehicle, service_type, records, today, lead_miles, lead_days
            )
            if item is not None:
                items.append(item)
    return items


def partition_by_status(items: Iterable[DueItem]) -> Dict[Status, List[DueItem]]:
    """Group items by status. Every status is present, possibly empty."""
    buckets: Dict[Status, List[DueItem]] = {status: [] for status in Status}
    for item in items:
        buckets[item.status].append(item)
    return buckets


def urgency_key(
    item: DueItem,
    lead_miles: int = DEFAULT_LEAD_MILES,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> float:
    """
    Sort key combining remaining miles and days.

    Each signed distance is expressed in lead-window units (miles / lead_miles,
    days / lead_days) and the smaller one wins, so a negative key means
    overdue and more negative means further past due. Items with no
    distances sort last.
    """
    candidates = []
    if item.distance_to_due is not None:
        candidates.append(item.distance_to_due / max(lead_miles, 1))
    if item.days_to_due is not None:
        candidates.append(item.days_to_due / max(lead_days, 1))
    return min(candidates) if candidates else math.inf


def _sorted_bucket(items, status, lead_miles, lead_days) -> List[DueItem]:
    bucket = [i for i in items if i.status == status]
    return sorted(
        bucket,
        key=lambda i: (
            urgency_key(i, lead_miles, lead_days),
            i.vehicle_label,
            type_token(i.type),
        ),
    )


def upcoming(
    items: Iterable[DueItem],
    lead_miles: int = DEFAULT_LEAD_MILES,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> List[DueItem]:
    """DUE_SOON items, closest to due first."""
    return _sorted_bucket(list(items), Status.DUE_SOON, lead_miles, lead_days)


def overdue(
    items: Iterable[DueItem],
    lead_miles: int = DEFAULT_LEAD_MILES,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> List[DueItem]:
    """OVERDUE items, most overdue first."""
    return _sorted_bucket(list(items), Status.OVERDUE, lead_miles, lead_days)


def records_for_vehicle(
    records: Iterable[ServiceRecord], vehicle_id: str
) -> List[ServiceRecord]:
    """A vehicle's records, newest first (higher mileage first on the same day)."""
    return sorted(
        (r for r in records if r.vehicle_id == vehicle_id),
        key=lambda r: (r.service_date, r.mileage),
        reverse=True,
    )


def orphaned_records(
    vehicles: Iterable[Vehicle], records: Iterable[ServiceRecord]
) -> List[ServiceRecord]:
    """Records whose vehicle no longer exists."""
    known = {v.id for v in vehicles}
    return [r for r in records if r.vehicle_id not in known]


def filter_records(
    records: Iterable[ServiceRecord],
    vehicle_id: Optional[str] = None,
    date_from: Union[str, date, None] = None,
    date_to: Union[str, date, None] = None,
) -> List[ServiceRecord]:
    """Records for one vehicle (or all) within an inclusive date range."""
    start = parse_date(date_from) if date_from else None
    end = parse_date(date_to) if date_to else None
    result = []
    for record in records:
        if vehicle_id is not None and record.vehicle_id != vehicle_id:
            continue
        served = parse_date(record.service_date)
        if start and served < start:
            continue
        if end and served > end:
            continue
        result.append(record)
    return result


@dataclass
class SpendSummary:
    """Totals for a set of records, all amounts in cents."""

    total_cents: int = 0
    count: int = 0
    average_cents: int = 0
    by_type: List[Tuple[str, int]] = field(default_factory=list)
    by_month: List[Tuple[str, int]] = field(default_factory=list)


def spend_summary(records: Iterable[ServiceRecord]) -> SpendSummary:
    """
    Summarize spend for a set of records.

    Records without a cost count toward the record count but add nothing.
    by_type is sorted by total descending, by_month (YYYY-MM) ascending.
    """
    records = list(records)
    total = sum(r.cost_cents or 0 for r in records)
    count = len(records)
    average = 0
    if count:
        average = int(
            (Decimal(total) / count).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        )

    by_type: Dict[str, int] = {}
    by_month: Dict[str, int] = {}
    for r in records:
        type_key = type_token(r.type)
        by_type[type_key] = by_type.get(type_key, 0) + (r.cost_cents or 0)
        month = r.service_date[:7]
        by_month[month] = by_month.get(month, 0) + (r.cost_cents or 0)

    return SpendSummary(
        total_cents=total,
        count=count,
        average_cents=average,
        by_type=sorted(by_type.items(), key=lambda kv: kv[1], reverse=True),
        by_month=sorted(by_month.items()),
    )
