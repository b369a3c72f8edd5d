"""Helper functions for service due calculations."""

from datetime import date
from typing import Iterable, Optional, Union

from .dates import add_months, days_between, parse_date
from .service_record import ServiceRecord
from .service_type import ServiceType
from .status import Status
from .vehicle import Vehicle

DEFAULT_LEAD_MILES = 300
DEFAULT_LEAD_DAYS = 14


def last_record_of_type(
    records: Iterable[ServiceRecord],
    vehicle_id: str,
    service_type: Union[str, ServiceType],
) -> Optional[ServiceRecord]:
    """
    Most recent record of a type for a vehicle.

    Newest service date wins; on the same date the higher mileage wins.
    Raises ValidationError if a matching record has a malformed date.
    """
    matching = [
        r for r in records if r.vehicle_id == vehicle_id and r.type == service_type
    ]
    if not matching:
        return None
    return max(matching, key=lambda r: (parse_date(r.service_date), r.mileage))


def calc_due_miles(
    last_mileage: Optional[int], interval: Optional[int]
) -> Optional[int]:
    """Calculate next due mileage: last + interval."""
    if last_mileage is None or interval is None:
        return None
    return last_mileage + interval


def calc_due_date(
    last_date: Optional[date], interval_months: Optional[int]
) -> Optional[date]:
    """Calculate next due date: last + interval months (clamped to month end)."""
    if last_date is None or interval_months is None:
        return None
    return add_months(last_date, interval_months)


def check_status(current: int, due: int, soon_threshold: int) -> Status:
    """Determine status by comparing current value to due threshold."""
    if current >= due:
        return Status.OVERDUE
    if current >= due - soon_threshold:
        return Status.DUE_SOON
    return Status.OK


def classify(
    vehicle: Vehicle,
    due_by_mileage: Optional[int],
    due_by_date: Optional[date],
    today: date,
    lead_miles: int = DEFAULT_LEAD_MILES,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> Status:
    """
    Classify urgency for one projection.

    Mileage and date thresholds are OR'd: either one reaching OVERDUE (or
    DUE_SOON) is enough. No projection at all is OK.
    """
    statuses = [Status.OK]
    if due_by_mileage is not None:
        statuses.append(
            check_status(vehicle.current_mileage, due_by_mileage, lead_miles)
        )
    if due_by_date is not None:
        # Negated days remaining rises toward the due date, like mileage.
        remaining = days_between(today, due_by_date)
        statuses.append(check_status(-remaining, 0, lead_days))
    return min(statuses, key=lambda s: s.value)
