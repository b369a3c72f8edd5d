"""Due computation for one vehicle and service type."""

from datetime import date
from typing import Iterable, Optional, Union

from .calculations import (
    DEFAULT_LEAD_DAYS,
    DEFAULT_LEAD_MILES,
    calc_due_date,
    calc_due_miles,
    classify,
    last_record_of_type,
)
from .dates import days_between, parse_date
from .due_item import DueItem
from .schedule import get_schedule
from .service_record import ServiceRecord
from .service_type import ServiceType
from .status import Status
from .vehicle import Vehicle


def compute_due(
    vehicle: Vehicle,
    service_type: Union[str, ServiceType],
    records: Iterable[ServiceRecord],
    today: Union[str, date],
    lead_miles: int = DEFAULT_LEAD_MILES,
    lead_days: int = DEFAULT_LEAD_DAYS,
) -> Optional[DueItem]:
    """
    Calculate when a service is due for a vehicle.

    Logic:
    - Type has no schedule rule: no verdict (None)
    - Find the last record of this type for the vehicle
    - No history: OK with no due-by fields
    - Has history: due at last mileage + interval and/or last date + months
    - Whichever threshold is reached first drives the status

    Args:
        today: YYYY-MM-DD string or date
        lead_miles / lead_days: window before a threshold that counts as DUE_SOON

    Raises:
        ValidationError: today or a matching record's date is malformed
    """
    rule = get_schedule(service_type)
    if rule is None:
        return None

    today_date = parse_date(today)
    last = last_record_of_type(records, vehicle.id, service_type)

    due_miles = None
    due_date = None
    if last is not None:
        due_miles = calc_due_miles(last.mileage, rule.mileage_interval)
        due_date = calc_due_date(parse_date(last.service_date), rule.month_interval)

    if due_miles is None and due_date is None:
        return DueItem(
            vehicle_id=vehicle.id,
            vehicle_label=vehicle.label,
            type=service_type,
            status=Status.OK,
        )

    status = classify(vehicle, due_miles, due_date, today_date, lead_miles, lead_days)

    return DueItem(
        vehicle_id=vehicle.id,
        vehicle_label=vehicle.label,
        type=service_type,
        status=status,
        due_by_mileage=due_miles,
        due_by_date=due_date.isoformat() if due_date else None,
        distance_to_due=(
            due_miles - vehicle.current_mileage if due_miles is not None else None
        ),
        days_to_due=days_between(today_date, due_date) if due_date else None,
    )
