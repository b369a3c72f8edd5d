"""
Vehicle upkeep tracking.

This package decides which maintenance items are due for a set of vehicles:
- ServiceType / Status: enumerations and canonical labels
- Vehicle, ServiceRecord: tracked data
- ScheduleRule: built-in recurrence table
- compute_due: verdict for one (vehicle, service type) pair
- reports: buckets, sorting and spend summaries across vehicles
- store: YAML persistence of the collections
"""

from .errors import UpkeepError, ValidationError
from .status import Status
from .service_type import (
    ServiceType,
    SERVICE_LABELS,
    label_for_type,
    parse_service_type,
    type_token,
)
from .vehicle import Vehicle, vehicle_display
from .service_record import ServiceRecord
from .schedule import (
    ScheduleRule,
    DEFAULT_SCHEDULES,
    get_schedule,
    is_schedulable,
    tracked_types,
)
from .dates import parse_date, add_months, days_between
from .calculations import (
    DEFAULT_LEAD_MILES,
    DEFAULT_LEAD_DAYS,
    last_record_of_type,
    calc_due_miles,
    calc_due_date,
    check_status,
    classify,
)
from .due_item import DueItem
from .engine import compute_due
from .money import format_money_cents, parse_cost

__all__ = [
    "UpkeepError",
    "ValidationError",
    "Status",
    "ServiceType",
    "SERVICE_LABELS",
    "label_for_type",
    "parse_service_type",
    "type_token",
    "Vehicle",
    "vehicle_display",
    "ServiceRecord",
    "ScheduleRule",
    "DEFAULT_SCHEDULES",
    "get_schedule",
    "is_schedulable",
    "tracked_types",
    "parse_date",
    "add_months",
    "days_between",
    "DEFAULT_LEAD_MILES",
    "DEFAULT_LEAD_DAYS",
    "last_record_of_type",
    "calc_due_miles",
    "calc_due_date",
    "check_status",
    "classify",
    "DueItem",
    "compute_due",
    "format_money_cents",
    "parse_cost",
]
