"""Built-in recurrence rules for each schedulable service type."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .service_type import ServiceType


@dataclass(frozen=True)
class ScheduleRule:
    """How often a service recurs: by miles, by months, or whichever comes first."""

    mileage_interval: Optional[int] = None
    month_interval: Optional[int] = None

    @property
    def is_schedulable(self) -> bool:
        return self.mileage_interval is not None or self.month_interval is not None


DEFAULT_SCHEDULES: Dict[ServiceType, ScheduleRule] = {
    ServiceType.OIL_CHANGE: ScheduleRule(mileage_interval=5000, month_interval=6),
    ServiceType.TIRE_ROTATION: ScheduleRule(mileage_interval=6000, month_interval=12),
    ServiceType.AIR_FILTER: ScheduleRule(mileage_interval=12000, month_interval=12),
    ServiceType.CABIN_FILTER: ScheduleRule(mileage_interval=12000, month_interval=12),
    ServiceType.INSPECTION: ScheduleRule(month_interval=12),
    ServiceType.BRAKE_PADS: ScheduleRule(mileage_interval=30000),
}


def get_schedule(service_type: Union[str, ServiceType]) -> Optional[ScheduleRule]:
    """Return the rule for a type, or None when the type has no usable rule."""
    try:
        rule = DEFAULT_SCHEDULES.get(ServiceType(service_type))
    except ValueError:
        return None
    if rule is None or not rule.is_schedulable:
        return None
    return rule


def is_schedulable(service_type: Union[str, ServiceType]) -> bool:
    return get_schedule(service_type) is not None


def tracked_types() -> List[ServiceType]:
    """Schedulable types in table order."""
    return [t for t, rule in DEFAULT_SCHEDULES.items() if rule.is_schedulable]
