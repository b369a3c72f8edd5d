"""DueItem dataclass for a calculated (vehicle, service type) verdict."""

from dataclasses import dataclass
from typing import Optional, Union

from .service_type import ServiceType, label_for_type
from .status import Status


@dataclass
class DueItem:
    """Calculated service due information. Derived, never persisted."""

    vehicle_id: str
    vehicle_label: str
    type: Union[str, ServiceType]
    status: Status
    due_by_mileage: Optional[int] = None
    due_by_date: Optional[str] = None
    distance_to_due: Optional[int] = None
    days_to_due: Optional[int] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)

    @property
    def type_label(self) -> str:
        return label_for_type(self.type)
