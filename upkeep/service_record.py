"""ServiceRecord class for maintenance performed on a vehicle."""
from typing import Optional, Union

from .service_type import ServiceType


class ServiceRecord:
    """A record of maintenance performed."""

    def __init__(
            self,
            id: str,
            vehicle_id: str,
            type: Union[str, ServiceType],
            service_date: str,
            mileage: int,
            cost_cents: Optional[int] = None,
            shop_name: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.type = type
        self.service_date = service_date
        self.mileage = mileage
        self.cost_cents = cost_cents
        self.shop_name = shop_name
        self.notes = notes
