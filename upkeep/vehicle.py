"""Vehicle class for identification and current odometer reading."""

from typing import Optional


class Vehicle:
    """A tracked vehicle."""

    def __init__(
        self,
        id: str,
        make: str,
        model: str,
        year: int,
        current_mileage: int = 0,
        nickname: Optional[str] = None,
    ):
        self.id = id
        self.make = make
        self.model = model
        self.year = year
        self.current_mileage = current_mileage
        self.nickname = nickname

    @property
    def name(self) -> str:
        """Year, make and model."""
        return f"{self.year} {self.make} {self.model}"

    @property
    def label(self) -> str:
        """Display label, prefixed by the nickname when there is one."""
        return vehicle_display(self)


def vehicle_display(vehicle: Vehicle) -> str:
    if vehicle.nickname:
        return f"{vehicle.nickname} • {vehicle.name}"
    return vehicle.name
