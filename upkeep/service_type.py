"""Service type enumeration and the canonical label mapping."""

from enum import Enum
from typing import Union

from .errors import ValidationError


class ServiceType(str, Enum):
    """Kinds of service a record can describe."""

    OIL_CHANGE = "oil_change"
    TIRE_ROTATION = "tire_rotation"
    BRAKE_PADS = "brake_pads"
    BRAKE_FLUID = "brake_fluid"
    COOLANT = "coolant"
    TRANSMISSION_FLUID = "transmission_fluid"
    BATTERY = "battery"
    SPARK_PLUGS = "spark_plugs"
    AIR_FILTER = "air_filter"
    CABIN_FILTER = "cabin_filter"
    ALIGNMENT = "alignment"
    INSPECTION = "inspection"
    REGISTRATION = "registration"
    OTHER = "other"


SERVICE_LABELS = {
    ServiceType.OIL_CHANGE: "Oil Change",
    ServiceType.TIRE_ROTATION: "Tire Rotation",
    ServiceType.BRAKE_PADS: "Brake Pads",
    ServiceType.BRAKE_FLUID: "Brake Fluid",
    ServiceType.COOLANT: "Coolant",
    ServiceType.TRANSMISSION_FLUID: "Transmission Fluid",
    ServiceType.BATTERY: "Battery",
    ServiceType.SPARK_PLUGS: "Spark Plugs",
    ServiceType.AIR_FILTER: "Air Filter",
    ServiceType.CABIN_FILTER: "Cabin Filter",
    ServiceType.ALIGNMENT: "Alignment",
    ServiceType.INSPECTION: "Inspection",
    ServiceType.REGISTRATION: "Registration",
    ServiceType.OTHER: "Other",
}


def parse_service_type(value: Union[str, ServiceType]) -> ServiceType:
    """Convert a token such as 'oil_change' into a ServiceType."""
    try:
        return ServiceType(value)
    except ValueError:
        raise ValidationError(f"Unknown service type: {value!r}") from None


def label_for_type(value: Union[str, ServiceType]) -> str:
    """Human-readable label for a service type; unknown tokens are returned as-is."""
    try:
        return SERVICE_LABELS[ServiceType(value)]
    except ValueError:
        return str(value)


def type_token(value: Union[str, ServiceType]) -> str:
    """Plain string token for a service type, e.g. 'oil_change'."""
    return value.value if isinstance(value, ServiceType) else str(value)
