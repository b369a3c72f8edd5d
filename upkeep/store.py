"""YAML loading and saving of the vehicle and service record collections."""

import logging
import uuid
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate

from .dates import parse_date
from .errors import ValidationError
from .service_record import ServiceRecord
from .service_type import ServiceType, type_token
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"
VEHICLES_FILE = "vehicles.yaml"
RECORDS_FILE = "records.yaml"


def load_schema() -> dict:
    """Load the JSON schema for both collections."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def vehicles_path(data_dir: Union[str, Path]) -> Path:
    return Path(data_dir) / VEHICLES_FILE


def records_path(data_dir: Union[str, Path]) -> Path:
    return Path(data_dir) / RECORDS_FILE


def new_id() -> str:
    """Opaque unique id for a new vehicle or record."""
    return str(uuid.uuid4())


# =============================================================================
# Dict conversion
# =============================================================================


def vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the stored dict format (camelCase keys)."""
    d: Dict[str, Any] = {"id": vehicle.id}
    if vehicle.nickname:
        d["nickname"] = vehicle.nickname
    d["make"] = vehicle.make
    d["model"] = vehicle.model
    d["year"] = vehicle.year
    d["currentMileage"] = vehicle.current_mileage
    return d


def vehicle_from_dict(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        dct["id"],
        dct["make"],
        dct["model"],
        dct["year"],
        dct["currentMileage"],
        dct.get("nickname"),
    )


def record_to_dict(record: ServiceRecord) -> Dict[str, Any]:
    """Serialize a ServiceRecord, omitting None values for cleaner YAML."""
    d: Dict[str, Any] = {
        "id": record.id,
        "vehicleId": record.vehicle_id,
        "type": type_token(record.type),
        "serviceDate": record.service_date,
        "mileage": record.mileage,
    }
    if record.cost_cents is not None:
        d["costCents"] = record.cost_cents
    if record.shop_name is not None:
        d["shopName"] = record.shop_name
    if record.notes is not None:
        d["notes"] = record.notes
    return d


def record_from_dict(dct: Dict[str, Any]) -> ServiceRecord:
    return ServiceRecord(
        dct["id"],
        dct["vehicleId"],
        ServiceType(dct["type"]),
        dct["serviceDate"],
        dct["mileage"],
        dct.get("costCents"),
        dct.get("shopName"),
        dct.get("notes"),
    )


# =============================================================================
# File access
# =============================================================================


def _load_collection(filename: Union[str, Path], kind: str) -> List[Dict[str, Any]]:
    """
    Load and validate one collection.

    A missing, unreadable, malformed or schema-violating file yields an empty
    list so the rest of the application keeps working. Records whose date is
    not a real calendar day are dropped individually.
    """
    path = Path(filename)
    if not path.exists():
        logger.debug("No %s file at %s", kind, path)
        return []
    try:
        with open(path, "r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp)
        if data is None:
            return []
        if kind == "records":
            # Unquoted dates in hand-edited files load as date objects
            for item in data if isinstance(data, list) else []:
                if isinstance(item, dict) and isinstance(item.get("serviceDate"), date):
                    item["serviceDate"] = item["serviceDate"].isoformat()
        validate(instance=data, schema=load_schema()[kind])
    except (OSError, ValueError, yaml.YAMLError) as e:
        # ValueError covers undecodable bytes and impossible unquoted dates
        logger.warning("Could not read %s from %s: %s", kind, path, e)
        return []
    except SchemaValidationError as e:
        logger.warning("Ignoring invalid %s file %s: %s", kind, path, e.message)
        return []
    if kind == "records":
        data = [item for item in data if _has_valid_date(item, path)]
    return data


def _has_valid_date(item: Dict[str, Any], path: Path) -> bool:
    try:
        parse_date(item["serviceDate"])
    except ValidationError as e:
        logger.warning("Skipping record %s in %s: %s", item["id"], path, e)
        return False
    return True


def _dump_collection(filename: Union[str, Path], data: List[Dict[str, Any]]) -> bool:
    """Write a collection. Failures are logged and reported as False."""
    path = Path(filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to save %s: %s", path, e)
        return False
    return True


def load_vehicles(filename: Union[str, Path]) -> List[Vehicle]:
    """Load vehicles from a YAML file (empty on any read failure)."""
    return [vehicle_from_dict(d) for d in _load_collection(filename, "vehicles")]


def load_records(filename: Union[str, Path]) -> List[ServiceRecord]:
    """Load service records from a YAML file (empty on any read failure)."""
    return [record_from_dict(d) for d in _load_collection(filename, "records")]


def save_vehicles(filename: Union[str, Path], vehicles: List[Vehicle]) -> bool:
    return _dump_collection(filename, [vehicle_to_dict(v) for v in vehicles])


def save_records(filename: Union[str, Path], records: List[ServiceRecord]) -> bool:
    return _dump_collection(filename, [record_to_dict(r) for r in records])


# =============================================================================
# Collection edits
# =============================================================================


def find_vehicle(vehicles: List[Vehicle], vehicle_id: str) -> Optional[Vehicle]:
    for vehicle in vehicles:
        if vehicle.id == vehicle_id:
            return vehicle
    return None


def delete_vehicle(
    vehicles: List[Vehicle],
    records: List[ServiceRecord],
    vehicle_id: str,
    cascade: bool = True,
) -> Tuple[List[Vehicle], List[ServiceRecord]]:
    """
    Remove a vehicle, returning new (vehicles, records) lists.

    With cascade (the default) the vehicle's records go too; without it they
    are kept as orphans. Raises KeyError for an unknown vehicle id.
    """
    if find_vehicle(vehicles, vehicle_id) is None:
        raise KeyError(vehicle_id)
    remaining = [v for v in vehicles if v.id != vehicle_id]
    if cascade:
        records = [r for r in records if r.vehicle_id != vehicle_id]
    else:
        records = list(records)
    return remaining, records


def delete_record(records: List[ServiceRecord], record_id: str) -> List[ServiceRecord]:
    """Remove a record by id. Raises KeyError for an unknown id."""
    remaining = [r for r in records if r.id != record_id]
    if len(remaining) == len(records):
        raise KeyError(record_id)
    return remaining


def replace_record(
    records: List[ServiceRecord], record: ServiceRecord
) -> List[ServiceRecord]:
    """
    Swap in an edited record, keeping its position in the list.

    Matches on record.id. Raises KeyError for an unknown id.
    """
    if not any(r.id == record.id for r in records):
        raise KeyError(record.id)
    return [record if r.id == record.id else r for r in records]
