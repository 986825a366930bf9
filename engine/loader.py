"""YAML loading and saving utilities for logbook files."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from jsonschema import ValidationError, validate

from .catalog import DATA_DIR, load_schema
from .dates import to_date
from .errors import InvalidArgumentError, LogbookError
from .logbook import Logbook
from .record import MaintenanceRecord
from .vehicle import VehicleSnapshot

LOGBOOK_SCHEMA_PATH = DATA_DIR / "logbook_schema.yaml"


def read_yaml(filename: Union[str, Path]) -> Any:
    """Load YAML with dates and other non-JSON scalars turned into strings."""
    with open(filename, "rb") as fp:
        return json.loads(json.dumps(yaml.load(fp, Loader=yaml.SafeLoader), default=str))


def _parse_object(dct: Dict[str, Any]) -> Union[VehicleSnapshot, MaintenanceRecord, Logbook, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle (inside 'vehicle' key)
    if "odometerKm" in dct:
        return VehicleSnapshot(
            odometer_km=dct["odometerKm"],
            average_distance_per_month_km=dct.get("averageDistancePerMonthKm"),
            first_registered_month=dct.get("firstRegisteredMonth"),
            inspection_expiry=dct.get("inspectionExpiry"),
            model_year=dct.get("modelYear"),
            name=dct.get("name"),
        )
    # Maintenance record
    elif "title" in dct and "date" in dct:
        return MaintenanceRecord(
            dct["title"],
            dct["date"],
            dct.get("mileageKm"),
            dct.get("cost"),
            dct.get("category"),
            dct.get("notes"),
            dct.get("performedBy"),
        )
    # Top-level logbook
    elif "vehicle" in dct:
        return Logbook(dct["vehicle"], dct.get("records"))
    else:
        return dct


def read_logbook_data(filename: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a logbook file as raw camelCase data, checked against the logbook schema.

    Raises LogbookError if the file does not match the schema.
    """
    data = read_yaml(filename)
    try:
        validate(instance=data, schema=load_schema(LOGBOOK_SCHEMA_PATH))
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        raise LogbookError(f"Invalid logbook {filename} at '{where}': {e.message}") from e
    return data


def load_logbook(filename: Union[str, Path]) -> Logbook:
    """Load a logbook from a YAML file."""
    return json.loads(json.dumps(read_logbook_data(filename)), object_hook=_parse_object)


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a record to the YAML dict format (camelCase keys)."""
    service_date = to_date(record.date)
    d: Dict[str, Any] = {
        "title": record.title,
        "date": service_date.isoformat() if service_date else str(record.date),
    }
    if record.category is not None:
        d["category"] = record.category.value
    if record.mileage_km is not None:
        d["mileageKm"] = record.mileage_km
    if record.cost is not None:
        d["cost"] = record.cost
    if record.performed_by is not None:
        d["performedBy"] = record.performed_by
    if record.notes is not None:
        d["notes"] = record.notes
    return d


def _write_yaml(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def save_record(filename: Union[str, Path], record: MaintenanceRecord) -> None:
    """
    Append a maintenance record to a logbook YAML file.

    Loads the raw YAML, appends the record to the records list,
    and writes back to the file.
    """
    data = read_logbook_data(filename)

    if data.get("records") is None:
        data["records"] = []

    data["records"].append(_record_to_dict(record))
    _write_yaml(filename, data)


def save_odometer(filename: Union[str, Path], odometer_km: float) -> None:
    """
    Update the odometer reading of a logbook YAML file.

    Raises InvalidArgumentError for a negative reading.
    """
    if odometer_km is None or odometer_km < 0:
        raise InvalidArgumentError(f"odometer_km must be >= 0, got {odometer_km!r}")

    data = read_logbook_data(filename)
    data["vehicle"]["odometerKm"] = odometer_km
    _write_yaml(filename, data)
