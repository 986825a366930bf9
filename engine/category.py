"""Category tags attached to maintenance records and catalog tasks."""

from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    """Kind of maintenance a record documents."""

    OIL = "oil"
    OIL_FILTER = "oil_filter"
    TIRE_ROTATION = "tire_rotation"
    BRAKE_FLUID = "brake_fluid"
    AIR_FILTER = "air_filter"
    WIPER = "wiper"
    INSPECTION = "inspection"
    COOLANT = "coolant"
    SPARK_PLUGS = "spark_plugs"
    BATTERY = "battery"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Return the matching category, or None for missing/unknown tags."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("-", "_"))
        except ValueError:
            return None
