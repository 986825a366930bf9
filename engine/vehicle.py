"""VehicleSnapshot: the vehicle state the engine computes against."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .dates import DateLike, parse_year_month, to_number
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class VehicleSnapshot:
    """Odometer reading and usage profile of one vehicle."""

    odometer_km: float
    average_distance_per_month_km: Optional[float] = None
    first_registered_month: Optional[str] = None
    inspection_expiry: Optional[DateLike] = None
    model_year: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self):
        odometer = to_number(self.odometer_km, "odometer_km")
        if odometer is None or odometer < 0:
            raise InvalidArgumentError(
                f"odometer_km must be >= 0, got {self.odometer_km!r}"
            )
        object.__setattr__(
            self,
            "average_distance_per_month_km",
            to_number(self.average_distance_per_month_km, "average_distance_per_month_km"),
        )

    @property
    def has_declared_pace(self) -> bool:
        pace = self.average_distance_per_month_km
        return pace is not None and pace > 0

    @property
    def start_date(self) -> Optional[date]:
        """First registration, else 1 January of the model year, else None."""
        registered = parse_year_month(self.first_registered_month)
        if registered is not None:
            return registered
        if self.model_year:
            try:
                return date(int(self.model_year), 1, 1)
            except (TypeError, ValueError):
                return None
        return None
