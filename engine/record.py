"""MaintenanceRecord class for logged maintenance."""
import datetime
from typing import Optional

from .category import Category
from .dates import DateLike, to_date, to_number


class MaintenanceRecord:
    """A record of maintenance performed on a vehicle."""

    def __init__(
            self,
            title: str,
            date: DateLike,
            mileage_km: Optional[float] = None,
            cost: Optional[float] = None,
            category: Optional[Category] = None,
            notes: Optional[str] = None,
            performed_by: Optional[str] = None,
    ):
        self.title = title
        self.date = date
        self.mileage_km = to_number(mileage_km, "mileage_km")
        self.cost = to_number(cost, "cost")
        self.category = Category.parse(category)
        self.notes = notes
        self.performed_by = performed_by

    @property
    def service_date(self) -> Optional[datetime.date]:
        """The record date normalised to a date, None if unparsable."""
        return to_date(self.date)
