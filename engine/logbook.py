"""Logbook class - a vehicle snapshot together with its maintenance history."""

from datetime import date
from typing import List, Optional, Sequence

from .category import Category
from .record import MaintenanceRecord
from .suggestion import Suggestion
from .suggestions import generate_maintenance_suggestions
from .task import MaintenanceTaskDefinition
from .vehicle import VehicleSnapshot


def _date_key(record: MaintenanceRecord) -> date:
    return record.service_date or date.min


class Logbook:
    """One vehicle and the maintenance records logged against it."""

    def __init__(
        self,
        vehicle: VehicleSnapshot,
        records: Optional[List[MaintenanceRecord]] = None,
    ):
        self.vehicle = vehicle
        self.records = records or []

    @property
    def name(self) -> str:
        return self.vehicle.name or "Unnamed vehicle"

    @property
    def last_record(self) -> Optional[MaintenanceRecord]:
        """Get the most recent record overall."""
        if not self.records:
            return None
        return max(self.records, key=lambda r: (_date_key(r), r.mileage_km or 0))

    def get_records_for_category(self, category: Category) -> List[MaintenanceRecord]:
        """Get all records tagged with a category."""
        return [r for r in self.records if r.category is category]

    def get_history_sorted(
        self, sort_by: str = "date", reverse: bool = True
    ) -> List[MaintenanceRecord]:
        """
        Get records sorted by specified field.

        Args:
            sort_by: "date", "mileage", or "category"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(self.records, key=_date_key, reverse=reverse)
        elif sort_by == "mileage":
            return sorted(self.records, key=lambda r: r.mileage_km or 0, reverse=reverse)
        elif sort_by == "category":
            return sorted(
                self.records,
                key=lambda r: (r.category.value if r.category else "", _date_key(r)),
                reverse=reverse,
            )
        return self.records

    def suggestions(
        self,
        catalog: Optional[Sequence[MaintenanceTaskDefinition]] = None,
        today: Optional[date] = None,
    ) -> List[Suggestion]:
        """Ranked maintenance suggestions for this vehicle."""
        return generate_maintenance_suggestions(
            self.vehicle, self.records, catalog=catalog, today=today
        )
