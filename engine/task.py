"""MaintenanceTaskDefinition: one entry of the task catalog."""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .category import Category
from .errors import CatalogError

if TYPE_CHECKING:
    from .record import MaintenanceRecord


@dataclass(frozen=True)
class MaintenanceTaskDefinition:
    """A recommended maintenance task with its distance and/or time interval."""

    id: str
    display_title: str
    category: Category
    distance_interval_km: Optional[float] = None
    time_interval_days: Optional[int] = None
    template_id: Optional[str] = None
    icon: Optional[str] = None
    declared_due_field: Optional[str] = None

    def __post_init__(self):
        if self.distance_interval_km is None and self.time_interval_days is None:
            raise CatalogError(f"Task '{self.id}' defines neither intervalKm nor intervalDays")
        if self.template_id is None:
            object.__setattr__(self, "template_id", self.id)

    def matches(self, record: "MaintenanceRecord") -> bool:
        """Check whether a record documents this task."""
        return record.category is self.category
