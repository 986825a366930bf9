"""Helper functions for due-date prediction and urgency scoring."""

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional

from .due_info import DueInfo
from .record import MaintenanceRecord
from .status import Confidence, Status
from .task import MaintenanceTaskDefinition
from .vehicle import VehicleSnapshot

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class LastOccurrence:
    """When a task was last done, or the baseline it is counted from."""

    last_date: date
    last_mileage_km: float
    from_history: bool


def estimate_pace(vehicle: VehicleSnapshot) -> Optional[float]:
    """Distance driven per day from the declared monthly average, if any."""
    if not vehicle.has_declared_pace:
        return None
    return vehicle.average_distance_per_month_km / DAYS_PER_MONTH


def resolve_last_occurrence(
    task: MaintenanceTaskDefinition,
    records: Iterable[MaintenanceRecord],
    vehicle: VehicleSnapshot,
    today: date,
) -> LastOccurrence:
    """
    Find the most recent record matching the task.

    - With history: latest record by date; equal dates prefer higher mileage.
      A record without mileage counts from the current odometer.
    - Without history: registration date (or today) at the current odometer.
    """
    matching = []
    for record in records:
        if not task.matches(record):
            continue
        service_date = record.service_date
        if service_date is None:
            logger.warning(
                "Skipping record %r for task %s: unparsable date %r",
                record.title, task.id, record.date,
            )
            continue
        matching.append((service_date, record))

    if not matching:
        return LastOccurrence(
            last_date=vehicle.start_date or today,
            last_mileage_km=vehicle.odometer_km,
            from_history=False,
        )

    def sort_key(pair):
        service_date, record = pair
        mileage = record.mileage_km if record.mileage_km is not None else -math.inf
        return (service_date, mileage)

    service_date, last = max(matching, key=sort_key)
    mileage = last.mileage_km if last.mileage_km is not None else vehicle.odometer_km
    return LastOccurrence(last_date=service_date, last_mileage_km=mileage, from_history=True)


def calc_due(
    occurrence: LastOccurrence,
    task: MaintenanceTaskDefinition,
    odometer_km: float,
    today: date,
    pace: Optional[float],
    declared_due: Optional[date] = None,
) -> DueInfo:
    """
    Calculate remaining distance and days until the task is next due.

    A declared due date (e.g. inspection expiry) overrides the time interval.
    Without any time rule, remaining days are projected from remaining
    distance at the given pace; the projection is for display only.
    """
    due_km = None
    remaining_km = math.inf
    if task.distance_interval_km is not None:
        due_km = occurrence.last_mileage_km + task.distance_interval_km
        remaining_km = due_km - odometer_km

    due_date = None
    projected = False
    remaining_days = math.inf
    if declared_due is not None:
        due_date = declared_due
        remaining_days = (due_date - today).days
    elif task.time_interval_days is not None:
        due_date = occurrence.last_date + timedelta(days=task.time_interval_days)
        remaining_days = (due_date - today).days
    elif task.distance_interval_km is not None and pace is not None and pace > 0:
        remaining_days = remaining_km / pace
        projected = True

    return DueInfo(
        remaining_km=remaining_km,
        remaining_days=remaining_days,
        is_overdue=remaining_km <= 0 or remaining_days <= 0,
        due_km=due_km,
        due_date=due_date,
        projected=projected,
    )


def _proximity(remaining: float, interval: Optional[float]) -> Optional[float]:
    if interval is None or interval <= 0 or math.isinf(remaining):
        return None
    return min(1.0, max(0.0, 1 - remaining / interval))


def calc_urgency_score(due_info: DueInfo, task: MaintenanceTaskDefinition) -> int:
    """
    Urgency from 0 to 100, driven by whichever dimension is closest to due.

    Projected days are not scored; only a real time interval is.
    """
    proximities: List[float] = []
    km = _proximity(due_info.remaining_km, task.distance_interval_km)
    if km is not None:
        proximities.append(km)
    if not due_info.projected:
        days = _proximity(due_info.remaining_days, task.time_interval_days)
        if days is not None:
            proximities.append(days)
    if not proximities:
        return 0
    return int(math.floor(max(proximities) * 100 + 0.5))


def classify_status(score: int, is_overdue: bool) -> Status:
    """Bucket a suggestion; anything overdue is critical."""
    if is_overdue:
        return Status.CRITICAL
    return Status.for_score(score)


def rate_confidence(from_history: bool, has_pace: bool) -> Confidence:
    """HIGH when both anchors are real data, MEDIUM for one, LOW for none."""
    if from_history and has_pace:
        return Confidence.HIGH
    if from_history or has_pace:
        return Confidence.MEDIUM
    return Confidence.LOW
