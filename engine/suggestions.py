"""
Suggestion aggregation: run every catalog task against one vehicle.

The pipeline per task is
resolve_last_occurrence -> calc_due -> calc_urgency_score ->
classify_status / rate_confidence, after which tasks with no usable
signal are dropped and the rest ranked.
"""

import logging
import math
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from .calculations import (
    calc_due,
    calc_urgency_score,
    classify_status,
    estimate_pace,
    rate_confidence,
    resolve_last_occurrence,
)
from .catalog import default_catalog
from .dates import to_date
from .due_info import DueInfo
from .errors import InvalidArgumentError
from .record import MaintenanceRecord
from .status import Confidence, Status
from .suggestion import Suggestion
from .task import MaintenanceTaskDefinition
from .vehicle import VehicleSnapshot

logger = logging.getLogger(__name__)


def _format_days(days: float) -> str:
    return f"{math.ceil(days):,} days"


def build_message(due_info: DueInfo, confidence: Confidence,
                  from_history: bool = False) -> str:
    """Short user-facing summary of how far off a task is."""
    km = due_info.remaining_km
    days = due_info.remaining_days
    has_km = not math.isinf(km)
    has_days = not math.isinf(days)

    if due_info.is_overdue:
        message = "Overdue, do this as soon as possible."
    elif has_km and has_days:
        message = f"About {km:,.0f} km / {_format_days(days)} left."
    elif has_km:
        message = f"About {km:,.0f} km left."
    elif has_days:
        message = f"About {_format_days(days)} left."
    else:
        message = "No due point."

    if confidence is Confidence.LOW:
        message += " (estimated: no history)"
    elif confidence is Confidence.MEDIUM:
        if from_history:
            message += " (estimated: no mileage pace)"
        else:
            message += " (estimated: no service history)"
    return message


def _build_suggestion(
    task: MaintenanceTaskDefinition,
    vehicle: VehicleSnapshot,
    records: Sequence[MaintenanceRecord],
    pace: Optional[float],
    today: date,
) -> Suggestion:
    occurrence = resolve_last_occurrence(task, records, vehicle, today)

    declared_due = None
    if task.declared_due_field:
        declared_due = to_date(getattr(vehicle, task.declared_due_field, None))

    due_info = calc_due(
        occurrence, task, vehicle.odometer_km, today, pace, declared_due=declared_due
    )
    score = calc_urgency_score(due_info, task)
    status = classify_status(score, due_info.is_overdue)
    from_history = occurrence.from_history or declared_due is not None
    confidence = rate_confidence(from_history, pace is not None)

    return Suggestion(
        id=task.id,
        title=task.display_title,
        template_id=task.template_id,
        icon=task.icon,
        due_info=due_info,
        score=score,
        status=status,
        confidence=confidence,
        message=build_message(due_info, confidence, from_history),
    )


def generate_maintenance_suggestions(
    vehicle: Optional[VehicleSnapshot],
    records: Optional[Iterable[MaintenanceRecord]],
    catalog: Optional[Sequence[MaintenanceTaskDefinition]] = None,
    today: Optional[date] = None,
) -> List[Suggestion]:
    """
    Predict and rank the maintenance tasks a vehicle is due for.

    Args:
        vehicle: Current vehicle state. Required.
        records: Maintenance history for that vehicle (may be empty or None).
        catalog: Task definitions; defaults to the bundled catalog.
        today: Reference date; defaults to the current date.

    Returns:
        Suggestions sorted by score (desc), remaining days (asc), id (asc),
        with at most one suggestion per template id.
    """
    if vehicle is None:
        raise InvalidArgumentError("A vehicle snapshot is required")

    records = list(records or [])
    catalog = default_catalog() if catalog is None else catalog
    today = today or date.today()
    pace = estimate_pace(vehicle)
    logger.debug(
        "Generating suggestions: odometer=%s pace=%s records=%d tasks=%d",
        vehicle.odometer_km, pace, len(records), len(catalog),
    )

    candidates = []
    for task in catalog:
        suggestion = _build_suggestion(task, vehicle, records, pace, today)
        if not suggestion.due_info.has_signal:
            logger.debug("Dropping task %s: no distance or time signal", task.id)
            continue
        candidates.append(suggestion)

    candidates.sort(key=lambda s: (-s.score, s.due_info.remaining_days, s.id))

    seen_templates = set()
    suggestions = []
    for suggestion in candidates:
        if suggestion.template_id in seen_templates:
            logger.debug("Dropping duplicate template %s", suggestion.template_id)
            continue
        seen_templates.add(suggestion.template_id)
        suggestions.append(suggestion)
    return suggestions


def group_by_status(suggestions: Iterable[Suggestion]) -> Dict[Status, List[Suggestion]]:
    """Group suggestions by status, most urgent group first, ranking preserved."""
    groups: Dict[Status, List[Suggestion]] = {
        status: [] for status in sorted(Status, key=lambda s: s.urgency)
    }
    for suggestion in suggestions:
        groups[suggestion.status].append(suggestion)
    return groups
