"""
Maintenance due-date prediction and prioritization.

This package predicts which maintenance tasks a vehicle is next due for:
- Category: Maintenance kinds tagged on records and catalog tasks
- MaintenanceTaskDefinition: Catalog entry with distance/time intervals
- VehicleSnapshot: Odometer and usage profile
- MaintenanceRecord: Logged maintenance
- DueInfo: Remaining distance/time until due
- Suggestion: Scored, classified recommendation
- Status / Confidence: Urgency buckets and data confidence
- Logbook: Vehicle plus history, loaded from YAML
"""

from .errors import CatalogError, InvalidArgumentError, LogbookError
from .status import Status, Confidence, STATUS_THRESHOLDS
from .category import Category
from .task import MaintenanceTaskDefinition
from .vehicle import VehicleSnapshot
from .record import MaintenanceRecord
from .due_info import DueInfo
from .suggestion import Suggestion
from .calculations import (
    LastOccurrence,
    estimate_pace,
    resolve_last_occurrence,
    calc_due,
    calc_urgency_score,
    classify_status,
    rate_confidence,
)
from .catalog import load_catalog, default_catalog
from .suggestions import generate_maintenance_suggestions, group_by_status, build_message
from .logbook import Logbook
from .loader import load_logbook, save_record, save_odometer

__all__ = [
    "CatalogError",
    "InvalidArgumentError",
    "LogbookError",
    "Status",
    "Confidence",
    "STATUS_THRESHOLDS",
    "Category",
    "MaintenanceTaskDefinition",
    "VehicleSnapshot",
    "MaintenanceRecord",
    "DueInfo",
    "Suggestion",
    "LastOccurrence",
    "estimate_pace",
    "resolve_last_occurrence",
    "calc_due",
    "calc_urgency_score",
    "classify_status",
    "rate_confidence",
    "load_catalog",
    "default_catalog",
    "generate_maintenance_suggestions",
    "group_by_status",
    "build_message",
    "Logbook",
    "load_logbook",
    "save_record",
    "save_odometer",
]
