"""Suggestion dataclass: one ranked maintenance recommendation."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .due_info import DueInfo
from .status import Confidence, Status


def _finite(value: float) -> Optional[float]:
    return None if math.isinf(value) else value


@dataclass(frozen=True)
class Suggestion:
    """A maintenance task the vehicle is approaching, with its urgency."""

    id: str
    title: str
    template_id: str
    due_info: DueInfo
    score: int
    status: Status
    confidence: Confidence
    message: str = ""
    icon: Optional[str] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.CRITICAL, Status.SOON)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys; infinite remaining values become None."""
        due = self.due_info
        return {
            "id": self.id,
            "title": self.title,
            "templateId": self.template_id,
            "icon": self.icon,
            "dueInfo": {
                "remainingKm": _finite(due.remaining_km),
                "remainingDays": _finite(due.remaining_days),
                "isOverdue": due.is_overdue,
                "dueKm": due.due_km,
                "dueDate": due.due_date.isoformat() if due.due_date else None,
                "projected": due.projected,
            },
            "score": self.score,
            "status": self.status.value,
            "confidence": self.confidence.value,
            "message": self.message,
        }
