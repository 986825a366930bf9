"""DueInfo dataclass for remaining distance and time until a task is due."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DueInfo:
    """
    Remaining distance/time until the next due point.

    remaining_km and remaining_days are math.inf when no rule applies to
    that dimension. remaining_days is a projection from distance when
    projected is True.
    """

    remaining_km: float
    remaining_days: float
    is_overdue: bool
    due_km: Optional[float] = None
    due_date: Optional[date] = None
    projected: bool = False

    @property
    def has_signal(self) -> bool:
        return not (math.isinf(self.remaining_km) and math.isinf(self.remaining_days))
