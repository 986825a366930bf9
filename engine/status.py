"""Status and confidence enums for maintenance suggestions."""

from enum import Enum


class Status(str, Enum):
    """Suggestion status buckets, most urgent first."""

    CRITICAL = "critical"
    SOON = "soon"
    UPCOMING = "upcoming"
    OK = "ok"

    @property
    def urgency(self) -> int:
        """Lower value = more urgent."""
        return _URGENCY[self]

    @classmethod
    def for_score(cls, score: float) -> "Status":
        """Bucket a score alone (ignores the overdue flag)."""
        for threshold, status in STATUS_THRESHOLDS:
            if score >= threshold:
                return status
        return cls.OK


class Confidence(str, Enum):
    """How much of a suggestion rests on declared rather than defaulted data."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


_URGENCY = {Status.CRITICAL: 1, Status.SOON: 2, Status.UPCOMING: 3, Status.OK: 4}

# Minimum score per bucket, checked in order.
STATUS_THRESHOLDS = (
    (80, Status.CRITICAL),
    (60, Status.SOON),
    (30, Status.UPCOMING),
)
