"""Alert data model for system monitoring."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional


class AlertSeverity(str, Enum):
    """Alert severity, ordered critical > warning > info for display."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {
    AlertSeverity.CRITICAL: 3,
    AlertSeverity.WARNING: 2,
    AlertSeverity.INFO: 1,
}


@dataclass(frozen=True)
class AlertCandidate:
    """An alert proposed by a check, before it reaches the store."""
    severity: AlertSeverity
    title: str
    message: str
    source: str  # "cpu-monitor", "temperature-monitor", ...
    auto_resolve: bool = False

    @property
    def dedup_key(self) -> tuple:
        return (self.title, self.source)


@dataclass
class Alert:
    """Alert record owned by the alert store."""
    id: str
    severity: AlertSeverity
    title: str
    message: str
    source: str
    timestamp: datetime
    acknowledged: bool = False
    resolved_at: Optional[datetime] = None
    auto_resolve: bool = False

    @property
    def is_open(self) -> bool:
        """Open alerts are neither acknowledged nor resolved."""
        return not self.acknowledged and self.resolved_at is None

    @property
    def dedup_key(self) -> tuple:
        return (self.title, self.source)


def sort_by_priority(alerts: Iterable[Alert]) -> List[Alert]:
    """Order alerts for display: highest severity first, newest first within a tier."""
    return sorted(
        alerts,
        key=lambda alert: (alert.severity.priority, alert.timestamp),
        reverse=True,
    )
