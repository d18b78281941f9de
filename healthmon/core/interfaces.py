"""Collaborator protocols the engine calls into."""
from typing import Any, List, Optional, Protocol

from ..collectors.health_models import HealthSnapshot
from .alerts import AlertSeverity


class MetricsSource(Protocol):
    """Supplies the current health snapshot; may block on I/O."""

    def get_health_snapshot(self) -> HealthSnapshot:
        ...


class NotificationSink(Protocol):
    """Displays an alert to the user; fire-and-forget."""

    def display_alert(self, severity: AlertSeverity, title: str, message: str) -> None:
        ...


class PerformanceProbe(Protocol):
    """Reports human-readable performance warnings."""

    def check_performance_health(self) -> List[str]:
        ...

    def get_latest_metrics(self) -> Optional[Any]:
        ...
