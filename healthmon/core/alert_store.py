"""Thread-safe alert registry with lifecycle and deduplication."""
import logging
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .alerts import Alert, AlertCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsertResult:
    """Outcome of an insert: the alert id and whether it is a new alert."""
    alert_id: str
    created: bool


class AlertStore:
    """Owns the alert collection; every operation holds one lock."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """Initialize an empty store."""
        self._lock = threading.Lock()
        self._clock = clock
        self._alerts: List[Alert] = []

    def insert(self, candidate: AlertCandidate) -> InsertResult:
        """Add a candidate, or refresh the open alert with the same title and source."""
        with self._lock:
            now = self._clock()
            existing = self._find_open(candidate.title, candidate.source)
            if existing is not None:
                existing.timestamp = now
                existing.message = candidate.message
                logger.debug("Refreshed alert %s (%s)", existing.id, existing.title)
                return InsertResult(existing.id, created=False)

            alert = Alert(
                id=self._new_id(),
                severity=candidate.severity,
                title=candidate.title,
                message=candidate.message,
                source=candidate.source,
                timestamp=now,
                auto_resolve=candidate.auto_resolve,
            )
            self._alerts.append(alert)

        logger.warning(
            "System alert created: id=%s severity=%s title=%s",
            alert.id, alert.severity.value, alert.title,
        )
        return InsertResult(alert.id, created=True)

    def acknowledge(self, alert_id: str) -> bool:
        """Mark an alert acknowledged. Unknown ids are ignored."""
        with self._lock:
            alert = self._find(alert_id)
            if alert is None:
                return False
            alert.acknowledged = True
        logger.info("Alert acknowledged: %s", alert_id)
        return True

    def resolve(self, alert_id: str) -> bool:
        """Stamp an alert resolved. Unknown ids are ignored."""
        with self._lock:
            alert = self._find(alert_id)
            if alert is None:
                return False
            alert.resolved_at = self._clock()
        logger.info("Alert resolved: %s", alert_id)
        return True

    def clear_resolved(self) -> int:
        """Drop every resolved alert and return how many were removed."""
        with self._lock:
            before = len(self._alerts)
            self._alerts = [a for a in self._alerts if a.resolved_at is None]
            removed = before - len(self._alerts)
        if removed:
            logger.info("Cleared %d resolved alerts", removed)
        return removed

    def get(self, alert_id: str) -> Optional[Alert]:
        """Get a copy of one alert by id."""
        with self._lock:
            alert = self._find(alert_id)
            return replace(alert) if alert else None

    def list(self) -> List[Alert]:
        """Copies of all alerts in insertion order."""
        with self._lock:
            return [replace(a) for a in self._alerts]

    def list_active(self) -> List[Alert]:
        """Copies of open alerts in insertion order."""
        with self._lock:
            return [replace(a) for a in self._alerts if a.is_open]

    def counts(self) -> Tuple[int, int]:
        """(active, total) taken under one lock."""
        with self._lock:
            return sum(1 for a in self._alerts if a.is_open), len(self._alerts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerts)

    def _find(self, alert_id: str) -> Optional[Alert]:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        return None

    def _find_open(self, title: str, source: str) -> Optional[Alert]:
        for alert in self._alerts:
            if alert.is_open and alert.title == title and alert.source == source:
                return alert
        return None

    @staticmethod
    def _new_id() -> str:
        return f"alert_{uuid.uuid4().hex[:12]}"
