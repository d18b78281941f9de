"""Monitoring engine wiring metrics, thresholds, alert store and notifications."""
import logging
import threading
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from ..collectors.health_models import HealthSnapshot
from ..config.monitoring_config import MonitoringConfig
from . import threshold_policy
from .alert_store import AlertStore, InsertResult
from .alerts import Alert, AlertCandidate, AlertSeverity
from .errors import ConfigError, MetricsSourceUnavailable
from .interfaces import MetricsSource, NotificationSink, PerformanceProbe
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)

MONITORING_SOURCE = "monitoring-service"

HEALTH_CHECK_FAILED = AlertCandidate(
    severity=AlertSeverity.WARNING,
    title="Health Check Failed",
    message="Unable to perform system health monitoring. Some alerts may be unavailable.",
    source=MONITORING_SOURCE,
)


@dataclass(frozen=True)
class HealthStatus:
    """Point-in-time view of the engine for status displays."""
    is_monitoring: bool
    last_health_check: Optional[HealthSnapshot]
    active_alerts: int
    total_alerts: int
    performance_metrics: Optional[Any] = None


class MonitoringEngine:
    """Samples health on a schedule and keeps a deduplicated alert stream.

    The host owns the lifecycle: construct, ``start()``, ``stop()``. Hosts
    with their own loop can call ``tick()`` directly instead of starting
    the scheduler. Collaborators may be attached or detached at any time;
    a missing one is skipped for that tick.
    """

    def __init__(
        self,
        metrics_source: Optional[MetricsSource] = None,
        notification_sink: Optional[NotificationSink] = None,
        config: Optional[MonitoringConfig] = None,
        alert_store: Optional[AlertStore] = None,
        performance_probe: Optional[PerformanceProbe] = None,
    ):
        """Initialize the engine in the stopped state."""
        self.metrics_source = metrics_source
        self.notification_sink = notification_sink
        self.performance_probe = performance_probe
        self.alert_store = alert_store if alert_store is not None else AlertStore()

        self._config = config if config is not None else MonitoringConfig()
        self._config_lock = threading.Lock()
        self._last_snapshot: Optional[HealthSnapshot] = None
        self._scheduler = TickScheduler(self.tick, lambda: self.get_config().check_interval)

    # Lifecycle

    def start(self) -> bool:
        """Start periodic monitoring; the first tick runs right away."""
        started = self._scheduler.start()
        if started:
            logger.info("Starting monitoring service (interval=%ss)", self.get_config().check_interval)
        return started

    def stop(self) -> bool:
        """Stop periodic monitoring."""
        stopped = self._scheduler.stop()
        if stopped:
            logger.info("Stopped monitoring service")
        return stopped

    @property
    def is_monitoring(self) -> bool:
        return self._scheduler.is_running

    # Tick

    def tick(self):
        """Run one evaluate-and-alert cycle. Never raises."""
        config = self.get_config()
        if not config.enabled:
            logger.debug("Monitoring disabled, skipping tick")
            return

        try:
            if config.system_health_checks:
                self._check_system_health(config)
            if config.performance_monitoring:
                self._check_performance(config)
        except Exception:
            logger.exception("Health check failed")
            self._raise_alert(HEALTH_CHECK_FAILED, config)

    def _check_system_health(self, config: MonitoringConfig):
        source = self.metrics_source
        if source is None:
            logger.debug("No metrics source attached, skipping health check")
            return

        try:
            snapshot = source.get_health_snapshot()
        except MetricsSourceUnavailable:
            logger.debug("Metrics source unavailable, skipping health check")
            return

        for candidate in threshold_policy.evaluate(snapshot, config):
            self._raise_alert(candidate, config)

        self._last_snapshot = snapshot

    def _check_performance(self, config: MonitoringConfig):
        probe = self.performance_probe
        if probe is None:
            return
        for candidate in threshold_policy.performance_candidates(probe.check_performance_health()):
            self._raise_alert(candidate, config)

    def _raise_alert(self, candidate: AlertCandidate, config: MonitoringConfig) -> InsertResult:
        """Insert a candidate and notify the sink when it is a new alert."""
        result = self.alert_store.insert(candidate)
        if result.created and config.alerts_enabled:
            self._notify(candidate)
        return result

    def _notify(self, candidate: AlertCandidate):
        sink = self.notification_sink
        if sink is None:
            return
        try:
            sink.display_alert(candidate.severity, candidate.title, candidate.message)
        except Exception:
            logger.exception("Notification sink failed for alert %r", candidate.title)

    # Alerts

    def get_alerts(self) -> List[Alert]:
        return self.alert_store.list()

    def get_active_alerts(self) -> List[Alert]:
        return self.alert_store.list_active()

    def acknowledge_alert(self, alert_id: str) -> bool:
        return self.alert_store.acknowledge(alert_id)

    def resolve_alert(self, alert_id: str) -> bool:
        return self.alert_store.resolve(alert_id)

    def clear_resolved_alerts(self) -> int:
        return self.alert_store.clear_resolved()

    # Config and status

    def get_config(self) -> MonitoringConfig:
        with self._config_lock:
            return self._config

    def update_config(self, partial: Optional[Mapping[str, Any]] = None, **changes) -> MonitoringConfig:
        """Merge changes into the config; invalid changes leave it untouched."""
        updates = dict(partial or {}, **changes)
        with self._config_lock:
            try:
                new_config = self._config.merged(updates)
            except ConfigError:
                logger.warning("Rejected monitoring configuration update: %s", updates)
                raise
            self._config = new_config
        logger.info("Monitoring configuration updated: %s", updates)
        return new_config

    def _latest_performance_metrics(self):
        probe = self.performance_probe
        if probe is None:
            return None
        return probe.get_latest_metrics()

    def get_health_status(self) -> HealthStatus:
        active, total = self.alert_store.counts()
        return HealthStatus(
            is_monitoring=self.is_monitoring,
            last_health_check=self._last_snapshot,
            active_alerts=active,
            total_alerts=total,
            performance_metrics=self._latest_performance_metrics(),
        )
