"""System health monitoring and alerting engine."""
from .core.engine import MonitoringEngine, HealthStatus
from .core.alerts import Alert, AlertCandidate, AlertSeverity
from .core.alert_store import AlertStore, InsertResult
from .collectors.health_models import HealthSnapshot, Temperatures
from .config.monitoring_config import MonitoringConfig

__all__ = [
    "MonitoringEngine",
    "HealthStatus",
    "Alert",
    "AlertCandidate",
    "AlertSeverity",
    "AlertStore",
    "InsertResult",
    "HealthSnapshot",
    "Temperatures",
    "MonitoringConfig",
]
