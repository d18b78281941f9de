"""Exceptions raised by the monitoring engine and its collaborators."""


class HealthMonitorError(Exception):
    """Base class for health monitor errors."""


class ConfigError(HealthMonitorError, ValueError):
    """Invalid monitoring configuration."""


class MetricsSourceError(HealthMonitorError):
    """Transient failure while reading a health snapshot."""


class MetricsSourceUnavailable(MetricsSourceError):
    """Metrics source is not present in this execution context."""
