"""Monitoring configuration data structure."""
import math
import threading
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from ..core.errors import ConfigError


@dataclass(frozen=True)
class MonitoringConfig:
    """Thresholds and switches read by the engine on every tick."""
    enabled: bool = True
    alerts_enabled: bool = True
    performance_monitoring: bool = True
    system_health_checks: bool = True
    disk_space_threshold: float = 85.0  # percent
    memory_threshold: float = 90.0  # percent
    cpu_threshold: float = 95.0  # percent
    temperature_threshold: float = 100.0  # celsius, not read by the thermal tiers
    check_interval: float = 60.0  # seconds

    def __post_init__(self):
        """Reject invalid values."""
        for name in ("enabled", "alerts_enabled", "performance_monitoring", "system_health_checks"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean")

        for name in ("disk_space_threshold", "memory_threshold", "cpu_threshold",
                     "temperature_threshold", "check_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value}")

        for name in ("disk_space_threshold", "memory_threshold", "cpu_threshold"):
            value = getattr(self, name)
            if value <= 0 or value > 100:
                raise ConfigError(f"{name} must be within (0, 100], got {value}")

        if self.temperature_threshold <= 0:
            raise ConfigError(f"temperature_threshold must be positive, got {self.temperature_threshold}")
        if self.check_interval <= 0:
            raise ConfigError(f"check_interval must be positive, got {self.check_interval}")
        if self.check_interval > threading.TIMEOUT_MAX:
            raise ConfigError(f"check_interval must be at most {threading.TIMEOUT_MAX}, got {self.check_interval}")

    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}

    def merged(self, partial: Mapping[str, Any]) -> "MonitoringConfig":
        """Return a copy with the given fields replaced; unspecified fields are kept."""
        unknown = set(partial) - self.field_names()
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        return replace(self, **partial)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
