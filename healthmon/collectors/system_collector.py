"""psutil-backed metrics source for CPU, memory, and temperature."""
from datetime import datetime
from typing import Dict, Optional, Sequence

import psutil

from ..core.errors import MetricsSourceError
from .health_models import HealthSnapshot, Temperatures

# Sensor chip names in preference order
CPU_SENSORS = ("coretemp", "k10temp", "zenpower", "cpu_thermal", "acpitz")
GPU_SENSORS = ("amdgpu", "nouveau", "radeon")


class SystemCollector:
    """Reads a health snapshot from the local machine."""

    def __init__(self, cpu_sample_interval: float = 0.1):
        """Initialize the system collector."""
        self.cpu_sample_interval = cpu_sample_interval

    def get_health_snapshot(self) -> HealthSnapshot:
        """Collect current system metrics."""
        try:
            memory = psutil.virtual_memory()
            return HealthSnapshot(
                cpu_usage=psutil.cpu_percent(interval=self.cpu_sample_interval),
                total_memory=memory.total,
                used_memory=memory.used,
                temperatures=self._get_temperatures(),
                timestamp=datetime.now(),
            )
        except (psutil.Error, OSError) as e:
            raise MetricsSourceError(f"Failed to read system metrics: {e}") from e

    def _get_temperatures(self) -> Temperatures:
        """Get CPU and GPU temperatures from available sensors."""
        sensors_temperatures = getattr(psutil, "sensors_temperatures", None)
        if sensors_temperatures is None:
            # Not supported on this platform
            return Temperatures()

        try:
            temps = sensors_temperatures()
        except (psutil.Error, OSError):
            # Sensor failures only lose the temperature readings
            return Temperatures()
        return Temperatures(
            cpu=_first_reading(temps, CPU_SENSORS),
            gpu=_first_reading(temps, GPU_SENSORS),
        )


def _first_reading(temps: Dict[str, list], names: Sequence[str]) -> Optional[float]:
    for name in names:
        entries = temps.get(name)
        if entries:
            return float(entries[0].current)
    return None
