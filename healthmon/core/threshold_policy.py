"""Threshold checks that turn a health snapshot into alert candidates."""
from typing import Iterable, List, Optional

from ..collectors.health_models import HealthSnapshot
from ..config.monitoring_config import MonitoringConfig
from .alerts import AlertCandidate, AlertSeverity

CPU_SOURCE = "cpu-monitor"
MEMORY_SOURCE = "memory-monitor"
TEMPERATURE_SOURCE = "temperature-monitor"
PERFORMANCE_SOURCE = "performance-monitor"

# Fixed thermal tiers (celsius): hardware throttle points, not configurable
CPU_TEMP_WARNING = 95.0
CPU_TEMP_CRITICAL = 100.0
GPU_TEMP_WARNING = 83.0
GPU_TEMP_CRITICAL = 90.0


def evaluate(snapshot: HealthSnapshot, config: MonitoringConfig) -> List[AlertCandidate]:
    """Check a snapshot against thresholds and return candidates in check order."""
    candidates = []

    cpu = _check_cpu(snapshot.cpu_usage, config.cpu_threshold)
    if cpu:
        candidates.append(cpu)

    memory = _check_memory(snapshot, config.memory_threshold)
    if memory:
        candidates.append(memory)

    temperatures = snapshot.temperatures
    if temperatures is not None:
        cpu_temp = _check_cpu_temperature(temperatures.cpu)
        if cpu_temp:
            candidates.append(cpu_temp)

        gpu_temp = _check_gpu_temperature(temperatures.gpu)
        if gpu_temp:
            candidates.append(gpu_temp)

    return candidates


def performance_candidates(warnings: Iterable[str]) -> List[AlertCandidate]:
    """Wrap performance probe warnings as info candidates."""
    return [
        AlertCandidate(
            severity=AlertSeverity.INFO,
            title="Performance Issue Detected",
            message=warning,
            source=PERFORMANCE_SOURCE,
            auto_resolve=False,
        )
        for warning in warnings
    ]


def _check_cpu(cpu_usage: float, threshold: float) -> Optional[AlertCandidate]:
    if cpu_usage <= threshold:
        return None
    return AlertCandidate(
        severity=AlertSeverity.WARNING,
        title="High CPU Usage",
        message=f"CPU usage is at {cpu_usage:.1f}%. This may impact system performance.",
        source=CPU_SOURCE,
        auto_resolve=True,
    )


def _check_memory(snapshot: HealthSnapshot, threshold: float) -> Optional[AlertCandidate]:
    used_percent = snapshot.memory_percent
    if used_percent is None or used_percent <= threshold:
        return None
    return AlertCandidate(
        severity=AlertSeverity.WARNING,
        title="High Memory Usage",
        message=f"Memory usage is at {used_percent:.1f}%. Consider freeing up memory.",
        source=MEMORY_SOURCE,
        auto_resolve=True,
    )


def _check_cpu_temperature(temp: Optional[float]) -> Optional[AlertCandidate]:
    if temp is None:
        return None

    # Tiers are checked high to low so only one fires
    if temp >= CPU_TEMP_CRITICAL:
        return AlertCandidate(
            severity=AlertSeverity.CRITICAL,
            title="Critical CPU Temperature",
            message=(
                f"CPU temperature is {temp:.1f}°C. System is at thermal limit and may "
                "throttle performance. Check cooling system immediately."
            ),
            source=TEMPERATURE_SOURCE,
            auto_resolve=True,
        )
    if temp >= CPU_TEMP_WARNING:
        return AlertCandidate(
            severity=AlertSeverity.WARNING,
            title="High CPU Temperature",
            message=(
                f"CPU temperature is {temp:.1f}°C. Approaching thermal limit. "
                "Monitor closely and ensure adequate cooling."
            ),
            source=TEMPERATURE_SOURCE,
            auto_resolve=True,
        )
    return None


def _check_gpu_temperature(temp: Optional[float]) -> Optional[AlertCandidate]:
    if temp is None:
        return None

    if temp >= GPU_TEMP_CRITICAL:
        return AlertCandidate(
            severity=AlertSeverity.CRITICAL,
            title="Critical GPU Temperature",
            message=f"GPU temperature is {temp:.1f}°C. At or above thermal limit. Performance may be throttled.",
            source=TEMPERATURE_SOURCE,
            auto_resolve=True,
        )
    if temp >= GPU_TEMP_WARNING:
        return AlertCandidate(
            severity=AlertSeverity.WARNING,
            title="High GPU Temperature",
            message=f"GPU temperature is {temp:.1f}°C. Approaching thermal throttling threshold.",
            source=TEMPERATURE_SOURCE,
            auto_resolve=True,
        )
    return None
