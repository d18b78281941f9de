"""Performance probe for the monitoring process itself."""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import psutil

from ..core.errors import MetricsSourceError


@dataclass
class ProcessMetrics:
    """Resource usage of the monitoring process."""
    rss_bytes: int
    cpu_percent: float
    timestamp: datetime


class ProcessPerformanceProbe:
    """Warns when this process uses more memory or CPU than its budget."""

    def __init__(self, memory_limit_bytes: int = 512 * 1024 * 1024,
                 memory_warn_ratio: float = 0.8, cpu_limit_percent: float = 80.0,
                 process: Optional[psutil.Process] = None):
        """Initialize the probe."""
        self.memory_limit_bytes = memory_limit_bytes
        self.memory_warn_ratio = memory_warn_ratio
        self.cpu_limit_percent = cpu_limit_percent
        self.process = process or psutil.Process()
        self._latest: Optional[ProcessMetrics] = None

    def check_performance_health(self) -> List[str]:
        """Sample the process and return warning strings."""
        try:
            with self.process.oneshot():
                rss = self.process.memory_info().rss
                # First call after creation always reports 0.0
                cpu = self.process.cpu_percent(interval=None)
        except (psutil.Error, OSError) as e:
            raise MetricsSourceError(f"Failed to read process metrics: {e}") from e

        self._latest = ProcessMetrics(rss_bytes=rss, cpu_percent=cpu, timestamp=datetime.now())

        warnings = []
        if rss > self.memory_limit_bytes * self.memory_warn_ratio:
            warnings.append(f"High memory usage: {rss / self.memory_limit_bytes * 100:.1f}%")
        if cpu > self.cpu_limit_percent:
            warnings.append(f"High CPU usage: {cpu:.1f}%")
        return warnings

    def get_latest_metrics(self) -> Optional[ProcessMetrics]:
        """Most recent sample, or None before the first check."""
        return self._latest
