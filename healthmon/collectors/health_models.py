"""Health snapshot data models for metrics sources."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Temperatures:
    """Per-device temperature readings in degrees Celsius."""
    cpu: Optional[float] = None
    gpu: Optional[float] = None


@dataclass
class HealthSnapshot:
    """One consistent reading of system health."""
    cpu_usage: float
    total_memory: int  # bytes
    used_memory: int  # bytes
    temperatures: Optional[Temperatures] = field(default_factory=Temperatures)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def memory_percent(self) -> Optional[float]:
        """Used memory as a percentage of total, None when total is unknown."""
        if not self.total_memory:
            return None
        return self.used_memory / self.total_memory * 100
