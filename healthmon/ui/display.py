"""Status and alert rendering using Rich."""
from typing import List

from rich.console import Group
from rich.panel import Panel
from rich.table import Table

from ..collectors.process_probe import ProcessMetrics
from ..core.alerts import Alert, sort_by_priority
from ..core.engine import HealthStatus
from .console_sink import NOTIFICATION_STYLES


def make_progress_bar(value: float, width: int = 15) -> str:
    filled = max(0, min(width, int(value * width / 100)))
    bar = "█" * filled + "░" * (width - filled)
    return f"[{bar}] {value:5.1f}%"


def create_status_panel(status: HealthStatus) -> Panel:
    """Create the system overview panel."""
    snapshot = status.last_health_check
    state = "[green]running[/green]" if status.is_monitoring else "[red]stopped[/red]"
    lines = [f"Monitoring: {state}   Alerts: {status.active_alerts} active / {status.total_alerts} total"]
    process = status.performance_metrics
    if isinstance(process, ProcessMetrics):
        lines.append(f"Monitor process: RSS {process.rss_bytes / (1024 * 1024):.1f} MB  CPU {process.cpu_percent:.1f}%")

    if snapshot is None:
        lines.append("Waiting for first health check...")
        return Panel("\n".join(lines), title="System Health", border_style="blue")

    lines.append(f"CPU:    {make_progress_bar(snapshot.cpu_usage)}")
    memory_percent = snapshot.memory_percent
    if memory_percent is not None:
        lines.append(f"Memory: {make_progress_bar(memory_percent)}")

    temps = snapshot.temperatures
    if temps is not None and temps.cpu is not None:
        lines.append(f"CPU temperature: {temps.cpu:.1f}°C")
    if temps is not None and temps.gpu is not None:
        lines.append(f"GPU temperature: {temps.gpu:.1f}°C")

    return Panel(
        "\n".join(lines),
        title=f"System Health - {snapshot.timestamp.strftime('%H:%M:%S')}",
        border_style="blue",
    )


def create_alerts_table(alerts: List[Alert]) -> Table:
    """Create a table of alerts, most severe first."""
    table = Table(title=f"System Alerts ({len(alerts)} total)", expand=True)
    table.add_column("Time", no_wrap=True)
    table.add_column("Level", no_wrap=True)
    table.add_column("Title")
    table.add_column("Source")
    table.add_column("State", no_wrap=True)
    table.add_column("Message")

    for alert in sort_by_priority(alerts):
        _, style = NOTIFICATION_STYLES.get(alert.severity, ("info", "white"))
        if alert.resolved_at is not None:
            state = "resolved"
        elif alert.acknowledged:
            state = "acknowledged"
        else:
            state = "open"
        table.add_row(
            alert.timestamp.strftime("%H:%M:%S"),
            f"[{style}]{alert.severity.value.upper()}[/{style}]",
            alert.title,
            alert.source,
            state,
            alert.message,
        )
    return table


def render(status: HealthStatus, alerts: List[Alert]) -> Group:
    """Status panel followed by the alert table."""
    return Group(create_status_panel(status), create_alerts_table(alerts))
