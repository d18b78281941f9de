"""Rich console notification sink."""
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..core.alerts import AlertSeverity

# Severity -> (notification kind, style)
NOTIFICATION_STYLES = {
    AlertSeverity.CRITICAL: ("error", "red"),
    AlertSeverity.WARNING: ("warning", "yellow"),
    AlertSeverity.INFO: ("info", "blue"),
}


class ConsoleNotificationSink:
    """Prints each new alert as a Rich panel."""

    def __init__(self, console: Console = None):
        """Initialize the sink."""
        self.console = console or Console(stderr=True)

    def display_alert(self, severity: AlertSeverity, title: str, message: str) -> None:
        kind, style = NOTIFICATION_STYLES.get(severity, ("info", "white"))
        self.console.print(
            Panel(
                Text(message),
                title=f"[{style}][{kind.upper()}][/{style}] {title}",
                border_style=style,
            )
        )
