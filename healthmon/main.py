"""Main entry point for the healthmon system health monitor."""
import argparse
import logging
import sys
import time

from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler

from .collectors.process_probe import ProcessPerformanceProbe
from .collectors.system_collector import SystemCollector
from .config.config_manager import DEFAULT_CONFIG_PATH, ConfigManager
from .core.engine import MonitoringEngine
from .core.errors import ConfigError
from .ui.console_sink import ConsoleNotificationSink
from .ui.display import render

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="System health monitor")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--interval", type=float, default=None,
                        help="Seconds between health checks (overrides config)")
    parser.add_argument("--once", action="store_true",
                        help="Run a single health check, print the result and exit")
    parser.add_argument("--refresh-rate", type=float, default=1.0,
                        help="Seconds between screen redraws")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        choices=LOG_LEVELS)
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the application."""
    args = parse_args(argv)
    console = Console(no_color=args.no_color)

    logging.basicConfig(
        level=args.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True, no_color=args.no_color))],
    )

    try:
        config = ConfigManager.load_config(args.config)
        if args.interval is not None:
            config = config.merged({"check_interval": args.interval})
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    engine = MonitoringEngine(
        metrics_source=SystemCollector(),
        notification_sink=ConsoleNotificationSink(Console(stderr=True, no_color=args.no_color)),
        config=config,
        performance_probe=ProcessPerformanceProbe(),
    )

    if args.once:
        engine.tick()
        console.print(render(engine.get_health_status(), engine.get_alerts()))
        return 0

    engine.start()
    try:
        with Live(render(engine.get_health_status(), engine.get_alerts()),
                  console=console, refresh_per_second=4) as live:
            while True:
                time.sleep(args.refresh_rate)
                live.update(render(engine.get_health_status(), engine.get_alerts()))
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
