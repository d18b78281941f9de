"""Periodic tick scheduler running on a dedicated thread."""
import logging
import math
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Longest wait accepted by threading primitives on this platform
MAX_INTERVAL = threading.TIMEOUT_MAX


class TickScheduler:
    """Runs a tick immediately on start and then every interval until stopped.

    Ticks never overlap: all ticks of one run share a thread, and a new run
    waits for the previous run's thread to exit before its first tick.
    A tick that outlasts the interval delays the next one instead.
    """

    def __init__(self, tick: Callable[[], None], interval: Callable[[], float],
                 join_timeout: Optional[float] = 5.0, fallback_interval: float = 60.0):
        """Initialize the scheduler.

        ``interval`` is read before every wait so config changes apply after
        the current tick. ``fallback_interval`` is used when it returns an
        unusable value or raises.
        """
        self._tick = tick
        self._interval = interval
        self._join_timeout = join_timeout
        self._fallback_interval = fallback_interval
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stopping: Optional[threading.Event] = None
        self._previous: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None

    def start(self) -> bool:
        """Start ticking. Returns False if already running."""
        with self._lock:
            if self._thread is not None:
                return False
            previous = self._previous
            self._previous = None
            stopping = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stopping, previous),
                name="healthmon-scheduler",
                daemon=True,
            )
            self._stopping = stopping
            self._thread = thread
            thread.start()
        logger.info("Scheduler started")
        return True

    def stop(self) -> bool:
        """Stop scheduling ticks. Returns False if already stopped.

        An in-flight tick is allowed to finish; if it outlasts the join
        timeout, the next ``start()`` waits for it before ticking.
        """
        with self._lock:
            if self._thread is None:
                return False
            thread = self._thread
            self._stopping.set()
            self._thread = None
            self._stopping = None
            self._previous = thread

        if thread is not threading.current_thread():
            thread.join(timeout=self._join_timeout)
        logger.info("Scheduler stopped")
        return True

    def _run(self, stopping: threading.Event, previous: Optional[threading.Thread]):
        """Main loop: one tick now, then one per interval."""
        try:
            if previous is not None:
                previous.join()
            if not stopping.is_set():
                self._safe_tick()
            while not self._wait(stopping):
                self._safe_tick()
        finally:
            with self._lock:
                if self._thread is threading.current_thread():
                    logger.error("Scheduler thread exited unexpectedly")
                    self._thread = None
                    self._stopping = None

    def _wait(self, stopping: threading.Event) -> bool:
        """Sleep for the next interval; True once a stop is requested."""
        try:
            return stopping.wait(self._next_interval())
        except (OverflowError, ValueError):
            logger.exception("Invalid scheduler wait, using %ss", self._fallback_interval)
            return stopping.wait(self._fallback_interval)

    def _next_interval(self) -> float:
        try:
            interval = float(self._interval())
        except Exception:
            logger.exception("Cannot read scheduler interval, using %ss", self._fallback_interval)
            return self._fallback_interval

        if math.isnan(interval) or interval <= 0:
            logger.error("Invalid scheduler interval %r, using %ss", interval, self._fallback_interval)
            return self._fallback_interval
        return min(interval, MAX_INTERVAL)

    def _safe_tick(self):
        try:
            self._tick()
        except Exception:
            # A tick must never kill the loop
            logger.exception("Unhandled error in scheduled tick")
