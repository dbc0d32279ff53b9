# ==============================================
# Scheduler (one-shot deferred tasks)
# ==============================================
#
# PURPOSE:
#   Run a callable once, at an absolute future time, on a timer
#   thread. A pending task keeps the interpreter alive until it
#   fires or is cancelled. Used by Database.schedule_task(); failures of
#   the task are handed to an on_error callback (the Database
#   routes them to its "error" event).
#
# CLASS: ScheduledTask
# --------------------
#   Handle returned to the caller.
#
#   - cancel() -> bool
#       Prevent a pending run. Returns False once the task has
#       started (or already finished / was cancelled before).
#   - wait(timeout=None) -> bool
#       Block until the task has run or been cancelled.
#   - run_at, delay, cancelled, started, done
#
# FUNCTION:
# ---------
# - schedule(task, run_at, on_error=None) -> ScheduledTask
#       Raises UsageError when run_at is in the past.
#
# ==============================================

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Optional

from fastdb.errors import UsageError


logger = logging.getLogger(__name__)


class ScheduledTask:
    """Cancellable handle for one deferred call."""

    def __init__(
        self,
        task: Callable[[], Any],
        run_at: datetime,
        delay: float,
        on_error: Optional[Callable[[Exception], Any]] = None
    ):
        self.task = task
        self.run_at = run_at
        self.delay = delay
        self._on_error = on_error
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._cancelled = False
        self._started = False
        self._timer = threading.Timer(delay, self._run)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def started(self) -> bool:
        return self._started

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    def start(self) -> "ScheduledTask":
        self._timer.start()
        return self

    def cancel(self) -> bool:
        """
        Cancel the pending run.

        Returns:
            True if the run was prevented, False if it already began
        """
        with self._lock:
            if self._started or self._cancelled:
                return False
            self._cancelled = True
            self._timer.cancel()

        self._finished.set()
        logger.debug("Cancelled task scheduled for %s", self.run_at.isoformat())
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._finished.wait(timeout)

    def _run(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._started = True

        logger.debug("Running task scheduled for %s", self.run_at.isoformat())
        try:
            self.task()
        except Exception as e:
            if self._on_error is None:
                logger.exception("Scheduled task failed")
            else:
                try:
                    self._on_error(e)
                except Exception:
                    logger.exception("Error handler of scheduled task failed")
        finally:
            self._finished.set()

    def __repr__(self) -> str:
        if self._cancelled:
            state = "cancelled"
        elif self.done:
            state = "done"
        elif self._started:
            state = "running"
        else:
            state = "pending"
        return f"<ScheduledTask run_at={self.run_at.isoformat()} {state}>"


def schedule(
    task: Callable[[], Any],
    run_at: datetime,
    on_error: Optional[Callable[[Exception], Any]] = None
) -> ScheduledTask:
    """
    Schedule task to run once at run_at.

    Args:
        task: Zero-argument callable
        run_at: Absolute time (naive = local time, aware = its own zone)
        on_error: Receives any exception raised by task

    Returns:
        A started ScheduledTask handle

    Raises:
        UsageError: If task is not callable or run_at is in the past
    """
    if not callable(task):
        raise UsageError("Scheduled task must be callable")
    if not isinstance(run_at, datetime):
        raise UsageError(f"Scheduled time must be a datetime, got {type(run_at).__name__}")

    now = datetime.now(run_at.tzinfo) if run_at.tzinfo else datetime.now()
    delay = (run_at - now).total_seconds()
    if delay < 0:
        raise UsageError("Scheduled time must be in the future.")

    logger.debug("Scheduling task in %.3fs (at %s)", delay, run_at.isoformat())
    return ScheduledTask(task, run_at, delay, on_error).start()
