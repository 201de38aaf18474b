"""Job, queue configuration and statistics types for the in-process queue."""

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable


class JobState(str, Enum):
    """Lifecycle states of a queued job."""

    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"
    DELAYED = "delayed"


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt ceiling and exponential backoff between attempts.

    Attributes:
        max_attempts: Total executions allowed, including the first.
        base_delay_seconds: Delay before the second attempt.
        multiplier: Factor applied to the delay for each further attempt.
    """

    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    multiplier: float = 2.0

    def backoff_seconds(self, attempts_made: int) -> float:
        """Delay before the next attempt, given how many attempts already ran."""
        return self.base_delay_seconds * self.multiplier ** max(attempts_made - 1, 0)


@dataclass(frozen=True)
class QueueConfig:
    """Per-queue runtime configuration.

    Attributes:
        concurrency: Maximum jobs simultaneously ``active``.
        limiter_max: Maximum job starts per rolling window (0 disables).
        limiter_duration_seconds: Rolling window length.
        retry: Default retry policy for jobs in this queue.
        job_timeout_seconds: Per-attempt execution timeout (None disables).
        remove_on_complete: Discard jobs as soon as they complete.
        remove_on_fail: Discard jobs once they terminally fail.
    """

    concurrency: int = 2
    limiter_max: int = 5
    limiter_duration_seconds: float = 60.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    job_timeout_seconds: float | None = 60.0
    remove_on_complete: bool = True
    remove_on_fail: bool = False


@dataclass(frozen=True)
class JobOptions:
    """Per-job overrides merged over the queue defaults. None keeps the default."""

    attempts: int | None = None
    backoff_seconds: float | None = None
    delay_seconds: float = 0.0
    timeout_seconds: float | None = None
    remove_on_complete: bool | None = None
    remove_on_fail: bool | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class Job:
    """A unit of deferred work tracked by the queue runtime.

    Only the runtime changes ``state``; handlers report through
    ``update_progress`` and by returning a result or raising.
    """

    queue_type: str
    data: dict[str, Any]
    retry: RetryPolicy
    timeout_seconds: float | None
    remove_on_complete: bool
    remove_on_fail: bool
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: JobState = JobState.WAITING
    progress: int = 0
    attempts_made: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    processed_at: datetime | None = None
    finished_at: datetime | None = None
    result: Any = None
    error: str | None = None
    # Set by the runtime just before it cancels an attempt that overran its timeout.
    timed_out: bool = False
    _progress_hook: Callable[["Job"], None] | None = field(default=None, repr=False)
    _finished: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def max_attempts(self) -> int:
        return self.retry.max_attempts

    async def update_progress(self, value: int) -> None:
        """Report progress for the current attempt.

        Args:
            value: Percentage 0-100, not lower than the last value reported
                during this attempt.

        Raises:
            ValueError: If the value is out of range or decreases.
        """
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
            raise ValueError(f"progress must be an integer between 0 and 100, got {value!r}")
        if value < self.progress:
            raise ValueError(
                f"progress must not decrease within an attempt ({self.progress} -> {value})"
            )
        self.progress = value
        if self._progress_hook is not None:
            self._progress_hook(self)

    async def wait_finished(self, timeout: float | None = None) -> "Job":
        """Wait until the job completes or terminally fails."""
        await asyncio.wait_for(self._finished.wait(), timeout)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Snapshot for the job status endpoint."""
        return {
            "id": self.id,
            "queue": self.queue_type,
            "state": self.state.value,
            "data": self.data,
            "progress": self.progress,
            "result": self.result,
            "attemptsMade": self.attempts_made,
            "maxAttempts": self.max_attempts,
            "error": self.error,
            "timestamp": {
                "created": self.created_at.isoformat(),
                "processed": self.processed_at.isoformat() if self.processed_at else None,
                "finished": self.finished_at.isoformat() if self.finished_at else None,
            },
        }


@dataclass(frozen=True)
class QueueStats:
    """Per-queue counts by state, computed on demand."""

    waiting: int = 0
    active: int = 0
    completed: int = 0
    failed: int = 0
    delayed: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "waiting": self.waiting,
            "active": self.active,
            "completed": self.completed,
            "failed": self.failed,
            "delayed": self.delayed,
        }


@dataclass(frozen=True)
class LoadSummary:
    """Aggregate load across all queues.

    Attributes:
        active: Jobs currently executing.
        waiting: Jobs ready but not started.
        capacity: Sum of every queue's concurrency.
        load_percentage: active / capacity * 100.
        average_duration_seconds: Mean duration of completed jobs.
        estimated_wait_seconds: waiting / capacity * average duration.
    """

    active: int
    waiting: int
    capacity: int
    load_percentage: float
    average_duration_seconds: float
    estimated_wait_seconds: float
