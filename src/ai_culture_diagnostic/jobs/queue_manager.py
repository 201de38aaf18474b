"""In-process asyncio job queues with concurrency, rate limiting and retries.

One ``JobQueueManager`` owns every named queue of the process. It is built
explicitly (in the application lifespan) and injected into its consumers.

Per queue the runtime guarantees:

- at most ``concurrency`` jobs are ``active`` at any instant;
- at most ``limiter_max`` jobs start per rolling ``limiter_duration_seconds``
  window; ready jobs held back by the limiter are reported as ``delayed``;
- a failing attempt is retried with exponential backoff until the job's
  attempt ceiling is reached, unless the error is marked non-retryable;
- each attempt runs under the job's execution timeout; an attempt that
  overruns it is flagged ``timed_out`` and then cancelled, so its handler
  can report the failure before unwinding;
- completed jobs are discarded when ``remove_on_complete`` is set, failed
  jobs are retained unless ``remove_on_fail`` is set.

No ordering is guaranteed between distinct jobs. Job state lives in memory
only and is lost on restart.
"""

import asyncio
import time
from collections import deque
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from ai_culture_diagnostic.errors import (
    JobNotFoundError,
    JobTimeoutError,
    TerminalJobFailure,
    UnknownQueueError,
)
from ai_culture_diagnostic.jobs.models import (
    Job,
    JobOptions,
    JobState,
    LoadSummary,
    QueueConfig,
    QueueStats,
    RetryPolicy,
)
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

JobHandler = Callable[[Job], Awaitable[Any]]
JobListener = Callable[[Job], None]

QUEUE_EVENTS: tuple[str, ...] = ("active", "progress", "completed", "retrying", "failed")


class RateLimiter:
    """Rolling-window limiter: at most ``max_jobs`` starts per ``window_seconds``.

    Args:
        max_jobs: Starts allowed per window. Zero or less disables limiting.
        window_seconds: Window length in seconds.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        max_jobs: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_jobs = max_jobs
        self._window = window_seconds
        self._clock = clock
        self._starts: deque[float] = deque()

    def _evict(self, now: float) -> None:
        while self._starts and now - self._starts[0] >= self._window:
            self._starts.popleft()

    def time_until_available(self) -> float:
        """Seconds until another start is admitted (0.0 when admitted now)."""
        if self._max_jobs <= 0:
            return 0.0
        now = self._clock()
        self._evict(now)
        if len(self._starts) < self._max_jobs:
            return 0.0
        return max(self._starts[0] + self._window - now, 0.0)

    def record(self) -> None:
        """Count one job start against the current window."""
        if self._max_jobs > 0:
            self._starts.append(self._clock())


class _Queue:
    """Runtime state of one named queue."""

    def __init__(self, name: str, config: QueueConfig) -> None:
        self.name = name
        self.config = config
        self.handler: JobHandler | None = None
        self.jobs: dict[str, Job] = {}
        self.ready: deque[Job] = deque()
        self.active: set[str] = set()
        self.tasks: set[asyncio.Task[None]] = set()
        self.timers: dict[str, asyncio.TimerHandle] = {}
        self.limiter = RateLimiter(config.limiter_max, config.limiter_duration_seconds)
        self.limiter_timer: asyncio.TimerHandle | None = None
        self.completed_durations = 0.0
        self.completed_runs = 0

    def stats(self) -> QueueStats:
        counts = {state: 0 for state in JobState}
        for job in self.jobs.values():
            counts[job.state] += 1
        return QueueStats(
            waiting=counts[JobState.WAITING],
            active=counts[JobState.ACTIVE],
            completed=counts[JobState.COMPLETED],
            failed=counts[JobState.FAILED],
            delayed=counts[JobState.DELAYED],
        )


class JobQueueManager:
    """Owns the named job queues of the process.

    Args:
        default_config: Configuration for queues created without one.
    """

    def __init__(self, default_config: QueueConfig | None = None) -> None:
        self._default_config = default_config or QueueConfig()
        self._queues: dict[str, _Queue] = {}
        self._listeners: dict[str, list[JobListener]] = {event: [] for event in QUEUE_EVENTS}
        self._closed = False

    # ------------------------------------------------------------------
    # Queue setup
    # ------------------------------------------------------------------

    def create_queue(self, queue_type: str, config: QueueConfig | None = None) -> None:
        """Declare a named queue.

        Args:
            queue_type: Queue name, e.g. ``pdf-generation``.
            config: Queue configuration (manager default if omitted).

        Raises:
            ValueError: If the queue already exists.
        """
        if queue_type in self._queues:
            raise ValueError(f"Queue {queue_type!r} already exists")
        queue = _Queue(queue_type, config or self._default_config)
        self._queues[queue_type] = queue
        logger.info(
            "Queue created",
            queue=queue_type,
            concurrency=queue.config.concurrency,
            limiter_max=queue.config.limiter_max,
            limiter_duration_seconds=queue.config.limiter_duration_seconds,
            max_attempts=queue.config.retry.max_attempts,
        )

    def register_processor(self, queue_type: str, handler: JobHandler) -> None:
        """Bind the single handler of a queue and start dispatching its jobs.

        Raises:
            UnknownQueueError: If the queue was never created.
            ValueError: If the queue already has a handler.
        """
        queue = self._get_queue(queue_type)
        if queue.handler is not None:
            raise ValueError(f"Queue {queue_type!r} already has a processor")
        queue.handler = handler
        logger.info("Processor registered", queue=queue_type)
        self._pump(queue)

    def add_listener(self, event: str, listener: JobListener) -> None:
        """Subscribe to a queue event (active, progress, completed, retrying, failed)."""
        if event not in self._listeners:
            raise ValueError(f"Unknown queue event {event!r}; expected one of {QUEUE_EVENTS}")
        self._listeners[event].append(listener)

    @property
    def queue_types(self) -> tuple[str, ...]:
        return tuple(self._queues)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    async def enqueue(
        self,
        queue_type: str,
        payload: dict[str, Any],
        options: JobOptions | None = None,
    ) -> Job:
        """Add a job to a queue and return it without waiting for execution.

        Caller options are merged over the queue defaults. A job with a
        positive ``delay_seconds`` starts ``delayed`` and becomes ``waiting``
        once the delay elapses.

        Args:
            queue_type: Target queue name.
            payload: Job data handed to the processor.
            options: Per-job overrides.

        Returns:
            The new job.

        Raises:
            UnknownQueueError: If the queue was never created.
            RuntimeError: If the manager is closed.
        """
        queue = self._get_queue(queue_type)
        if self._closed:
            raise RuntimeError("JobQueueManager is closed")

        options = options or JobOptions()
        config = queue.config
        retry = config.retry
        if options.attempts is not None:
            retry = replace(retry, max_attempts=max(options.attempts, 1))
        if options.backoff_seconds is not None:
            retry = replace(retry, base_delay_seconds=options.backoff_seconds)

        job = Job(
            queue_type=queue_type,
            data=payload,
            retry=retry,
            timeout_seconds=(
                options.timeout_seconds
                if options.timeout_seconds is not None
                else config.job_timeout_seconds
            ),
            remove_on_complete=(
                config.remove_on_complete
                if options.remove_on_complete is None
                else options.remove_on_complete
            ),
            remove_on_fail=(
                config.remove_on_fail if options.remove_on_fail is None else options.remove_on_fail
            ),
        )
        job._progress_hook = self._on_progress
        queue.jobs[job.id] = job

        if options.delay_seconds > 0:
            job.state = JobState.DELAYED
            self._schedule(queue, job, options.delay_seconds)
        else:
            queue.ready.append(job)
            self._pump(queue)

        logger.info(
            "Job enqueued",
            queue=queue_type,
            job_id=job.id,
            state=job.state.value,
            delay_seconds=options.delay_seconds,
        )
        return job

    def get_job(self, queue_type: str, job_id: str) -> Job:
        """Return a retained job.

        Raises:
            UnknownQueueError: If the queue was never created.
            JobNotFoundError: If no such job is retained.
        """
        job = self._get_queue(queue_type).jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(queue_type, job_id)
        return job

    def drain_waiting(self, queue_type: str) -> int:
        """Discard every ``waiting`` job of a queue; active jobs are untouched.

        Returns:
            Number of jobs discarded.
        """
        queue = self._get_queue(queue_type)
        drained = [job for job in queue.ready if job.state is JobState.WAITING]
        for job in drained:
            queue.ready.remove(job)
            del queue.jobs[job.id]
        logger.info("Waiting jobs drained", queue=queue_type, count=len(drained))
        return len(drained)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_stats(self) -> dict[str, QueueStats]:
        """Current per-state counts of every queue."""
        return {name: queue.stats() for name, queue in self._queues.items()}

    def get_load_summary(self) -> LoadSummary:
        """Aggregate load percentage and estimated wait across all queues."""
        capacity = sum(queue.config.concurrency for queue in self._queues.values())
        active = sum(len(queue.active) for queue in self._queues.values())
        waiting = sum(queue.stats().waiting for queue in self._queues.values())
        runs = sum(queue.completed_runs for queue in self._queues.values())
        total_duration = sum(queue.completed_durations for queue in self._queues.values())
        average = total_duration / runs if runs else 0.0

        if capacity:
            load = round(active / capacity * 100, 2)
            estimated_wait = round(waiting / capacity * average, 2)
        else:
            load = 0.0
            estimated_wait = 0.0

        return LoadSummary(
            active=active,
            waiting=waiting,
            capacity=capacity,
            load_percentage=load,
            average_duration_seconds=round(average, 3),
            estimated_wait_seconds=estimated_wait,
        )

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Stop dispatching, cancel timers and running attempts."""
        if self._closed:
            return
        self._closed = True
        tasks: list[asyncio.Task[None]] = []
        for queue in self._queues.values():
            for timer in queue.timers.values():
                timer.cancel()
            queue.timers.clear()
            if queue.limiter_timer is not None:
                queue.limiter_timer.cancel()
                queue.limiter_timer = None
            tasks.extend(queue.tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Job queues closed", queues=list(self._queues))

    # ------------------------------------------------------------------
    # Runtime internals
    # ------------------------------------------------------------------

    def _get_queue(self, queue_type: str) -> _Queue:
        queue = self._queues.get(queue_type)
        if queue is None:
            raise UnknownQueueError(queue_type)
        return queue

    def _emit(self, event: str, job: Job) -> None:
        for listener in self._listeners[event]:
            try:
                listener(job)
            except Exception:
                logger.exception("Queue listener failed", event=event, job_id=job.id)

    def _on_progress(self, job: Job) -> None:
        logger.debug("Job progress", queue=job.queue_type, job_id=job.id, progress=job.progress)
        self._emit("progress", job)

    def _schedule(self, queue: _Queue, job: Job, delay: float) -> None:
        loop = asyncio.get_running_loop()
        queue.timers[job.id] = loop.call_later(delay, self._promote, queue, job)

    def _promote(self, queue: _Queue, job: Job) -> None:
        queue.timers.pop(job.id, None)
        if self._closed or queue.jobs.get(job.id) is not job:
            return
        job.state = JobState.WAITING
        queue.ready.append(job)
        self._pump(queue)

    def _on_limiter_window(self, queue: _Queue) -> None:
        queue.limiter_timer = None
        for job in queue.ready:
            job.state = JobState.WAITING
        self._pump(queue)

    def _pump(self, queue: _Queue) -> None:
        """Start ready jobs while concurrency and the rate limiter allow."""
        if self._closed or queue.handler is None:
            return
        while queue.ready and len(queue.active) < queue.config.concurrency:
            wait = queue.limiter.time_until_available()
            if wait > 0:
                for job in queue.ready:
                    job.state = JobState.DELAYED
                if queue.limiter_timer is None:
                    loop = asyncio.get_running_loop()
                    queue.limiter_timer = loop.call_later(wait, self._on_limiter_window, queue)
                return

            job = queue.ready.popleft()
            queue.limiter.record()
            queue.active.add(job.id)
            job.state = JobState.ACTIVE
            job.progress = 0
            job.timed_out = False
            job.processed_at = datetime.now(timezone.utc)
            task = asyncio.create_task(self._run_attempt(queue, job), name=f"job-{job.id}")
            queue.tasks.add(task)
            task.add_done_callback(queue.tasks.discard)

    async def _run_attempt(self, queue: _Queue, job: Job) -> None:
        assert queue.handler is not None
        attempt = job.attempts_made + 1
        logger.info("Job active", queue=queue.name, job_id=job.id, attempt=attempt)
        self._emit("active", job)
        started = time.monotonic()
        deadline = None
        if job.timeout_seconds is not None:
            deadline = asyncio.get_running_loop().call_later(
                job.timeout_seconds, self._expire_attempt, job, asyncio.current_task()
            )
        try:
            result = await queue.handler(job)
        except asyncio.CancelledError:
            if not job.timed_out:
                raise
            # Absorb the cancellation requested by _expire_attempt.
            current = asyncio.current_task()
            if current is not None:
                current.uncancel()
            self._handle_failure(queue, job, JobTimeoutError(job.timeout_seconds or 0.0))
        except Exception as exc:
            error: BaseException = exc
            if job.timed_out:
                error = JobTimeoutError(job.timeout_seconds or 0.0)
            self._handle_failure(queue, job, error)
        else:
            if job.timed_out:
                self._handle_failure(queue, job, JobTimeoutError(job.timeout_seconds or 0.0))
            else:
                self._handle_success(queue, job, result, time.monotonic() - started)
        finally:
            if deadline is not None:
                deadline.cancel()
            queue.active.discard(job.id)
            self._pump(queue)

    def _expire_attempt(self, job: Job, task: "asyncio.Task[Any] | None") -> None:
        """Mark the running attempt as timed out, then cancel it."""
        if task is None or task.done():
            return
        logger.warning(
            "Job attempt timed out",
            queue=job.queue_type,
            job_id=job.id,
            timeout_seconds=job.timeout_seconds,
        )
        job.timed_out = True
        task.cancel()

    def _handle_success(self, queue: _Queue, job: Job, result: Any, duration: float) -> None:
        job.attempts_made += 1
        job.result = result
        job.error = None
        job.state = JobState.COMPLETED
        job.finished_at = datetime.now(timezone.utc)
        queue.completed_runs += 1
        queue.completed_durations += duration
        if job.remove_on_complete:
            queue.jobs.pop(job.id, None)
        logger.info(
            "Job completed",
            queue=queue.name,
            job_id=job.id,
            attempts=job.attempts_made,
            duration_seconds=round(duration, 3),
        )
        self._emit("completed", job)
        job._finished.set()

    def _handle_failure(self, queue: _Queue, job: Job, error: BaseException) -> None:
        job.attempts_made += 1
        job.error = str(error) or type(error).__name__
        retryable = getattr(error, "retryable", True)

        if retryable and job.attempts_made < job.max_attempts and not self._closed:
            delay = job.retry.backoff_seconds(job.attempts_made)
            job.state = JobState.DELAYED
            logger.warning(
                "Job attempt failed, retrying",
                queue=queue.name,
                job_id=job.id,
                attempt=job.attempts_made,
                max_attempts=job.max_attempts,
                backoff_seconds=delay,
                error=job.error,
            )
            self._emit("retrying", job)
            self._schedule(queue, job, delay)
            return

        failure = TerminalJobFailure(job.id, job.attempts_made, job.error)
        job.state = JobState.FAILED
        job.finished_at = datetime.now(timezone.utc)
        if job.remove_on_fail:
            queue.jobs.pop(job.id, None)
        logger.error(
            "Job failed",
            queue=queue.name,
            job_id=job.id,
            attempts=failure.attempts,
            retryable=retryable,
            error=failure.last_error,
        )
        self._emit("failed", job)
        job._finished.set()


def queue_config_from_settings(settings: Any) -> QueueConfig:
    """Build the default queue configuration from service settings."""
    return QueueConfig(
        concurrency=settings.queue_concurrency,
        limiter_max=settings.queue_limiter_max,
        limiter_duration_seconds=settings.queue_limiter_duration_seconds,
        retry=RetryPolicy(
            max_attempts=settings.queue_max_attempts,
            base_delay_seconds=settings.queue_backoff_base_seconds,
            multiplier=settings.queue_backoff_multiplier,
        ),
        job_timeout_seconds=settings.queue_job_timeout_seconds,
        remove_on_complete=settings.queue_remove_on_complete,
        remove_on_fail=settings.queue_remove_on_fail,
    )
