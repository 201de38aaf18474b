"""Error taxonomy for the diagnostic service.

Every domain error carries a machine-readable ``code`` (surfaced in HTTP
error bodies) and a ``retryable`` flag consulted by the job queue runtime:
a handler failure whose error is not retryable fails the job immediately
instead of consuming the remaining attempts.
"""


class DiagnosticError(Exception):
    """Base class for all domain errors raised by the service."""

    code: str = "diagnostic_error"
    retryable: bool = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SubmissionValidationError(DiagnosticError):
    """Malformed or missing submission or chart data."""

    code = "validation_error"
    retryable = False


class InvalidInputError(DiagnosticError, ValueError):
    """A score vector does not have exactly 10 values in the 1-4 range."""

    code = "invalid_input"
    retryable = False


class UnknownQueueError(DiagnosticError):
    """An operation targeted a queue type that was never registered."""

    code = "unknown_queue"
    retryable = False

    def __init__(self, queue_type: str) -> None:
        super().__init__(f"Queue {queue_type!r} is not registered")
        self.queue_type = queue_type


class JobNotFoundError(DiagnosticError):
    """The requested job does not exist (or was already discarded)."""

    code = "job_not_found"
    retryable = False

    def __init__(self, queue_type: str, job_id: str) -> None:
        super().__init__(f"Job {job_id!r} not found in queue {queue_type!r}")
        self.queue_type = queue_type
        self.job_id = job_id


class TransientRenderError(DiagnosticError):
    """The rendering collaborator failed; the job may succeed on retry."""

    code = "render_error"


class JobTimeoutError(DiagnosticError):
    """A job attempt exceeded its execution timeout."""

    code = "job_timeout"

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Job exceeded its {timeout_seconds}s execution timeout")
        self.timeout_seconds = timeout_seconds


class TerminalJobFailure(DiagnosticError):
    """A job exhausted its attempts (or hit a non-retryable error)."""

    code = "job_failed"
    retryable = False

    def __init__(self, job_id: str, attempts: int, last_error: str) -> None:
        super().__init__(
            f"Job {job_id!r} failed after {attempts} attempt(s): {last_error}"
        )
        self.job_id = job_id
        self.attempts = attempts
        self.last_error = last_error


class NotificationDeliveryError(DiagnosticError):
    """A status callback could not be delivered. Never escapes the notifier."""

    code = "notification_failed"
    retryable = False
