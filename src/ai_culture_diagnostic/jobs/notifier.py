"""Best-effort delivery of job status events to caller-supplied URLs.

Events are POSTed as JSON in the camelCase wire format::

    {"jobId": "...", "progress": 50, "status": "processing", "message": "..."}

Completion events add ``fileName``, ``fileSize`` and ``location`` when the
job produced a file. Delivery failures (malformed addresses, network
errors, 4xx/5xx responses) are logged and swallowed: they never change
the job's state, and no notification is retried.
"""

from typing import Any, Mapping

import httpx

from ai_culture_diagnostic.errors import NotificationDeliveryError
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


def build_event(
    job_id: str,
    progress: int,
    status: str,
    message: str,
    **result_fields: Any,
) -> dict[str, Any]:
    """Assemble a status event; ``None`` result fields are omitted."""
    event: dict[str, Any] = {
        "jobId": job_id,
        "progress": progress,
        "status": status,
        "message": message,
    }
    event.update({key: value for key, value in result_fields.items() if value is not None})
    return event


class StatusNotifier:
    """Posts job status events with a shared ``httpx.AsyncClient``.

    Progress events go to the payload's ``statusUpdateUrl`` when present,
    otherwise to ``callbackUrl``. Terminal events (completed/failed) go to
    ``callbackUrl`` when present, otherwise to ``statusUpdateUrl``.

    Args:
        client: HTTP client to use; one is created (and owned) if omitted.
        timeout_seconds: Per-request timeout for an owned client.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        """Close the HTTP client if this notifier created it."""
        if self._owns_client:
            await self._client.aclose()

    async def notify(self, callback_url: str, event: dict[str, Any]) -> bool:
        """POST one event. Never raises.

        Args:
            callback_url: Destination URL.
            event: JSON-serialisable event body.

        Returns:
            True if the remote endpoint answered with a 2xx status.
        """
        try:
            response = await self._client.post(callback_url, json=event)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            failure = NotificationDeliveryError(f"Status callback to {callback_url} failed: {exc}")
            logger.warning(
                "Status notification not delivered",
                callback_url=callback_url,
                job_id=event.get("jobId"),
                status=event.get("status"),
                error_code=failure.code,
                error=failure.message,
            )
            return False

        logger.debug(
            "Status notification delivered",
            callback_url=callback_url,
            job_id=event.get("jobId"),
            status=event.get("status"),
            progress=event.get("progress"),
        )
        return True

    async def notify_progress(
        self,
        payload: Mapping[str, Any],
        job_id: str,
        progress: int,
        message: str,
    ) -> bool:
        """Send a ``processing`` event if the payload carries a callback address."""
        url = payload.get("statusUpdateUrl") or payload.get("callbackUrl")
        if not url:
            return False
        return await self.notify(url, build_event(job_id, progress, STATUS_PROCESSING, message))

    async def notify_completed(
        self,
        payload: Mapping[str, Any],
        job_id: str,
        message: str,
        **result_fields: Any,
    ) -> bool:
        """Send a ``completed`` event (progress 100) with result fields."""
        url = payload.get("callbackUrl") or payload.get("statusUpdateUrl")
        if not url:
            return False
        return await self.notify(
            url, build_event(job_id, 100, STATUS_COMPLETED, message, **result_fields)
        )

    async def notify_failed(
        self,
        payload: Mapping[str, Any],
        job_id: str,
        progress: int,
        message: str,
    ) -> bool:
        """Send a ``failed`` event carrying the error message."""
        url = payload.get("callbackUrl") or payload.get("statusUpdateUrl")
        if not url:
            return False
        return await self.notify(url, build_event(job_id, progress, STATUS_FAILED, message))
