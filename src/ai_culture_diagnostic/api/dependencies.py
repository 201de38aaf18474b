"""Dependency providers for the API routes.

Long-lived components are built once in the application lifespan and kept
on ``app.state``; the providers below hand them to the routes.
"""

from fastapi import Request

from ai_culture_diagnostic.core.workflow import DiagnosticWorkflow
from ai_culture_diagnostic.jobs.queue_manager import JobQueueManager


def get_workflow(request: Request) -> DiagnosticWorkflow:
    """Return the shared scoring and rendering workflow."""
    return request.app.state.workflow


def get_queue_manager(request: Request) -> JobQueueManager:
    """Return the in-process job queue manager."""
    return request.app.state.queue_manager
