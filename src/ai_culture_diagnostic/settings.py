"""Service settings for the AI & Culture Diagnostic service.

All configuration is read from the environment (prefix ``AI_DIAGNOSTIC_``)
or an optional ``.env`` file. Settings are built once by ``create_app`` and
injected into the components that need them.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for ai-culture-diagnostic.

    Environment variable prefix: AI_DIAGNOSTIC_
    """

    service_name: str = "ai-culture-diagnostic"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # HTTP
    cors_allowed_origins: list[str] = ["*"]

    # Artifact scratch location for PDFs produced by background jobs
    artifact_dir: str = "tmp"

    # Queue runtime (per queue type)
    queue_concurrency: int = 2
    queue_limiter_max: int = 5
    queue_limiter_duration_seconds: float = 60.0
    queue_max_attempts: int = 3
    queue_backoff_base_seconds: float = 1.0
    queue_backoff_multiplier: float = 2.0
    queue_job_timeout_seconds: float = 60.0
    queue_remove_on_complete: bool = True
    queue_remove_on_fail: bool = False

    # Collaborators
    render_timeout_seconds: float = 30.0
    notifier_timeout_seconds: float = 5.0

    model_config = SettingsConfigDict(
        env_prefix="AI_DIAGNOSTIC_",
        env_file=".env",
        extra="ignore",
    )
