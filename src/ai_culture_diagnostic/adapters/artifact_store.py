"""Scratch-directory persistence for documents produced by background jobs."""

import asyncio
from pathlib import Path

from ai_culture_diagnostic.core.workflow import default_report_file_name
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)


def sanitize_file_name(file_name: str, max_length: int = 255) -> str:
    """Strip path separators, NUL bytes and leading dots from a file name.

    Args:
        file_name: Caller-supplied name.
        max_length: Maximum allowed length.

    Returns:
        A name safe to join onto the scratch directory, never empty.
    """
    sanitized = file_name.replace("/", "_").replace("\\", "_").replace("\x00", "")
    sanitized = sanitized.strip().lstrip(".")
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
    return sanitized or "unnamed"


class LocalArtifactStore:
    """Writes artifacts under a base directory, overwriting same-named files.

    Args:
        base_dir: Scratch directory, created on first write.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _write(self, path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def save(self, content: bytes, file_name: str | None = None) -> tuple[str, str]:
        """Write content off the event loop.

        Args:
            content: Bytes to persist.
            file_name: Desired name; ``diagnostico-{millis}.pdf`` if omitted.

        Returns:
            (sanitized file name, absolute path as string).
        """
        name = sanitize_file_name(file_name) if file_name else default_report_file_name()
        path = (self._base_dir / name).resolve()
        await asyncio.to_thread(self._write, path, content)
        logger.info("Artifact written", file_name=name, path=str(path), size=len(content))
        return name, str(path)
