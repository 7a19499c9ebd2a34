"""EnvmanExporter — publish step outputs with the ``envman`` CLI."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from flutter_step.domain.errors import ExportError

if TYPE_CHECKING:
    from flutter_step.domain.ports import EnvironmentExportPort

logger = logging.getLogger(__name__)


class EnvmanExporter:
    """Run ``envman add --key KEY`` with the value on stdin.

    Satisfies the EnvironmentExportPort protocol. Raises ExportError when
    envman cannot start or exits non-zero.
    """

    if TYPE_CHECKING:
        _protocol_check: EnvironmentExportPort

    def __init__(self, executable: str = "envman") -> None:
        self._executable = executable

    async def export(self, key: str, value: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._executable,
                "add",
                "--key",
                key,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await proc.communicate(input=value.encode())
        except OSError as exc:
            raise ExportError(f"Failed to export environment ({key}): {exc}") from exc

        if proc.returncode != 0:
            stderr = stderr_bytes.decode(errors="replace").strip() if stderr_bytes else ""
            stdout = stdout_bytes.decode(errors="replace").strip() if stdout_bytes else ""
            raise ExportError(
                f"Failed to export environment ({key}): envman exited with code {proc.returncode}: {stderr or stdout}"
            )
        logger.debug("Exported %s", key)
