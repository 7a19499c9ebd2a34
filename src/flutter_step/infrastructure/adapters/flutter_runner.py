"""FlutterCommandRunner — run ``flutter`` commands through bash in the working directory."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from flutter_step.domain.errors import BuildCommandError

if TYPE_CHECKING:
    from flutter_step.domain.ports import BuildCommandPort

logger = logging.getLogger(__name__)


class FlutterCommandRunner:
    """Execute ``bash -c "<flutter> <command>"`` with inherited stdout/stderr.

    Satisfies the BuildCommandPort protocol.
    """

    if TYPE_CHECKING:
        _protocol_check: BuildCommandPort

    def __init__(self, flutter_executable: Path, working_dir: Path) -> None:
        self._flutter_executable = flutter_executable
        self._working_dir = working_dir

    def bash_command(self, command: str) -> str:
        return f"{self._flutter_executable} {command}"

    async def run(self, command: str) -> None:
        """Run one flutter command, raising BuildCommandError on failure."""
        logger.info("Executing Flutter command: %s", command)
        try:
            proc = await asyncio.create_subprocess_exec(
                "bash",
                "-c",
                self.bash_command(command),
                cwd=str(self._working_dir),
            )
            returncode = await proc.wait()
        except OSError as exc:
            raise BuildCommandError(f"Flutter invocation failed to start: {exc}") from exc

        if returncode != 0:
            raise BuildCommandError(f"Flutter invocation failed: `flutter {command}` exited with code {returncode}")
