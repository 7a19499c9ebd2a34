"""Domain ports — Protocol interfaces for hexagonal architecture boundaries."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Time source used for reference timestamps, name qualification and backoff."""

    def now(self) -> datetime: ...

    def sleep(self, seconds: float) -> None: ...


@runtime_checkable
class EnvironmentExportPort(Protocol):
    """Publish a key/value pair to the calling CI system's environment."""

    async def export(self, key: str, value: str) -> None: ...


@runtime_checkable
class BuildCommandPort(Protocol):
    """Run one build tool command in the working directory."""

    async def run(self, command: str) -> None: ...


@runtime_checkable
class SdkInstallerPort(Protocol):
    """Check for and install the build toolchain."""

    def check_environment(self) -> str: ...

    def is_installed(self) -> bool: ...

    async def install(self, version: str) -> None: ...
