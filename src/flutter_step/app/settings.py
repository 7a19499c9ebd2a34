"""Step settings — Pydantic BaseSettings for step inputs read from the environment."""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from flutter_step.domain.errors import SdkLocationError
from flutter_step.infrastructure.adapters.flutter_sdk import DEFAULT_BASE_URL

COMMAND_SEPARATOR = "|"


class StepSettings(BaseSettings):
    """Step configuration loaded from environment variables and .env file.

    Input names match the CI step's declared inputs; the deploy directory
    comes from the CI-provided ``BITRISE_DEPLOY_DIR``.
    """

    # Toolchain
    version: str = Field(description="Flutter SDK version, e.g. 1.2.1-stable")
    flutter_sdk_dir: Path | None = Field(default=None, description="SDK destination; defaults to ~/flutter")
    flutter_sdk_base_url: str = Field(default=DEFAULT_BASE_URL, description="Release archive base URL")

    # Build
    working_dir: Path = Field(default=Path("."), description="Directory the flutter commands run in")
    commands: str = Field(description="Pipe-separated flutter commands, e.g. 'test|build apk'")

    # Artifact filters (excludes are newline-separated)
    apk_file_include_filter: str = Field(default="*.apk")
    apk_file_exclude_filter: str = Field(default="*unaligned.apk\n*Test*.apk")
    test_apk_file_include_filter: str = Field(default="*Test*.apk")
    test_apk_file_exclude_filter: str = Field(default="")
    mapping_file_include_filter: str = Field(default="*/mapping.txt")
    mapping_file_exclude_filter: str = Field(default="*/tmp/*")

    # Harvest
    search_dir: Path = Field(default=Path("."), description="Root searched for build artifacts")
    deploy_dir: Path = Field(
        default=Path("."),
        validation_alias=AliasChoices("BITRISE_DEPLOY_DIR", "deploy_dir"),
        description="Directory artifacts are copied into",
    )

    model_config = {"env_prefix": "", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("version")
    @classmethod
    def _version_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("version must not be empty")
        return value.strip()

    @field_validator("flutter_sdk_dir")
    @classmethod
    def _expand_sdk_dir(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    @field_validator("working_dir")
    @classmethod
    def _working_dir_exists(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"working_dir is not a directory: {value}")
        return value

    @field_validator("commands")
    @classmethod
    def _commands_not_blank(cls, value: str) -> str:
        if not any(c.strip() for c in value.split(COMMAND_SEPARATOR)):
            raise ValueError("commands must contain at least one command")
        return value

    @property
    def command_list(self) -> list[str]:
        """Commands in order with empty entries stripped."""
        return [c.strip() for c in self.commands.split(COMMAND_SEPARATOR) if c.strip()]

    def resolve_sdk_dir(self) -> Path:
        """Return the SDK destination, defaulting to ``~/flutter``."""
        if self.flutter_sdk_dir is not None:
            return self.flutter_sdk_dir
        try:
            return Path.home() / "flutter"
        except RuntimeError as exc:
            raise SdkLocationError(f"Could not determine Flutter SDK destination directory: {exc}") from exc
