"""Main entry point — ``python3 -m flutter_step.app.main``."""

from __future__ import annotations

import asyncio
import logging
import sys

from pydantic import ValidationError

from flutter_step.app.bootstrap import Step, create_step
from flutter_step.app.settings import StepSettings
from flutter_step.domain.enums import ExitCode
from flutter_step.domain.errors import ConfigurationError, StepError

logger = logging.getLogger(__name__)


def load_settings() -> StepSettings:
    """Read step inputs from the environment, mapping validation failures to ConfigurationError."""
    try:
        return StepSettings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise ConfigurationError(f"Configuration error: {exc}") from exc


def _print_settings(settings: StepSettings) -> None:
    logger.info("Configs:")
    for name, value in settings.model_dump().items():
        logger.info("- %s: %s", name, value)


async def run(step: Step) -> None:
    """Check the host, install the SDK if needed, run every build command, then harvest artifacts."""
    settings = step.settings

    step.sdk_installer.check_environment()
    if step.sdk_installer.is_installed():
        logger.info("Flutter SDK directory already exists, skipping installation.")
    else:
        await step.sdk_installer.install(settings.version)

    build_started = step.clock.now()
    for command in settings.command_list:
        await step.build_runner.run(command)

    await step.harvester.harvest(step.artifact_classes, settings.search_dir, settings.deploy_dir, build_started)


def main() -> int:
    """Run the step and return its process exit status."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        settings = load_settings()
        _print_settings(settings)
        step = create_step(settings)
        asyncio.run(run(step))
    except StepError as exc:
        logger.error("%s", exc.message)
        return int(exc.exit_code)
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(main())
