"""Bootstrap — composition root wiring adapters to port protocols."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flutter_step.app.settings import StepSettings
from flutter_step.application.artifact_collector import ArtifactCollector
from flutter_step.application.artifact_harvester import ArtifactHarvester, build_artifact_classes
from flutter_step.application.path_resolver import PathResolver
from flutter_step.domain.models import ArtifactClass
from flutter_step.domain.ports import BuildCommandPort, ClockPort, SdkInstallerPort
from flutter_step.infrastructure.adapters.envman_exporter import EnvmanExporter
from flutter_step.infrastructure.adapters.flutter_runner import FlutterCommandRunner
from flutter_step.infrastructure.adapters.flutter_sdk import FlutterSdkInstaller
from flutter_step.infrastructure.adapters.system_clock import SystemClock

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """Container for all wired step components."""

    settings: StepSettings
    clock: ClockPort
    sdk_installer: SdkInstallerPort
    build_runner: BuildCommandPort
    harvester: ArtifactHarvester
    artifact_classes: tuple[ArtifactClass, ...]


def create_step(settings: StepSettings, clock: ClockPort | None = None) -> Step:
    """Build every component from *settings*.

    Raises:
        SdkLocationError: The SDK destination directory cannot be determined.
    """
    clock = clock or SystemClock()
    sdk_dir = settings.resolve_sdk_dir()
    installer = FlutterSdkInstaller(sdk_dir, base_url=settings.flutter_sdk_base_url)
    runner = FlutterCommandRunner(installer.executable, settings.working_dir)
    collector = ArtifactCollector(PathResolver(clock))
    harvester = ArtifactHarvester(collector, EnvmanExporter())
    classes = build_artifact_classes(
        apk_include=settings.apk_file_include_filter,
        apk_exclude=settings.apk_file_exclude_filter,
        test_apk_include=settings.test_apk_file_include_filter,
        test_apk_exclude=settings.test_apk_file_exclude_filter,
        mapping_include=settings.mapping_file_include_filter,
        mapping_exclude=settings.mapping_file_exclude_filter,
    )
    logger.debug("Flutter SDK directory: %s", sdk_dir)
    return Step(
        settings=settings,
        clock=clock,
        sdk_installer=installer,
        build_runner=runner,
        harvester=harvester,
        artifact_classes=classes,
    )
