"""ArtifactHarvester — collect every artifact class and publish the resulting paths."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from flutter_step.domain.enums import CollectionStatus
from flutter_step.domain.models import ArtifactClass, DeployRecord, FilterPair

if TYPE_CHECKING:
    from flutter_step.application.artifact_collector import ArtifactCollector
    from flutter_step.domain.ports import EnvironmentExportPort

logger = logging.getLogger(__name__)

PATH_LIST_SEPARATOR = "|"


def build_artifact_classes(
    *,
    apk_include: str,
    apk_exclude: str,
    test_apk_include: str,
    test_apk_exclude: str,
    mapping_include: str,
    mapping_exclude: str,
) -> tuple[ArtifactClass, ...]:
    """Return the apk, test apk and mapping classes in harvest order."""
    return (
        ArtifactClass(
            name="apk",
            label="apk",
            filters=FilterPair.from_strings(apk_include, apk_exclude),
            path_key="BITRISE_APK_PATH",
            list_key="BITRISE_APK_PATH_LIST",
        ),
        ArtifactClass(
            name="test_apk",
            label="test apk",
            filters=FilterPair.from_strings(test_apk_include, test_apk_exclude),
            path_key="BITRISE_TEST_APK_PATH",
        ),
        ArtifactClass(
            name="mapping",
            label="mapping",
            filters=FilterPair.from_strings(mapping_include, mapping_exclude),
            path_key="BITRISE_MAPPING_PATH",
            warn_when_empty=False,
        ),
    )


class ArtifactHarvester:
    """Run the collector once per artifact class and export the results.

    Classes are processed in order; the first fatal error aborts the rest.
    A class without any surviving file publishes nothing.
    """

    def __init__(self, collector: ArtifactCollector, exporter: EnvironmentExportPort) -> None:
        self._collector = collector
        self._exporter = exporter

    async def harvest(
        self,
        classes: Sequence[ArtifactClass],
        root: Path,
        deploy_dir: Path,
        reference_time: datetime,
    ) -> dict[str, DeployRecord]:
        records: dict[str, DeployRecord] = {}
        for artifact_class in classes:
            logger.info("Move %s files...", artifact_class.label)
            record = self._collector.collect(root, artifact_class.filters, deploy_dir, reference_time)
            self._report(artifact_class, record)
            await self._publish(artifact_class, record)
            records[artifact_class.name] = record
        return records

    @staticmethod
    def _report(artifact_class: ArtifactClass, record: DeployRecord) -> None:
        if record.status is CollectionStatus.NO_MATCHES:
            level = logging.WARNING if artifact_class.warn_when_empty else logging.INFO
            logger.log(level, "No file name matched %s filters", artifact_class.label)
        elif record.status is CollectionStatus.ALL_STALE:
            logger.warning(
                "All %d %s file(s) matching the filters predate the build; nothing was copied",
                len(record.stale),
                artifact_class.label,
            )

    async def _publish(self, artifact_class: ArtifactClass, record: DeployRecord) -> None:
        if record.last is None:
            return

        await self._export(artifact_class.path_key, str(record.last), artifact_class.label)
        if artifact_class.list_key is not None:
            joined = PATH_LIST_SEPARATOR.join(str(p) for p in record.paths)
            await self._export(artifact_class.list_key, joined, f"{artifact_class.label} paths list")

    async def _export(self, key: str, value: str, what: str) -> None:
        await self._exporter.export(key, value)
        logger.info("The %s is now available in the Environment Variable: $%s (value: %s)", what, key, value)
