"""ArtifactCollector — discover fresh build outputs and copy them into the deploy directory."""

from __future__ import annotations

import logging
import os
import shutil
from datetime import UTC, datetime
from pathlib import Path

from flutter_step.application.path_resolver import PathResolver
from flutter_step.domain.errors import CopyError, DiscoveryError, StatError
from flutter_step.domain.models import CandidateFile, DeployRecord, DestinationName, FilterPair

logger = logging.getLogger(__name__)


def discover_files(root: Path, filters: FilterPair) -> list[Path]:
    """Return files under *root* whose rooted path text matches *filters*.

    Paths are returned as ``root / relative`` (so ``Path(".")`` yields
    ``build/app.apk`` while matching runs against ``./build/app.apk``).
    Directories and file names are visited in sorted order, which defines
    the discovery order.

    Raises:
        DiscoveryError: *root* is not a directory or a directory could not be read.
    """
    if not root.is_dir():
        raise DiscoveryError(f"Search root is not a directory: {root}")

    root_text = str(root)
    logger.info(
        "Searching %s for %r excluding %s",
        root_text,
        filters.include,
        ", ".join(repr(p) for p in filters.excludes) or "nothing",
    )

    def _on_error(exc: OSError) -> None:
        raise DiscoveryError(f"Failed to search {exc.filename}: {exc.strerror}") from exc

    matches: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_text, onerror=_on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path_text = os.path.join(dirpath, filename)
            if filters.matches(path_text) and os.path.isfile(path_text):
                matches.append(Path(path_text))
    return matches


class ArtifactCollector:
    """Copy every non-stale file matching a filter pair into the deploy directory.

    Each invocation is independent; the deploy directory and reference time
    are passed per call so one collector serves every artifact class.
    """

    def __init__(self, resolver: PathResolver) -> None:
        self._resolver = resolver

    def collect(
        self,
        root: Path,
        filters: FilterPair,
        deploy_dir: Path,
        reference_time: datetime,
    ) -> DeployRecord:
        """Discover, filter by modification time, and copy matching files.

        Raises:
            DiscoveryError, StatError, ResolutionExhaustedError, CopyError:
                Any failure is fatal for the whole run.
        """
        deploy_dir = deploy_dir.absolute()
        copied: list[Path] = []
        stale: list[Path] = []

        for source in discover_files(root, filters):
            candidate = _stat_candidate(source)
            if candidate.is_stale(reference_time):
                logger.warning("skipping: %s, modified before the build has started", source)
                stale.append(source)
                continue

            name = DestinationName.for_source(source)
            destination = self._resolver.resolve(deploy_dir, name.base_name, name.extension)

            logger.info("copy %s to %s", source, destination)
            try:
                shutil.copyfile(source, destination)
            except OSError as exc:
                raise CopyError(f"Failed to copy {source} to {destination}: {exc}") from exc
            copied.append(destination)

        return DeployRecord(paths=tuple(copied), stale=tuple(stale))


def _stat_candidate(path: Path) -> CandidateFile:
    try:
        info = path.lstat()
    except OSError as exc:
        raise StatError(f"Failed to get file info for {path}: {exc}") from exc
    return CandidateFile(path=path, modified_at=datetime.fromtimestamp(info.st_mtime, tz=UTC))
