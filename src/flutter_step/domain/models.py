"""Domain models — frozen dataclasses for artifact filters, candidates and deploy records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from fnmatch import fnmatchcase
from pathlib import Path

from flutter_step.domain.enums import CollectionStatus

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


@dataclass(frozen=True)
class FilterPair:
    """One include pattern plus any number of exclude patterns.

    Patterns use ``find -path`` semantics: shell wildcards matched against the
    whole path text as rooted at the search directory (``./build/app.apk``),
    where ``*`` also matches ``/``.
    """

    include: str
    excludes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.include:
            raise ValueError("include pattern must not be empty")

    @classmethod
    def from_strings(cls, include: str, exclude_text: str = "") -> FilterPair:
        """Build from the newline-delimited exclude encoding used by step inputs."""
        excludes = tuple(line for line in exclude_text.split("\n") if line.strip())
        return cls(include=include, excludes=excludes)

    def matches(self, path_text: str) -> bool:
        if not fnmatchcase(path_text, self.include):
            return False
        return not any(fnmatchcase(path_text, pattern) for pattern in self.excludes)


@dataclass(frozen=True)
class CandidateFile:
    """A discovered file and its modification time."""

    path: Path
    modified_at: datetime

    def is_stale(self, reference_time: datetime) -> bool:
        """True when the file was last modified strictly before *reference_time*."""
        return self.modified_at < reference_time


@dataclass(frozen=True)
class DestinationName:
    """File name candidate inside the deploy directory."""

    base_name: str
    extension: str
    suffix: str = ""

    @classmethod
    def for_source(cls, source: Path) -> DestinationName:
        """Split *source*'s file name into base name and last extension."""
        extension = source.suffix
        base_name = source.name[: len(source.name) - len(extension)]
        return cls(base_name=base_name, extension=extension)

    @property
    def file_name(self) -> str:
        return f"{self.base_name}{self.suffix}{self.extension}"

    def with_timestamp(self, moment: datetime) -> DestinationName:
        """Return a disambiguated name qualified with *moment* at second granularity."""
        return DestinationName(self.base_name, self.extension, moment.strftime(TIMESTAMP_FORMAT))


@dataclass(frozen=True)
class DeployRecord:
    """Result of one collector invocation.

    ``paths`` keeps discovery order; ``stale`` lists matches skipped because
    they predate the build.
    """

    paths: tuple[Path, ...] = field(default_factory=tuple)
    stale: tuple[Path, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(set(self.paths)) != len(self.paths):
            raise ValueError("deploy paths must be pairwise distinct")

    @property
    def last(self) -> Path | None:
        """The most recently copied destination, or None when nothing was copied."""
        return self.paths[-1] if self.paths else None

    @property
    def status(self) -> CollectionStatus:
        if self.paths:
            return CollectionStatus.COPIED
        if self.stale:
            return CollectionStatus.ALL_STALE
        return CollectionStatus.NO_MATCHES


@dataclass(frozen=True)
class ArtifactClass:
    """A kind of build output harvested independently with its own filters.

    ``path_key`` receives the last copied path; ``list_key`` (when set)
    receives every copied path joined with ``|``.
    """

    name: str
    label: str
    filters: FilterPair
    path_key: str
    list_key: str | None = None
    warn_when_empty: bool = True
