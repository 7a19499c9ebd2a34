"""PathResolver — choose a non-colliding destination path inside the deploy directory."""

from __future__ import annotations

import errno
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from flutter_step.domain.errors import ResolutionExhaustedError
from flutter_step.domain.models import DestinationName

if TYPE_CHECKING:
    from flutter_step.domain.ports import ClockPort

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS: int = 10
DEFAULT_BACKOFF_SECONDS: float = 1.0


class PathResolver:
    """Find a free file name for an artifact, retrying with timestamped names.

    Attempt 0 tries ``base_name + ext``. Every later attempt waits
    ``backoff_seconds`` and tries ``base_name + <YYYYmmddHHMMSS> + ext`` with
    the timestamp taken from the clock at that moment. The resolver only
    checks existence; creating the file is the caller's job.
    """

    def __init__(
        self,
        clock: ClockPort,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._clock = clock
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds

    def resolve(self, deploy_dir: Path, base_name: str, ext: str) -> Path:
        """Return a path under *deploy_dir* that does not exist yet.

        Raises:
            ResolutionExhaustedError: All attempts collided or failed; the
                last underlying error is attached as ``last_error``.
        """
        name = DestinationName(base_name=base_name, extension=ext)
        last_error: OSError | None = None

        for attempt in range(self._max_attempts):
            if attempt > 0:
                logger.warning("  Retrying...")
                self._clock.sleep(self._backoff_seconds)
                name = name.with_timestamp(self._clock.now())

            candidate = deploy_dir / name.file_name
            error = _check_free(candidate)
            if error is None:
                return candidate

            logger.warning("  %d attempt failed:", attempt + 1)
            logger.info("%s", error)
            last_error = error

        raise ResolutionExhaustedError(
            f"No free deploy path for {base_name}{ext} in {deploy_dir} after {self._max_attempts} attempts: {last_error}",
            last_error=last_error,
        ) from last_error


def _check_free(candidate: Path) -> OSError | None:
    """Return None when *candidate* does not exist, else the reason it is unusable."""
    try:
        candidate.lstat()
    except FileNotFoundError:
        return None
    except OSError as exc:
        return exc
    return FileExistsError(errno.EEXIST, "file already exists", str(candidate))
