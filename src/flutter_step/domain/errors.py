"""Domain errors — step exception hierarchy with per-category exit codes."""

from __future__ import annotations

from flutter_step.domain.enums import ExitCode


class StepError(Exception):
    """Base error for all fatal step conditions.

    Use ``raise StepError("msg") from cause`` for exception chaining.
    Each subclass carries the process exit status the entry point reports.
    """

    exit_code: ExitCode = ExitCode.STEP_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(StepError):
    """Invalid step inputs or missing required environment variables."""

    exit_code = ExitCode.CONFIGURATION_ERROR


class EnvironmentSetupError(StepError):
    """Host environment cannot run the toolchain (unsupported OS)."""

    exit_code = ExitCode.ENVIRONMENT_SETUP_FAILED


class SdkLocationError(StepError):
    """The Flutter SDK destination directory could not be determined."""

    exit_code = ExitCode.SDK_LOCATION_FAILED


class SdkCheckError(StepError):
    """Checking whether the Flutter SDK is installed failed."""

    exit_code = ExitCode.SDK_CHECK_FAILED


class SdkInstallError(StepError):
    """Downloading or extracting the Flutter SDK failed."""

    exit_code = ExitCode.SDK_INSTALL_FAILED


class BuildCommandError(StepError):
    """A flutter command could not start or exited non-zero."""

    exit_code = ExitCode.BUILD_FAILED


class DiscoveryError(StepError):
    """The file search itself failed (not the same as zero matches)."""

    exit_code = ExitCode.DISCOVERY_FAILED


class StatError(StepError):
    """A matched file's modification time could not be read."""

    exit_code = ExitCode.STAT_FAILED


class ResolutionExhaustedError(StepError):
    """No free destination name was found within the retry budget.

    ``last_error`` holds the final existence-check failure for diagnostics.
    """

    exit_code = ExitCode.RESOLUTION_EXHAUSTED

    def __init__(self, message: str, last_error: OSError | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class CopyError(StepError):
    """Copying an artifact into the deploy directory failed."""

    exit_code = ExitCode.COPY_FAILED


class ExportError(StepError):
    """Publishing a key/value pair to the CI environment failed."""

    exit_code = ExitCode.EXPORT_FAILED
