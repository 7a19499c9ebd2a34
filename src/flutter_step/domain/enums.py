"""Domain enums — process exit statuses and collection outcomes."""

from enum import Enum, IntEnum, unique


@unique
class ExitCode(IntEnum):
    """Stable process exit status per failure category."""

    SUCCESS = 0
    SDK_CHECK_FAILED = 1
    SDK_INSTALL_FAILED = 2
    BUILD_FAILED = 3
    SDK_LOCATION_FAILED = 5
    ENVIRONMENT_SETUP_FAILED = 6
    CONFIGURATION_ERROR = 7
    DISCOVERY_FAILED = 10
    STAT_FAILED = 11
    RESOLUTION_EXHAUSTED = 12
    COPY_FAILED = 13
    EXPORT_FAILED = 14
    STEP_FAILED = 15


@unique
class CollectionStatus(Enum):
    """Outcome of one collector invocation for an artifact class."""

    COPIED = "copied"
    NO_MATCHES = "no_matches"
    ALL_STALE = "all_stale"
