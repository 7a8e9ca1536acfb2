"""
dailylog core - Sink routing and date-stamped file rotation

Provides:
- Output to the console, a dated log file, or both
- Size and age based rotation (<date>_rot-<n>.log)
- Log directory validation before installation
- Leveled helpers: error, warn, info, debug, trace

Usage:
    from dailylog.core import get_facility, OutputLevel

    facility = get_facility()
    facility.set_level(OutputLevel.FILE)
    facility.set_directory("/var/log/app")
    facility.info("Operation completed in %.1fs", 1.5)

    # or through the module helpers, which use the same default facility
    from dailylog import core as log
    log.warn("Disk almost full")
"""

from threading import Lock

from dailylog.core.errors import (
    DailyLogError,
    FatalConfigurationError,
    MetadataUnavailable,
    OutputLevelMisuse,
    PathNotDirectory,
    PathNotFound,
    PathNotWritable,
)
from dailylog.core.facility import LogFacility
from dailylog.core.formatter import current_time, type_name
from dailylog.core.store import ConfigurationStore, OutputLevel, RotationPolicy

__all__ = [
    "ConfigurationStore",
    "DailyLogError",
    "FatalConfigurationError",
    "LogFacility",
    "MetadataUnavailable",
    "OutputLevel",
    "OutputLevelMisuse",
    "PathNotDirectory",
    "PathNotFound",
    "PathNotWritable",
    "RotationPolicy",
    "current_time",
    "debug",
    "error",
    "get_facility",
    "info",
    "reset_facility",
    "trace",
    "type_name",
    "warn",
]

_default_facility = None
_default_lock = Lock()


def get_facility() -> LogFacility:
    """
    Get the process default facility, creating it on first use.

    Returns:
        LogFacility instance shared by the module-level helpers
    """
    global _default_facility
    with _default_lock:
        if _default_facility is None:
            _default_facility = LogFacility()
        return _default_facility


def reset_facility():
    """
    Drop the process default facility.

    Useful for testing.
    """
    global _default_facility
    with _default_lock:
        _default_facility = None


def error(message: str, *args):
    get_facility().error(message, *args)


def warn(message: str, *args):
    get_facility().warn(message, *args)


def info(message: str, *args):
    get_facility().info(message, *args)


def debug(message: str, *args):
    get_facility().debug(message, *args)


def trace(message: str, *args):
    get_facility().trace(message, *args, stacklevel=2)
