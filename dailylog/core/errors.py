from pathlib import Path

from beartype.typing import Optional

from dailylog.constants import FAULT_MAPPING


class DailyLogError(Exception):
    """Base class for errors raised by the logging facility."""


class FatalConfigurationError(DailyLogError):
    """Exception raised when a log directory cannot be used.

    The library never exits the process itself: the bootstrap that catches this
    error is expected to report it, wait for the grace delay and exit non-zero.

    Attributes:
        path: the rejected candidate directory
    """

    fault_key = ""

    def __init__(self, path: Path, error: Optional[BaseException] = None):
        self.path = Path(path)
        self.error = error
        super().__init__(FAULT_MAPPING[self.fault_key].format(path=self.path, error=error))


class PathNotFound(FatalConfigurationError):
    fault_key = "path_not_found"


class PathNotDirectory(FatalConfigurationError):
    fault_key = "path_not_directory"


class MetadataUnavailable(FatalConfigurationError):
    fault_key = "metadata_unavailable"


class PathNotWritable(FatalConfigurationError):
    fault_key = "path_not_writable"


class OutputLevelMisuse(DailyLogError):
    """Raised when a log directory is set while output goes to the console only."""

    def __init__(self, level):
        self.level = level
        super().__init__(FAULT_MAPPING["output_level_misuse"].format(level=level.value))
