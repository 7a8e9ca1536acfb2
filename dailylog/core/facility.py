"""
Log Facility - Entry point tying the store, validator and router together

One LogFacility owns one ConfigurationStore; tests and embedding applications
can create as many isolated facilities as they need.

Usage:
    from dailylog.core.facility import LogFacility
    from dailylog.core.store import OutputLevel, RotationPolicy

    facility = LogFacility()
    facility.set_level(OutputLevel.BOTH)
    facility.set_directory(RotationPolicy.create("/var/log/app", 5 * 1024 * 1024, 3600))

    facility.info("Started %s workers", 4)
    facility.error("Upload failed")
"""

from datetime import datetime
from pathlib import Path

from beartype.typing import Callable, Optional, Union

from dailylog.constants import FAULT_MAPPING
from dailylog.core.errors import OutputLevelMisuse
from dailylog.core.formatter import current_time, render
from dailylog.core.router import LogRecord, SinkRouter
from dailylog.core.store import ConfigurationStore, OutputLevel, RotationPolicy
from dailylog.core.tracer import CallSite, TracerConfiguration
from dailylog.core.validator import validate_and_install


def format_message(message: str, args: tuple) -> str:
    """Apply "%" arguments; a mismatch keeps the raw message and arguments instead of raising."""
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError, KeyError) as e:
        return FAULT_MAPPING["message_format_failed"].format(message=message, args=args, error=e)

class LogFacility:
    def __init__(
        self,
        store: Optional[ConfigurationStore] = None,
        clock: Callable[[], datetime] = datetime.now,
        require_file_output: bool = False,
    ):
        """
        Args:
            store: configuration store (default: a new store with console output)
            clock: source of the current local time, used for timestamps and file names
            require_file_output: refuse set_directory while the level is console only
        """
        self.store = store or ConfigurationStore()
        self.router = SinkRouter(self.store, clock=clock)
        self.require_file_output = require_file_output
        self._clock = clock

    def set_level(self, level: OutputLevel):
        self.store.set_level(level)

    def get_level(self) -> OutputLevel:
        return self.store.get_level()

    def set_directory(self, target: Union[str, Path, RotationPolicy]) -> Path:
        """
        Validate and install a log directory, optionally with a rotation policy.

        Args:
            target: a directory, or a RotationPolicy whose directory is installed with it

        Returns:
            The installed directory

        Raises:
            OutputLevelMisuse: if require_file_output is set and the level is console only
            FatalConfigurationError: if the directory cannot be used
        """
        if self.require_file_output:
            level = self.store.get_level()
            if not level.writes_file:
                raise OutputLevelMisuse(level)
        if isinstance(target, RotationPolicy):
            return validate_and_install(target.directory, self.store, target)
        return validate_and_install(target, self.store)

    def log_file_path(self) -> Path:
        """Path the next file record would be written to, before any rotation."""
        return self.router.log_file_path(self.store.get_directory())

    def log_message(self, level_tag: str, now: str, message: str):
        """Render and route one message; use it to add custom levels."""
        self.router.route(LogRecord(level_tag, now, render(level_tag, message)))

    def _log(self, level_tag: str, message: str, args: tuple):
        self.log_message(level_tag, current_time(self._clock()), format_message(message, args))

    def error(self, message: str, *args):
        self._log("ERROR", message, args)

    def warn(self, message: str, *args):
        self._log("WARN", message, args)

    def info(self, message: str, *args):
        self._log("INFO", message, args)

    def debug(self, message: str, *args):
        self._log("DEBUG", message, args)

    def trace(self, message: str, *args, stacklevel: int = 1, config: Optional[TracerConfiguration] = None):
        """
        Log a trace message prefixed with the caller's location.

        Args:
            message: message, "%" formatted with args
            stacklevel: 1 for the direct caller of trace, 2 for its caller, ...
            config: tracer configuration (default: the process-wide one)
        """
        call_site = CallSite.capture(skip=stacklevel)
        prefix = call_site.describe(config)
        message = format_message(message, args)
        self.log_message("TRACE", current_time(self._clock()), f"{prefix} {message}" if prefix else message)
