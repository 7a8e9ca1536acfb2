"""
Sink Router - Sends one rendered record to its destinations

The output level is read once per record:
- console: stderr for ERROR/WARN, stdout for INFO/DEBUG/TRACE
- file: rotate if needed, then append to <directory-or-cwd>/<YYYY-MM-DD>.log
- both: console first, then file

File failures never reach the caller: they are reported on stderr, together
with the record itself when the console was not written.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from threading import Lock

import click
from beartype.typing import Callable, Optional

from dailylog.constants import FAULT_MAPPING, STDERR_LEVEL_TAGS
from dailylog.core import file_writer
from dailylog.core.rotation import rotate_if_needed
from dailylog.core.store import ConfigurationStore
from dailylog.settings import DATE_FORMAT, LOG_FILE_SUFFIX


def _echo(line: str, err: bool = False):
    try:
        click.echo(line, err=err)
    except UnicodeEncodeError:
        # Console stream cannot encode the record; escape what it cannot show
        click.echo(line.encode("ascii", "backslashreplace").decode("ascii"), err=err)


@dataclass(frozen=True)
class LogRecord:
    """A fully rendered record, ready to be placed"""

    level_tag: str
    timestamp: str
    message: str

    @property
    def line(self) -> str:
        return f"{self.timestamp} {self.message}"


class SinkRouter:
    def __init__(self, store: ConfigurationStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self._clock = clock
        # Held from the rotation check until the append completes
        self._file_lock = Lock()

    def log_file_path(self, directory: Optional[Path] = None) -> Path:
        """Return today's log file in the given directory, or in the current directory."""
        filename = f"{self._clock().strftime(DATE_FORMAT)}{LOG_FILE_SUFFIX}"
        if directory is None:
            return Path(filename)
        return Path(directory) / filename

    def route(self, record: LogRecord):
        level = self.store.get_level()
        if level.writes_console:
            self._write_console(record)
        if level.writes_file:
            try:
                self._write_file(record)
            except OSError as e:
                _echo(FAULT_MAPPING["file_write_failed"].format(error=e), err=True)
                if not level.writes_console:
                    _echo(record.line, err=True)

    @staticmethod
    def _write_console(record: LogRecord):
        _echo(record.line, err=record.level_tag.upper() in STDERR_LEVEL_TAGS)

    def _write_file(self, record: LogRecord):
        directory, policy = self.store.get_file_settings()
        path = self.log_file_path(directory)
        with self._file_lock:
            if policy is not None:
                rotate_if_needed(path, policy)
            file_writer.append(path, record.timestamp, click.unstyle(record.message))
