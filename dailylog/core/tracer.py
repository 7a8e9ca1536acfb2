"""
Tracer - Call-site details for trace records

The call site is an explicit value: callers (or LogFacility.trace) capture it
with CallSite.capture() and the tracer configuration decides which parts of it
prefix the message.

Usage:
    from dailylog.core.tracer import TracerConfiguration, set_tracer_config

    set_tracer_config(
        TracerConfiguration(context_enabled=True, timestamp_enabled=True, timestamp_type=TimestampType.UNIX)
    )
    facility.trace("cache miss")
    # 2026-10-18 10:15:30 [TRACE] app/cache.py:42 app.cache.lookup ->> thread 1403 ->> 1792318530123456 cache miss
"""

import enum
import inspect
import os
import threading
import time
from dataclasses import dataclass, replace
from datetime import datetime
from threading import Lock

from beartype.typing import Optional

from dailylog.core.formatter import current_time


class TimestampType(enum.Enum):
    CHRONO = "chrono"  # "YYYY-MM-DD HH:MM:SS"
    UNIX = "unix"  # microseconds since the epoch


@dataclass(frozen=True)
class TracerConfiguration:
    """
    Which call-site parts appear in trace records.

    A None flag keeps the default: file and line on, context and timestamp off.
    When format is set it replaces the default layout; it is a str.format
    template over file, line, function, module, thread_id and timestamp.
    """

    context_enabled: Optional[bool] = None
    timestamp_enabled: Optional[bool] = None
    timestamp_type: Optional[TimestampType] = None
    file_enabled: Optional[bool] = None
    line_enabled: Optional[bool] = None
    format: Optional[str] = None


_tracer_config = TracerConfiguration()
_tracer_lock = Lock()


def set_tracer_config(config: TracerConfiguration):
    global _tracer_config
    with _tracer_lock:
        _tracer_config = config


def get_tracer_config() -> TracerConfiguration:
    with _tracer_lock:
        return replace(_tracer_config)


@dataclass(frozen=True)
class CallSite:
    file: str
    line: int
    function: str
    module: str
    thread_id: int
    timestamp: int  # microseconds since the epoch

    @classmethod
    def capture(cls, skip: int = 0) -> "CallSite":
        """
        Capture the caller's location.

        Args:
            skip: number of extra frames to skip above the direct caller
        """
        frame = inspect.currentframe().f_back
        for _ in range(skip):
            if frame.f_back is None:
                break
            frame = frame.f_back
        try:
            return cls(
                file=os.path.relpath(frame.f_code.co_filename) if frame.f_code.co_filename else "<unknown>",
                line=frame.f_lineno,
                function=frame.f_code.co_name,
                module=frame.f_globals.get("__name__", "<unknown>"),
                thread_id=threading.get_ident(),
                timestamp=time.time_ns() // 1000,
            )
        finally:
            del frame

    def describe(self, config: Optional[TracerConfiguration] = None) -> str:
        config = config or get_tracer_config()
        if config.format:
            return config.format.format(
                file=self.file,
                line=self.line,
                function=self.function,
                module=self.module,
                thread_id=self.thread_id,
                timestamp=self._timestamp(config),
            )

        parts = []
        location = []
        if config.file_enabled is not False:
            location.append(self.file)
        if config.line_enabled is not False:
            location.append(str(self.line))
        if location:
            parts.append(":".join(location))
        if config.context_enabled:
            parts.append(f"{self.module}.{self.function}")
            parts.append(f"thread {self.thread_id}")
        if config.timestamp_enabled:
            parts.append(self._timestamp(config))
        return " ->> ".join(parts)

    def _timestamp(self, config: TracerConfiguration) -> str:
        if config.timestamp_type == TimestampType.UNIX:
            return str(self.timestamp)
        return current_time(datetime.fromtimestamp(self.timestamp / 1_000_000))
