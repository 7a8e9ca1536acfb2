"""
Unit tests for tracer.py
"""

import threading
from datetime import datetime

from dailylog.core.tracer import (
    CallSite,
    TimestampType,
    TracerConfiguration,
    get_tracer_config,
    set_tracer_config,
)

SITE = CallSite(
    file="app/cache.py",
    line=42,
    function="lookup",
    module="app.cache",
    thread_id=1403,
    timestamp=1_792_318_530_123_456,
)


def capture_from_helper():
    return CallSite.capture(skip=1)


class TestCallSite:
    def test_capture_direct_caller(self):
        site = CallSite.capture()

        assert site.function == "test_capture_direct_caller"
        assert site.module == __name__
        assert site.file.endswith("test_tracer.py")
        assert site.thread_id == threading.get_ident()

    def test_capture_skips_frames(self):
        site = capture_from_helper()

        assert site.function == "test_capture_skips_frames"

    def test_default_description(self):
        assert SITE.describe(TracerConfiguration()) == "app/cache.py:42"

    def test_full_description(self):
        config = TracerConfiguration(context_enabled=True, timestamp_enabled=True, timestamp_type=TimestampType.UNIX)

        assert SITE.describe(config) == "app/cache.py:42 ->> app.cache.lookup ->> thread 1403 ->> 1792318530123456"

    def test_chrono_timestamp(self):
        config = TracerConfiguration(file_enabled=False, line_enabled=False, timestamp_enabled=True)
        expected = datetime.fromtimestamp(SITE.timestamp / 1_000_000).strftime("%Y-%m-%d %H:%M:%S")

        assert SITE.describe(config) == expected

    def test_everything_disabled(self):
        assert SITE.describe(TracerConfiguration(file_enabled=False, line_enabled=False)) == ""

    def test_custom_format(self):
        config = TracerConfiguration(format="{module}:{line} ({thread_id})", timestamp_type=TimestampType.UNIX)

        assert SITE.describe(config) == "app.cache:42 (1403)"


class TestTracerConfig:
    def test_default(self):
        assert get_tracer_config() == TracerConfiguration()

    def test_set_and_get(self):
        config = TracerConfiguration(context_enabled=True)

        set_tracer_config(config)

        assert get_tracer_config() == config

    def test_describe_uses_process_config(self):
        set_tracer_config(TracerConfiguration(line_enabled=False))

        assert SITE.describe() == "app/cache.py"

    def test_trace_with_explicit_config(self, facility, capsys):
        facility.trace("loaded %d", 3, config=TracerConfiguration(file_enabled=False, line_enabled=False))

        assert capsys.readouterr().out == "2026-10-18 12:30:00 [TRACE] loaded 3\n"
