"""
Unit tests for router.py

Tests routing per output level, file failure reporting
and rotation of the dated log file.
"""

import os
import time

import click
import pytest

from dailylog.core.router import LogRecord, SinkRouter
from dailylog.core.store import OutputLevel, RotationPolicy
from tests.helpers.log_helpers import FIXED_LOG_NAME, FIXED_TIMESTAMP, fixed_clock, read_lines


@pytest.fixture
def router(store):
    return SinkRouter(store, clock=fixed_clock)


def record(level_tag, message):
    return LogRecord(level_tag, FIXED_TIMESTAMP, f"[{level_tag}] {message}")


class TestLogFilePath:
    def test_current_directory_by_default(self, router):
        assert str(router.log_file_path()) == FIXED_LOG_NAME

    def test_in_directory(self, router, log_dir):
        assert router.log_file_path(log_dir) == log_dir / FIXED_LOG_NAME


class TestRouting:
    @pytest.mark.parametrize("level_tag", ["INFO", "DEBUG", "TRACE"])
    def test_console_stdout_levels(self, router, capsys, level_tag):
        router.route(record(level_tag, "hello"))

        captured = capsys.readouterr()
        assert captured.out == f"{FIXED_TIMESTAMP} [{level_tag}] hello\n"
        assert captured.err == ""

    @pytest.mark.parametrize("level_tag", ["ERROR", "WARN"])
    def test_console_stderr_levels(self, router, capsys, level_tag):
        router.route(record(level_tag, "hello"))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == f"{FIXED_TIMESTAMP} [{level_tag}] hello\n"

    def test_console_does_not_touch_files(self, router, store, log_dir, capsys):
        store.set_directory(log_dir)

        router.route(record("INFO", "hello"))

        assert list(log_dir.iterdir()) == []

    def test_file_only(self, router, store, log_dir, capsys):
        store.set_level(OutputLevel.FILE)
        store.set_directory(log_dir)

        router.route(record("ERROR", "disk full"))

        captured = capsys.readouterr()
        assert captured.out == captured.err == ""
        assert read_lines(log_dir / FIXED_LOG_NAME) == [f"{FIXED_TIMESTAMP} [ERROR] disk full"]

    def test_both(self, router, store, log_dir, capsys):
        store.set_level(OutputLevel.BOTH)
        store.set_directory(log_dir)

        router.route(record("INFO", "hello"))

        assert capsys.readouterr().out == f"{FIXED_TIMESTAMP} [INFO] hello\n"
        assert read_lines(log_dir / FIXED_LOG_NAME) == [f"{FIXED_TIMESTAMP} [INFO] hello"]

    def test_file_in_current_directory(self, router, store, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        store.set_level(OutputLevel.FILE)

        router.route(record("INFO", "hello"))

        assert read_lines(tmp_path / FIXED_LOG_NAME) == [f"{FIXED_TIMESTAMP} [INFO] hello"]

    def test_file_records_are_unstyled(self, router, store, log_dir):
        store.set_level(OutputLevel.FILE)
        store.set_directory(log_dir)

        router.route(LogRecord("ERROR", FIXED_TIMESTAMP, click.style("[ERROR] red", fg="red")))

        content = (log_dir / FIXED_LOG_NAME).read_text(encoding="utf-8")
        assert content == f"{FIXED_TIMESTAMP} [ERROR] red\n"

    def test_level_is_read_once_per_record(self, router, store, log_dir, mocker):
        store.set_level(OutputLevel.BOTH)
        store.set_directory(log_dir)
        get_level = mocker.spy(store, "get_level")

        router.route(record("INFO", "hello"))

        assert get_level.call_count == 1


class TestFileFailures:
    def test_unencodable_message_is_written_escaped(self, router, store, log_dir, capsys):
        store.set_level(OutputLevel.FILE)
        store.set_directory(log_dir)

        router.route(record("INFO", "bad name \udcff"))

        assert read_lines(log_dir / FIXED_LOG_NAME) == [f"{FIXED_TIMESTAMP} [INFO] bad name \\udcff"]
        assert capsys.readouterr().err == ""

    def test_unencodable_message_on_both(self, router, store, log_dir, capsys):
        store.set_level(OutputLevel.BOTH)
        store.set_directory(log_dir)

        router.route(record("WARN", "bad name \udcff"))

        assert capsys.readouterr().err == f"{FIXED_TIMESTAMP} [WARN] bad name \\udcff\n"
        assert read_lines(log_dir / FIXED_LOG_NAME) == [f"{FIXED_TIMESTAMP} [WARN] bad name \\udcff"]

    def test_file_failure_is_reported_with_record(self, router, store, tmp_path, capsys):
        store.set_level(OutputLevel.FILE)
        store.set_directory(tmp_path / "missing")

        router.route(record("INFO", "not lost"))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Failed to write to log file:" in captured.err
        assert f"{FIXED_TIMESTAMP} [INFO] not lost" in captured.err

    def test_file_failure_with_both_reports_once(self, router, store, tmp_path, capsys):
        store.set_level(OutputLevel.BOTH)
        store.set_directory(tmp_path / "missing")

        router.route(record("INFO", "shown"))

        captured = capsys.readouterr()
        assert captured.out == f"{FIXED_TIMESTAMP} [INFO] shown\n"
        assert "Failed to write to log file:" in captured.err
        assert "shown" not in captured.err

    def test_rotation_failure_is_reported(self, router, store, log_dir, capsys, mocker):
        store.set_level(OutputLevel.FILE)
        store.install(log_dir, RotationPolicy.create(log_dir, 1, 3600))
        (log_dir / FIXED_LOG_NAME).write_text("too big\n")
        mocker.patch("dailylog.core.router.rotate_if_needed", side_effect=PermissionError("denied"))

        router.route(record("INFO", "after"))

        assert "Failed to write to log file: denied" in capsys.readouterr().err


class TestRotation:
    @pytest.fixture
    def file_store(self, store, log_dir):
        store.set_level(OutputLevel.FILE)
        return store

    def test_size_rotation(self, router, file_store, log_dir):
        file_store.install(log_dir, RotationPolicy.create(log_dir, 100, 3600))
        log_file = log_dir / FIXED_LOG_NAME

        written = []
        i = 0
        while not log_file.exists() or log_file.stat().st_size <= 100:
            router.route(record("INFO", f"record {i}"))
            written.append(f"{FIXED_TIMESTAMP} [INFO] record {i}")
            i += 1
        router.route(record("INFO", "after rotation"))

        assert read_lines(log_dir / "2026-10-18_rot-1.log") == written
        assert read_lines(log_file) == [f"{FIXED_TIMESTAMP} [INFO] after rotation"]

    def test_age_rotation_under_size_limit(self, router, file_store, log_dir):
        file_store.install(log_dir, RotationPolicy.create(log_dir, 1024 * 1024, 60))
        log_file = log_dir / FIXED_LOG_NAME
        router.route(record("INFO", "old record"))
        old = time.time() - 120
        os.utime(log_file, (old, old))

        router.route(record("INFO", "new record"))

        assert read_lines(log_dir / "2026-10-18_rot-1.log") == [f"{FIXED_TIMESTAMP} [INFO] old record"]
        assert read_lines(log_file) == [f"{FIXED_TIMESTAMP} [INFO] new record"]

    def test_rotating_twice_keeps_first_rotation(self, router, file_store, log_dir):
        file_store.install(log_dir, RotationPolicy.create(log_dir, 10, 3600))

        router.route(record("INFO", "first"))
        router.route(record("INFO", "second"))
        router.route(record("INFO", "third"))

        assert read_lines(log_dir / "2026-10-18_rot-1.log") == [f"{FIXED_TIMESTAMP} [INFO] first"]
        assert read_lines(log_dir / "2026-10-18_rot-2.log") == [f"{FIXED_TIMESTAMP} [INFO] second"]
        assert read_lines(log_dir / FIXED_LOG_NAME) == [f"{FIXED_TIMESTAMP} [INFO] third"]

    def test_no_policy_never_rotates(self, router, file_store, log_dir):
        file_store.set_directory(log_dir)

        for i in range(50):
            router.route(record("INFO", f"record {i}"))

        assert [path.name for path in log_dir.iterdir()] == [FIXED_LOG_NAME]
        assert len(read_lines(log_dir / FIXED_LOG_NAME)) == 50
