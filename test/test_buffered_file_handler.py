"""Tests for the buffered daily log file handler."""
import builtins
import logging
import threading
import time

import pytest

from sitecms.core.log_config import parse_log_level
from sitecms.infrastructure.logging import buffered_file_handler
from sitecms.infrastructure.logging.buffered_file_handler import BufferedFileHandler


def wait_until(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not condition():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.01)
    return True


def make_handler(tmp_path, **options):
    values = dict(buffer_size=3, flush_interval=0, retry_delay=0)
    values.update(options)
    handler = BufferedFileHandler(str(tmp_path / "logs"), **values)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    return handler


def failing_open(failures):
    """Replacement for ``open`` that raises for the first ``failures`` calls."""
    calls = []

    def fake_open(*args, **kwargs):
        calls.append(args[0])
        if failures is None or len(calls) <= failures:
            raise OSError("disk full")
        return builtins.open(*args, **kwargs)

    fake_open.calls = calls
    return fake_open


@pytest.fixture
def handler(tmp_path):
    handler = make_handler(tmp_path)
    yield handler
    handler.close()


@pytest.fixture
def logger(handler):
    logger = logging.getLogger("sitecms.test.buffered")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    yield logger
    logger.removeHandler(handler)


def read_lines(handler):
    return handler.current_log_file().read_text(encoding="utf-8").splitlines()


# =============================================================================
# Buffering
# =============================================================================


def test_entries_stay_buffered_until_buffer_is_full(handler, logger):
    logger.info("first")
    logger.info("second")

    assert handler.pending == 2
    assert not handler.current_log_file().exists()

    logger.warning("third")

    assert wait_until(lambda: handler.metrics.flush_count == 1)
    assert handler.pending == 0
    assert read_lines(handler) == ["INFO first", "INFO second", "WARNING third"]


def test_emit_does_not_wait_for_the_disk(handler, logger, monkeypatch):
    writing = threading.Event()
    release = threading.Event()
    written = []

    def slow_write(lines):
        writing.set()
        release.wait(2)
        written.extend(lines)

    monkeypatch.setattr(handler, "_write_entries", slow_write)
    for index in range(3):
        logger.info("line %d", index)
    assert writing.wait(2)

    started = time.monotonic()
    logger.info("while writing")
    assert time.monotonic() - started < 0.5
    assert handler.pending == 1

    release.set()
    assert wait_until(lambda: len(written) == 3)


def test_close_flushes_remaining_entries(handler, logger):
    logger.error("boom")
    handler.close()

    assert handler.current_log_file().read_text(encoding="utf-8") == "ERROR boom\n"

    logger.error("after close")
    assert handler.pending == 0


def test_periodic_flush(tmp_path):
    handler = make_handler(tmp_path, buffer_size=100, flush_interval=0.05)
    try:
        handler.handle(logging.makeLogRecord({"msg": "tick", "levelno": logging.INFO, "levelname": "INFO"}))

        assert wait_until(lambda: handler.metrics.flush_count == 1)
        assert read_lines(handler) == ["INFO tick"]
    finally:
        handler.close()


def test_daily_file_name(handler):
    path = handler.current_log_file()
    assert path.parent == handler.log_folder
    assert path.suffix == ".log"
    assert len(path.stem) == len("2026-01-01")


def test_metrics_count_levels_and_flushes(handler, logger):
    logger.debug("d")
    logger.info("i")
    logger.warning("w")
    assert wait_until(lambda: handler.metrics.flush_count == 1)
    logger.error("e")
    handler.flush()

    metrics = handler.metrics
    assert metrics.total_logs == 4
    assert (metrics.debug_count, metrics.info_count, metrics.warning_count, metrics.error_count) == (1, 1, 1, 1)
    assert metrics.flush_count == 2
    assert metrics.last_flush_time is not None
    assert metrics.failed_writes == 0


# =============================================================================
# Write failures
# =============================================================================


def test_failed_write_keeps_entries(handler, logger, monkeypatch, capsys):
    def fail(lines):
        raise OSError("disk full")

    monkeypatch.setattr(handler, "_write_entries", fail)
    logger.info("one")
    handler.flush()

    assert handler.pending == 1
    assert handler.metrics.failed_writes == 1
    assert "disk full" in capsys.readouterr().err


def test_write_is_retried_with_linear_back_off(handler, logger, monkeypatch):
    fake_open = failing_open(2)
    delays = []
    monkeypatch.setattr(buffered_file_handler, "open", fake_open, raising=False)
    monkeypatch.setattr(buffered_file_handler.time, "sleep", delays.append)
    handler.retry_delay = 0.5

    logger.info("eventually written")
    handler.flush()

    assert len(fake_open.calls) == 3
    assert delays == [0.5, 1.0]
    assert handler.pending == 0
    assert handler.metrics.failed_writes == 0
    assert read_lines(handler) == ["INFO eventually written"]


def test_write_fails_after_max_retries(handler, logger, monkeypatch):
    fake_open = failing_open(None)
    monkeypatch.setattr(buffered_file_handler, "open", fake_open, raising=False)

    logger.info("lost disk")
    handler.flush()

    assert len(fake_open.calls) == handler.max_retries + 1
    assert handler.pending == 1
    assert handler.metrics.failed_writes == 1


def test_repeated_failures_fall_back_to_stderr(handler, logger, monkeypatch, capsys):
    monkeypatch.setattr(buffered_file_handler, "open", failing_open(None), raising=False)
    logger.info("kept in memory")

    for _ in range(buffered_file_handler.FALLBACK_AFTER_FAILED_WRITES):
        handler.flush()
    assert handler.pending == 1
    assert "[FALLBACK]" not in capsys.readouterr().err

    handler.flush()

    err = capsys.readouterr().err
    assert "[FALLBACK] INFO kept in memory" in err
    assert handler.pending == 0
    assert handler.metrics.failed_writes == buffered_file_handler.FALLBACK_AFTER_FAILED_WRITES + 1


def test_buffer_size_must_be_positive(tmp_path):
    with pytest.raises(ValueError):
        BufferedFileHandler(str(tmp_path), buffer_size=0, flush_interval=0)


@pytest.mark.parametrize("value, expected", [
    ("debug", logging.DEBUG),
    ("WARN", logging.WARNING),
    ("error", logging.ERROR),
    ("verbose", logging.INFO),
])
def test_parse_log_level(value, expected):
    assert parse_log_level(value) == expected
