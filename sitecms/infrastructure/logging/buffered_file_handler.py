"""
Buffered File Handler
=====================

``logging.Handler`` that keeps formatted records in memory and appends them
to a daily log file (``<folder>/<YYYY-MM-DD>.log``).

All writes happen on a background flush thread, which wakes up:
- when the buffer reaches ``buffer_size`` entries
- every ``flush_interval`` seconds (0 disables the timer)

``flush()`` and ``close()`` write synchronously. Logging calls only append
to the buffer and never wait for the disk.

A failed write is retried ``max_retries`` times with a linear back-off. When
every retry fails the entries go back to the front of the buffer; after
repeated failures the buffer is dumped to stderr so records are not lost.
"""
import logging
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple


FALLBACK_AFTER_FAILED_WRITES = 5


@dataclass
class LoggerMetrics:
    """Counters describing what the handler has processed so far."""
    total_logs: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    debug_count: int = 0
    failed_writes: int = 0
    last_flush_time: Optional[datetime] = None
    average_flush_duration: float = 0.0
    flush_count: int = field(default=0, repr=False)

    def record(self, levelno: int) -> None:
        self.total_logs += 1
        if levelno >= logging.ERROR:
            self.error_count += 1
        elif levelno >= logging.WARNING:
            self.warning_count += 1
        elif levelno >= logging.INFO:
            self.info_count += 1
        else:
            self.debug_count += 1

    def record_flush(self, duration: float) -> None:
        self.flush_count += 1
        self.last_flush_time = datetime.now(timezone.utc)
        # running mean over all successful flushes
        self.average_flush_duration += (duration - self.average_flush_duration) / self.flush_count


class BufferedFileHandler(logging.Handler):
    """Buffer log records and append them to a per-day file."""

    def __init__(
        self,
        log_folder: str,
        buffer_size: int = 100,
        flush_interval: float = 5.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")

        self.log_folder = Path(log_folder).resolve()
        self.log_folder.mkdir(parents=True, exist_ok=True)

        self.buffer_size = buffer_size
        self.flush_interval = flush_interval
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.metrics = LoggerMetrics()

        self._buffer: List[Tuple[int, str]] = []
        self._closed = False
        self._write_lock = threading.Lock()
        self._flush_requested = threading.Event()
        self._stop_event = threading.Event()
        self._flush_thread = threading.Thread(
            target=self._run_flush_loop,
            name="buffered-log-flush",
            daemon=True,
        )
        self._flush_thread.start()

    @property
    def pending(self) -> int:
        """Number of entries waiting to be written."""
        return len(self._buffer)

    def current_log_file(self) -> Path:
        """Path of the file the next flush appends to."""
        day = datetime.now(timezone.utc).date().isoformat()
        return self.log_folder / f"{day}.log"

    def emit(self, record: logging.LogRecord) -> None:
        # Runs under the handler lock; the file is only touched by flushes.
        if self._closed:
            return
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return

        self.metrics.record(record.levelno)
        self._buffer.append((record.levelno, line))

        if len(self._buffer) >= self.buffer_size:
            self._flush_requested.set()

    def flush(self) -> None:
        self._flush_buffer()

    def close(self) -> None:
        self._stop_event.set()
        self._flush_requested.set()
        if self._flush_thread is not threading.current_thread():
            self._flush_thread.join(timeout=self._longest_write() + 1)
        self._flush_buffer()
        self._closed = True
        super().close()

    def _longest_write(self) -> float:
        return self.retry_delay * self.max_retries * (self.max_retries + 1) / 2

    def _run_flush_loop(self) -> None:
        timeout = self.flush_interval if self.flush_interval > 0 else None
        while not self._stop_event.is_set():
            self._flush_requested.wait(timeout)
            self._flush_requested.clear()
            if self._stop_event.is_set():
                return
            self._flush_buffer()

    def _take_buffer(self) -> List[Tuple[int, str]]:
        self.acquire()
        try:
            entries = self._buffer
            self._buffer = []
        finally:
            self.release()
        return entries

    def _flush_buffer(self) -> None:
        with self._write_lock:
            entries = self._take_buffer()
            if not entries:
                return

            started = time.monotonic()
            try:
                self._write_entries([line for _, line in entries])
            except OSError as exc:
                self.acquire()
                try:
                    self._buffer[:0] = entries
                    self.metrics.failed_writes += 1
                    failed_writes = self.metrics.failed_writes
                finally:
                    self.release()
                self._handle_flush_error(exc, failed_writes)
            else:
                self.acquire()
                try:
                    self.metrics.record_flush(time.monotonic() - started)
                finally:
                    self.release()

    def _write_entries(self, lines: List[str]) -> None:
        payload = "\n".join(lines) + "\n"
        attempt = 0
        while True:
            try:
                with open(self.current_log_file(), "a", encoding="utf-8") as handle:
                    handle.write(payload)
                return
            except OSError:
                attempt += 1
                if attempt > self.max_retries:
                    raise
                time.sleep(self.retry_delay * attempt)

    def _handle_flush_error(self, error: OSError, failed_writes: int) -> None:
        sys.stderr.write(f"Logger flush error: {error}\n")

        if failed_writes > FALLBACK_AFTER_FAILED_WRITES:
            sys.stderr.write("File logging failing repeatedly, falling back to stderr\n")
            for _, line in self._take_buffer():
                sys.stderr.write(f"[FALLBACK] {line}\n")
