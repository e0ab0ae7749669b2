"""
Bounded-wait line input.

A single worker thread performs the blocking line read; callers talk to it
through a request queue and a response queue, so a read can be given up on
after a timeout without joining or interrupting the worker. A line is claimed
by the read waiting when it arrives; lines typed between reads are discarded.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Callable, Optional, Protocol, Tuple


LOGGER = logging.getLogger(__name__)


# CLOCKS

class Clock(Protocol):
    def now(self) -> float:
        """Return monotonic seconds."""
        ...


class MonotonicClock:
    """Adapter clock (real monotonic time)."""

    def now(self) -> float:
        return time.monotonic()


# READER

_STOP = -1


class TimedLineReader:
    """Reads lines from an input source with an optional per-read timeout."""

    def __init__(self, read_line: Callable[[], str] = input) -> None:
        """
        Initialize reader.

        Args:
            read_line: Blocking "read one line" primitive, `input` by default
        """
        self._read_line = read_line
        self._requests: "queue.Queue[int]" = queue.Queue()
        self._responses: "queue.Queue[Tuple[int, Optional[str]]]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._ticket = 0
        self._outstanding = False
        # Ticket of the read currently waiting; None between reads.
        self._lock = threading.Lock()
        self._waiting: Optional[int] = None

    def read(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Read one line, waiting at most `timeout` seconds.

        A line belongs to whichever read is waiting when it arrives. Lines
        that arrived while no read was waiting are late and get discarded.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            The line, or None on timeout or end of input
        """
        self._ensure_worker()
        self._ticket += 1
        ticket = self._ticket
        with self._lock:
            self._waiting = ticket
        try:
            if not self._outstanding:
                self._submit(ticket)
            return self._await(ticket, timeout)
        finally:
            with self._lock:
                self._waiting = None

    def _await(self, ticket: int, timeout: Optional[float]) -> Optional[str]:
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            wait = None
            if deadline is not None:
                wait = deadline - time.monotonic()
                if wait <= 0:
                    return None
            try:
                answered, line = self._responses.get(timeout=wait)
            except queue.Empty:
                LOGGER.debug("Read %d timed out after %ss", ticket, timeout)
                return None

            self._outstanding = False
            if answered == ticket:
                return line
            LOGGER.debug("Discarding late input for abandoned read %d", answered)
            self._submit(ticket)

    def close(self) -> None:
        """Ask an idle worker to exit; a worker blocked on input is left alone."""
        if self._worker is not None and not self._outstanding:
            self._requests.put(_STOP)
            self._worker = None

    def _submit(self, ticket: int) -> None:
        self._outstanding = True
        self._requests.put(ticket)

    def _ensure_worker(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(
            target=self._serve,
            name="timed-line-reader",
            daemon=True,
        )
        self._worker.start()

    def _serve(self) -> None:
        while True:
            ticket = self._requests.get()
            if ticket == _STOP:
                return
            try:
                line: Optional[str] = self._read_line()
            except (EOFError, OSError, ValueError) as exc:
                LOGGER.debug("Input source closed: %r", exc)
                line = None
            with self._lock:
                if self._waiting is not None:
                    ticket = self._waiting
            self._responses.put((ticket, line))
