"""Progress reporting for multi-threaded renders.

Render workers must never wait on the progress display. Each worker thread
bumps its own counter with ``increase``; a daemon reporter thread polls the
counters at a fixed interval and forwards the sum to a tqdm bar. Stopping the
observer ends the polling and closes the bar but never touches the rendered
pixels.

Example:
    >>> from pathtracer.core.progress import ProgressObserver
    >>> with ProgressObserver(total=width * height) as progress:
    ...     for pixel in pixels:
    ...         shade(pixel)
    ...         progress.increase(1)
"""

from __future__ import annotations

import threading
from types import TracebackType

from tqdm import tqdm

# Seconds between two refreshes of the progress bar
POLL_INTERVAL = 0.25


class ProgressObserver:
    """Aggregate per-thread progress counters into a tqdm bar.

    Attributes:
        total: The amount of work expected (usually the pixel count).
    """

    def __init__(
        self,
        total: int,
        *,
        enabled: bool = True,
        desc: str = "Rendering",
        interval: float = POLL_INTERVAL,
    ) -> None:
        """Initialize the observer without starting the reporter thread.

        Args:
            total: The amount of work expected.
            enabled: Whether to draw a progress bar. Counting still happens
                when disabled.
            desc: Label shown in front of the bar.
            interval: Seconds between polls of the counters.
        """
        self.total = total
        self._enabled = enabled
        self._desc = desc
        self._interval = interval
        # One counter per worker thread; each thread only updates its own key.
        # Keys are inserted and the dict is read only under the lock.
        self._counts: dict[int, int] = {}
        self._counts_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._bar: tqdm | None = None

    @property
    def completed(self) -> int:
        """Sum of all counters at the time of the call."""
        with self._counts_lock:
            counts = list(self._counts.values())
        return sum(counts)

    def increase(self, amount: int = 1) -> None:
        """Add completed work for the calling thread."""
        ident = threading.get_ident()
        if ident not in self._counts:
            with self._counts_lock:
                self._counts[ident] = 0
        self._counts[ident] += amount

    def start(self) -> ProgressObserver:
        """Start the reporter thread. Calling start twice is a no-op."""
        if self._thread is not None:
            return self
        self._bar = tqdm(total=self.total, desc=self._desc, unit="px", disable=not self._enabled)
        self._thread = threading.Thread(target=self._poll, name="progress-observer", daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        """Stop polling, flush the final count and close the bar."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None
        if self._bar is not None:
            self._refresh()
            self._bar.close()
            self._bar = None

    def _poll(self) -> None:
        while not self._stop_event.wait(self._interval):
            self._refresh()

    def _refresh(self) -> None:
        bar = self._bar
        if bar is None:
            return
        done = min(self.completed, self.total)
        if done > bar.n:
            bar.update(done - bar.n)

    def __enter__(self) -> ProgressObserver:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"ProgressObserver({self.completed}/{self.total})"
