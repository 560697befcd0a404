"""Lightweight profiling: wall-clock timers.

Provides:
    - timer(): Context manager for wall-clock timing with optional sink
    - TimerAccumulator: Repeated measurements (e.g., per subdivision round)

Used to measure:
    - Full fractal render (driver loop + polygon fills)
    - Individual subdivision rounds
    - Image save

No heavy dependencies (no line_profiler, no cProfile overhead).
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds)
        If None, logs at INFO on this module's logger

    Yields
    ------
    None

    Examples
    --------
    >>> with timer("render"):
    ...     stats = driver.run()
    render: 0.012 s

    >>> timings = {}
    >>> with timer("save", sink=timings.__setitem__):
    ...     sink.save("fractal.png")
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            logger.info(f"{name}: {elapsed:.3f} s")


class TimerAccumulator:
    """Accumulate multiple timing measurements for averaging.

    Attributes
    ----------
    name : str
        Timer name
    total_time : float
        Accumulated time in seconds
    count : int
        Number of measurements

    Examples
    --------
    >>> round_timer = TimerAccumulator("round")
    >>> while driver.state is DriverState.RUNNING:
    ...     with round_timer.measure():
    ...         driver.step()
    >>> print(f"Mean: {round_timer.mean():.4f} s")
    """

    def __init__(self, name: str):
        self.name = name
        self.total_time = 0.0
        self.count = 0

    @contextmanager
    def measure(self):
        """Context manager to measure and accumulate time."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.total_time += elapsed
            self.count += 1

    def mean(self) -> float:
        """Mean time per measurement in seconds, or 0.0 if none."""
        return self.total_time / self.count if self.count > 0 else 0.0

    def reset(self) -> None:
        """Reset accumulated data."""
        self.total_time = 0.0
        self.count = 0

    def __repr__(self) -> str:
        return f"TimerAccumulator({self.name}, mean={self.mean():.4f}s, count={self.count})"
