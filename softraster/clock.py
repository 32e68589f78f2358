"""Wall-clock helpers and time elapsed since the module was loaded."""

from __future__ import annotations

import time

_BOOT_NS = time.perf_counter_ns()


def current_second() -> int:
    """Seconds since the epoch."""
    return int(time.time())


def current_microseconds() -> int:
    """Microseconds since the epoch."""
    return time.time_ns() // 1_000


def current_milliseconds() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def milliseconds_to_seconds(milliseconds: int) -> float:
    """Convert milliseconds to seconds."""
    return milliseconds * 0.001


def microseconds_to_seconds(microseconds: int) -> float:
    """Convert microseconds to seconds."""
    return microseconds * 0.000001


def seconds_to_milliseconds(seconds: float) -> int:
    """Convert seconds to whole milliseconds, truncating."""
    return int(seconds * 1000)


def microseconds_since_boot() -> int:
    """Microseconds elapsed since the application started."""
    return (time.perf_counter_ns() - _BOOT_NS) // 1_000


def milliseconds_since_boot() -> int:
    """Milliseconds elapsed since the application started."""
    return (time.perf_counter_ns() - _BOOT_NS) // 1_000_000


def seconds_since_boot() -> float:
    """Seconds elapsed since the application started."""
    return microseconds_to_seconds(microseconds_since_boot())