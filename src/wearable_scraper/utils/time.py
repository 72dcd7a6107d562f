"""Time utilities."""

from __future__ import annotations

import time

SECONDS_PER_HOUR = 60 * 60


def current_time_ms() -> int:
    return int(time.time() * 1000)


def elapsed_ms(start_time_ms: int) -> int:
    return max(0, current_time_ms() - start_time_ms)


def hours_to_seconds(hours: float) -> float:
    return float(hours) * SECONDS_PER_HOUR
