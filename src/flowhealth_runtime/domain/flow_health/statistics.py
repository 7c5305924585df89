from __future__ import annotations

import math
from typing import Iterable

from flowhealth_runtime.domain.flow_health.model import ExecutionSample, RuntimeStatistics


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_statistics(samples: Iterable[ExecutionSample]) -> RuntimeStatistics:
    """
    Compute last/average/max run time over the finished samples.

    ``samples`` is expected most-recent-first: the last duration is taken from
    the first finished sample in that order. Samples without both a start and
    an end are ignored. With no finished sample every value is 0.
    """
    durations = [s.duration_ms for s in samples if s.is_finished]
    if not durations:
        return RuntimeStatistics()

    return RuntimeStatistics(
        last_duration_ms=durations[0],
        average_duration_ms=round_half_up(sum(durations) / len(durations)),
        max_duration_ms=max(durations),
    )
