from datetime import datetime, timedelta, timezone

from flowhealth_runtime.domain.common.status import Status
from flowhealth_runtime.domain.flow_health.model import ExecutionSample, RuntimeStatistics
from flowhealth_runtime.domain.flow_health.statistics import compute_statistics, round_half_up

T = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def finished(start_offset_ms: int, duration_ms: int) -> ExecutionSample:
    start = T + timedelta(milliseconds=start_offset_ms)
    return ExecutionSample.new(Status.SUCCEEDED, start_ts=start, end_ts=start + timedelta(milliseconds=duration_ms))


def test_empty_history_is_all_zero():
    assert compute_statistics([]) == RuntimeStatistics(0, 0, 0)


def test_history_without_finished_sample_is_all_zero():
    samples = [
        ExecutionSample.new(Status.RUNNING, start_ts=T),
        ExecutionSample.new(Status.KILLED, start_ts=None, end_ts=None),
    ]
    assert compute_statistics(samples) == RuntimeStatistics(0, 0, 0)


def test_last_average_and_max():
    # most-recent-first
    samples = [finished(3000, 100), finished(2000, 200), finished(1000, 300)]

    stats = compute_statistics(samples)

    assert stats.last_duration_ms == 100
    assert stats.average_duration_ms == 200
    assert stats.max_duration_ms == 300


def test_last_duration_skips_unfinished_leading_samples():
    samples = [ExecutionSample.new(Status.RUNNING, start_ts=T), finished(0, 250), finished(-1000, 50)]

    stats = compute_statistics(samples)

    assert stats.last_duration_ms == 250
    assert stats.average_duration_ms == 150
    assert stats.max_duration_ms == 250


def test_average_rounds_half_up():
    stats = compute_statistics([finished(0, 1), finished(10, 2)])
    assert stats.average_duration_ms == 2

    stats = compute_statistics([finished(0, 1), finished(10, 1), finished(20, 2)])
    assert stats.average_duration_ms == 1


def test_malformed_samples_are_excluded():
    end_before_start = ExecutionSample.new(Status.SUCCEEDED, start_ts=T, end_ts=T - timedelta(seconds=5))
    end_without_start = ExecutionSample.new(Status.SUCCEEDED, start_ts=None, end_ts=T)

    stats = compute_statistics([end_before_start, end_without_start, finished(0, 400)])

    assert stats == RuntimeStatistics(400, 400, 400)


def test_accepts_any_iterable():
    stats = compute_statistics(s for s in [finished(0, 10), finished(10, 30)])
    assert stats == RuntimeStatistics(10, 20, 30)


def test_round_half_up():
    assert round_half_up(20.0) == 20
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
