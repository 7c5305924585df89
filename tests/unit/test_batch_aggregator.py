from datetime import datetime, timedelta, timezone

from flowhealth_runtime.domain.common.ids import FlowRef, ProjectId
from flowhealth_runtime.domain.common.status import Status
from flowhealth_runtime.domain.flow_health.aggregator import evaluate_all
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.model import ExecutionSample, FlowHistory

T = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def flow(name: str) -> FlowRef:
    return FlowRef(project_id=ProjectId(1), flow_name=name)


def ms_history(*durations: int) -> tuple[ExecutionSample, ...]:
    samples = []
    for i, duration in enumerate(durations):
        start = T - timedelta(days=i + 1)
        samples.append(
            ExecutionSample.new(Status.SUCCEEDED, start_ts=start, end_ts=start + timedelta(milliseconds=duration))
        )
    return tuple(samples)


def test_empty_batch_is_vacuously_healthy():
    result = evaluate_all([], EvaluationParameters(now=T))

    assert result.records == ()
    assert result.all_healthy is True
    assert result.evaluated_at == T


def test_never_executed_flows_are_dropped_and_order_preserved():
    histories = [
        FlowHistory(flow=flow("b"), latest=ExecutionSample.new(Status.SUCCEEDED, T, T)),
        FlowHistory(flow=flow("never"), latest=None),
        FlowHistory(flow=flow("a"), latest=ExecutionSample.new(Status.SUCCEEDED, T, T)),
    ]

    result = evaluate_all(histories, EvaluationParameters(now=T))

    assert [r.flow_name for r in result.records] == ["b", "a"]
    assert result.all_healthy is True


def test_all_healthy_is_and_of_records():
    histories = [
        FlowHistory(flow=flow("ok"), latest=ExecutionSample.new(Status.SUCCEEDED, T, T)),
        FlowHistory(flow=flow("broken"), latest=ExecutionSample.new(Status.FAILED, T, T)),
    ]

    result = evaluate_all(histories, EvaluationParameters(now=T))

    assert result.all_healthy is False
    assert result.all_healthy == all(r.healthy for r in result.records)


def test_deadline_scenario_with_shared_snapshot():
    # 100/200/300ms history: deadline = start + 300 + round(200 * 0.1) = start + 320
    start = T
    running = ExecutionSample.new(Status.RUNNING, start_ts=start)
    histories = [FlowHistory(flow=flow("etl"), latest=running, recent_successes=ms_history(100, 200, 300))]

    early = evaluate_all(histories, EvaluationParameters(now=start + timedelta(milliseconds=319), tolerance_fraction=0.1))
    late = evaluate_all(histories, EvaluationParameters(now=start + timedelta(milliseconds=321), tolerance_fraction=0.1))

    assert early.records[0].statistics.average_duration_ms == 200
    assert early.records[0].statistics.max_duration_ms == 300
    assert early.all_healthy is True
    assert late.all_healthy is False
