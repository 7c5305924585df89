import json
from datetime import datetime, timezone

import pytest

from flowhealth_runtime.adapters.file.json_fixture_store import create_file_repositories, load_fixtures
from flowhealth_runtime.application.errors import FixtureValidationError
from flowhealth_runtime.domain.common.ids import FlowRef, ProjectId, ScheduleId
from flowhealth_runtime.domain.common.status import Status

# 2024-01-10T12:00:00Z in epoch milliseconds
T_MS = 1704888000000

DOCUMENT = {
    "triggers": [
        {
            "trigger_id": 1,
            "schedule_id": "daily",
            "next_check_time": T_MS + 3_600_000,
            "actions": [{"type": "execute_flow", "project_id": 3, "flow_name": "etl"}],
        },
        {
            "trigger_id": 2,
            "schedule_id": "daily",
            "next_check_time": -1,
            "actions": [
                {"type": "email", "to": "ops@example.com"},
                {"type": "execute_flow", "project_id": 3, "flow_name": "report"},
            ],
        },
        {
            "trigger_id": 3,
            "schedule_id": "alerts",
            "actions": [{"type": "email", "to": "ops@example.com"}],
        },
    ],
    "executions": [
        {"exec_id": 10, "project_id": 3, "flow_name": "etl", "status": "SUCCEEDED", "start_time": T_MS - 86_400_000, "end_time": T_MS - 86_100_000},
        {"exec_id": 11, "project_id": 3, "flow_name": "etl", "status": 30, "start_time": T_MS - 60_000, "end_time": -1},
        {"exec_id": 12, "project_id": 3, "flow_name": "report", "status": "failed", "start_time": "2024-01-10T11:00:00Z", "end_time": "2024-01-10T11:05:00Z"},
    ],
}


@pytest.fixture
def fixtures_file(tmp_path):
    path = tmp_path / "fixtures.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


def test_only_execute_flow_actions_become_scheduled_flows(fixtures_file):
    schedule_repo, _ = create_file_repositories(fixtures_file)

    flows = list(schedule_repo.list_scheduled_flows())

    assert [f.flow.flow_name for f in flows] == ["etl", "report"]
    assert flows[0].next_check_ts == datetime(2024, 1, 10, 13, 0, tzinfo=timezone.utc)
    assert flows[1].next_check_ts is None


def test_schedule_filter(fixtures_file):
    schedule_repo, _ = create_file_repositories(fixtures_file)

    assert list(schedule_repo.list_scheduled_flows(ScheduleId("alerts"))) == []


def test_executions_are_most_recent_first(fixtures_file):
    _, history_repo = create_file_repositories(fixtures_file)
    etl = FlowRef(project_id=ProjectId(3), flow_name="etl")

    latest = history_repo.fetch_latest_execution(etl)
    successes = history_repo.fetch_recent_successes(etl, limit=30)

    assert latest.exec_id == 11
    assert latest.status is Status.RUNNING
    assert latest.end_ts is None
    assert [s.exec_id for s in successes] == [10]
    assert successes[0].duration_ms == 300_000


def test_iso_timestamps_are_parsed(fixtures_file):
    _, history_repo = create_file_repositories(fixtures_file)

    latest = history_repo.fetch_latest_execution(FlowRef(project_id=ProjectId(3), flow_name="report"))

    assert latest.status is Status.FAILED
    assert latest.start_ts == datetime(2024, 1, 10, 11, 0, tzinfo=timezone.utc)


def test_schema_violation_is_rejected(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"triggers": [{"trigger_id": 1, "actions": [{"type": "execute_flow"}]}], "executions": []}))

    with pytest.raises(FixtureValidationError, match="Validation error"):
        load_fixtures(path)


def test_invalid_json_is_rejected(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(FixtureValidationError, match="Invalid JSON"):
        load_fixtures(path)


def test_unknown_status_is_rejected(tmp_path):
    document = {
        "triggers": [],
        "executions": [{"exec_id": 1, "project_id": 1, "flow_name": "x", "status": "EXPLODED"}],
    }
    path = tmp_path / "status.json"
    path.write_text(json.dumps(document))

    with pytest.raises(FixtureValidationError, match="Unknown execution status"):
        create_file_repositories(path)
