"""End-to-end tests for the ``flowhealth check`` command using the JSON file adapters."""

from __future__ import annotations

import json

import pytest

from flowhealth_runtime.app import cli
from flowhealth_runtime.settings import Settings

# 2024-01-10T12:00:00Z in epoch milliseconds
T_MS = 1704888000000


def write_fixtures(tmp_path, latest_status: str, latest_end: int) -> str:
    document = {
        "triggers": [
            {
                "trigger_id": 1,
                "schedule_id": "daily",
                "next_check_time": T_MS + 86_400_000,
                "actions": [{"type": "execute_flow", "project_id": 1, "flow_name": "etl"}],
            }
        ],
        "executions": [
            {"exec_id": 1, "project_id": 1, "flow_name": "etl", "status": "SUCCEEDED", "start_time": T_MS - 3 * 86_400_000, "end_time": T_MS - 3 * 86_400_000 + 100},
            {"exec_id": 2, "project_id": 1, "flow_name": "etl", "status": "SUCCEEDED", "start_time": T_MS - 2 * 86_400_000, "end_time": T_MS - 2 * 86_400_000 + 200},
            {"exec_id": 3, "project_id": 1, "flow_name": "etl", "status": "SUCCEEDED", "start_time": T_MS - 86_400_000, "end_time": T_MS - 86_400_000 + 300},
            {"exec_id": 4, "project_id": 1, "flow_name": "etl", "status": latest_status, "start_time": T_MS, "end_time": latest_end},
        ],
    }
    path = tmp_path / "fixtures.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


@pytest.fixture
def use_fixtures(monkeypatch):
    def _use(path: str) -> None:
        monkeypatch.setenv("RUNTIME_ADAPTERS", "file")
        monkeypatch.setattr("flowhealth_runtime.app.factory.get_settings", lambda: Settings(fixtures_path=path))

    return _use


def test_running_within_deadline_exits_zero(tmp_path, use_fixtures, capsys):
    use_fixtures(write_fixtures(tmp_path, "RUNNING", -1))

    exit_code = cli.main(["check", "--now", "2024-01-10T12:00:00.319Z", "--percentage-from-average", "0.1"])

    assert exit_code == cli.EXIT_HEALTHY
    out = capsys.readouterr().out
    report = json.loads(out)
    assert report["all_healthy"] is True
    assert report["flows"][0]["average_succeeded_runtime_ms"] == 200
    assert report["flows"][0]["max_succeeded_runtime_ms"] == 300
    assert report["flows"][0]["next_execution_time"] == "2024-01-11 12:00:00"


def test_running_past_deadline_exits_one(tmp_path, use_fixtures, capsys):
    use_fixtures(write_fixtures(tmp_path, "RUNNING", -1))

    exit_code = cli.main(["check", "--now", "2024-01-10T12:00:00.321Z"])

    assert exit_code == cli.EXIT_UNHEALTHY


def test_invalid_limit_exits_two(tmp_path, use_fixtures):
    use_fixtures(write_fixtures(tmp_path, "SUCCEEDED", T_MS + 10))

    assert cli.main(["check", "--limit", "0"]) == cli.EXIT_ERROR


def test_missing_command_prints_help():
    assert cli.main([]) == cli.EXIT_ERROR
