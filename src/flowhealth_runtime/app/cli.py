from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from typing import Optional

from flowhealth_runtime.app.api.models.flow_health import FlowHealthReport
from flowhealth_runtime.app.factory import create_adapters
from flowhealth_runtime.application.errors import (
    FixtureValidationError,
    InvalidEvaluationParameters,
    UpstreamDataError,
)
from flowhealth_runtime.application.health_check import FlowHealthService
from flowhealth_runtime.domain.common.ids import CorrelationId, ScheduleId
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.observability.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_HEALTHY = 0
EXIT_UNHEALTHY = 1
EXIT_ERROR = 2


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scheduled flow health check")
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser("check", help="Evaluate every scheduled flow once")
    check_parser.add_argument("--limit", type=int, help="Number of past successful runs to consider")
    check_parser.add_argument(
        "--percentage-from-average",
        type=float,
        dest="percentage_from_average",
        help="Slack on top of the max runtime, as a fraction of the average runtime",
    )
    check_parser.add_argument("--now", help="Evaluation instant (ISO 8601, timezone-aware)")
    check_parser.add_argument("--schedule-id", dest="schedule_id")
    check_parser.add_argument("--correlation-id", dest="correlation_id")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    # stdout carries the JSON report
    configure_logging(stream=sys.stderr)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command != "check":
        parser.print_help()
        return EXIT_ERROR

    try:
        params = EvaluationParameters.from_args(
            limit=args.limit,
            percentage_from_average=args.percentage_from_average,
            now=parse_datetime(args.now),
        )
        schedule_repo, history_repo = create_adapters(correlation_id=args.correlation_id)
        service = FlowHealthService(schedule_repo, history_repo)
        result = service.check(
            params,
            schedule_id=ScheduleId(args.schedule_id) if args.schedule_id else None,
            correlation_id=CorrelationId(args.correlation_id) if args.correlation_id else None,
        )
    except (InvalidEvaluationParameters, FixtureValidationError, UpstreamDataError, ValueError) as e:
        logger.error(f"Flow health check failed: {e}")
        return EXIT_ERROR

    print(FlowHealthReport.from_result(result, params).model_dump_json(indent=2))
    return EXIT_HEALTHY if result.all_healthy else EXIT_UNHEALTHY


if __name__ == "__main__":
    sys.exit(main())
