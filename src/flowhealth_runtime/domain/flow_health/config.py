from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from flowhealth_runtime.application.errors import InvalidEvaluationParameters
from flowhealth_runtime.domain.flow_health import rules
from flowhealth_runtime.settings import Settings, get_settings


@dataclass(frozen=True)
class EvaluationParameters:
    history_limit: int = 30
    tolerance_fraction: float = 0.1
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    zero_history_policy: str = rules.ZERO_HISTORY_OVERDUE

    def __post_init__(self) -> None:
        if isinstance(self.history_limit, bool) or not isinstance(self.history_limit, int):
            raise InvalidEvaluationParameters(f"history_limit must be an integer, got {self.history_limit!r}")
        if self.history_limit <= 0:
            raise InvalidEvaluationParameters(f"history_limit must be positive, got {self.history_limit}")
        if not math.isfinite(self.tolerance_fraction) or self.tolerance_fraction < 0:
            raise InvalidEvaluationParameters(
                f"tolerance_fraction must be a non-negative number, got {self.tolerance_fraction}"
            )
        if self.now.tzinfo is None:
            raise InvalidEvaluationParameters("now must be timezone-aware")
        if self.zero_history_policy not in rules.ZERO_HISTORY_POLICIES:
            raise InvalidEvaluationParameters(
                f"zero_history_policy must be one of {', '.join(rules.ZERO_HISTORY_POLICIES)}, "
                f"got {self.zero_history_policy!r}"
            )

    @classmethod
    def from_args(
        cls,
        limit: Optional[int] = None,
        percentage_from_average: Optional[float] = None,
        now: Optional[datetime] = None,
        settings: Optional[Settings] = None,
    ) -> "EvaluationParameters":
        """Build parameters from the external ``limit`` / ``percentageFromAverage`` surface."""
        settings = settings or get_settings()
        return cls(
            history_limit=limit if limit is not None else settings.default_history_limit,
            tolerance_fraction=float(
                percentage_from_average if percentage_from_average is not None else settings.default_tolerance_fraction
            ),
            now=now or datetime.now(timezone.utc),
            zero_history_policy=settings.zero_history_policy,
        )
