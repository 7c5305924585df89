from __future__ import annotations

from typing import Optional

from flowhealth_runtime.domain.common.ids import FlowRef


class InvalidEvaluationParameters(ValueError):
    pass


class UpstreamDataError(Exception):
    """Raised when the schedule or execution history store cannot be read."""

    def __init__(self, message: str, flow: Optional[FlowRef] = None) -> None:
        super().__init__(message)
        self.flow = flow


class FixtureValidationError(Exception):
    """Raised when a fixtures document does not match the bundled schema."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
