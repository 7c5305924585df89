from __future__ import annotations

from enum import IntEnum
from typing import Union


class Status(IntEnum):
    """Execution status ordered by severity.

    Values at or below SUCCEEDED are non-terminal or successful; anything
    above SUCCEEDED is a definitive failure.
    """

    READY = 10
    PREPARING = 20
    RUNNING = 30
    PAUSED = 40
    SUCCEEDED = 50
    KILLED = 60
    FAILED = 70
    FAILED_FINISHING = 80
    SKIPPED = 90
    DISABLED = 100
    QUEUED = 110
    FAILED_SUCCEEDED = 120
    CANCELLED = 130

    @property
    def label(self) -> str:
        return self.name.lower()

    def is_definitively_failed(self) -> bool:
        return self > Status.SUCCEEDED

    def is_succeeded(self) -> bool:
        return self == Status.SUCCEEDED

    @classmethod
    def parse(cls, value: Union[str, int, "Status"]) -> "Status":
        if isinstance(value, Status):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown execution status: {value!r}") from None
