from __future__ import annotations

COLOR_GREEN = "green"
COLOR_RED = "red"

NEXT_EXECUTION_UNDEFINED = "undefined"

ZERO_HISTORY_OVERDUE = "overdue"
ZERO_HISTORY_HEALTHY = "healthy"
ZERO_HISTORY_POLICIES = (ZERO_HISTORY_OVERDUE, ZERO_HISTORY_HEALTHY)

ANNOTATION_OUT_OF_LIMIT = "current runtime out of limit: {deadline}"
ANNOTATION_IN_LIMIT = "current runtime in limit: {deadline}"
ANNOTATION_NO_HISTORY = "no completed run to compare against"
ANNOTATION_NOT_STARTED = "current runtime out of limit: not started"
ANNOTATION_NO_LIMIT = "current runtime in limit: no limit"
