"""Engine modules for TidyHome.

Contains specialized computation engines:
- schedule_engine: Recurrence calculation (does/when does a task occur)
- workload_engine: Weekly load balancing (which weekday a task lands on)

The engines never call each other; helpers.schedule_helpers wires them.
"""

# Use relative imports within package to avoid mypy module resolution issues
from .schedule_engine import (
    RecurrenceEngine,
    is_due_on,
    is_occurrence_completed,
    next_occurrence_on_or_after,
    occurrences_in_range,
)
from .workload_engine import (
    WorkloadEngine,
    calculate_day_loads,
    get_schedule_summary,
    optimize_weekly_schedule,
)

__all__ = [
    "RecurrenceEngine",
    "WorkloadEngine",
    "calculate_day_loads",
    "get_schedule_summary",
    "is_due_on",
    "is_occurrence_completed",
    "next_occurrence_on_or_after",
    "occurrences_in_range",
    "optimize_weekly_schedule",
]
