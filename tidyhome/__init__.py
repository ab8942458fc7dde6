"""TidyHome scheduling core.

Recurrence and weekly load balancing for recurring household tasks:

- RecurrenceEngine (engines.schedule_engine): does/when does a task occur
  across Daily, Weekly, Bi-Weekly, Monthly and Quarterly patterns
- WorkloadEngine (engines.workload_engine): which weekday each Weekly and
  Bi-Weekly task lands on, balancing minutes and keeping rooms together

Everything here is pure and synchronous. Storage, UI and authentication
belong to the caller.
"""

from .data_builders import TaskValidationError, build_task, validate_task_data
from .engines.schedule_engine import (
    RecurrenceEngine,
    is_due_on,
    is_occurrence_completed,
    next_occurrence_on_or_after,
    occurrences_in_range,
)
from .engines.workload_engine import (
    WorkloadEngine,
    calculate_day_loads,
    get_schedule_summary,
    optimize_weekly_schedule,
)
from .helpers.schedule_helpers import (
    apply_schedule_assignments,
    build_tasks_from_templates,
    rebalance_tasks,
    refresh_due_state,
)
from .migration_legacy import migrate_tasks, needs_migration

__all__ = [
    "RecurrenceEngine",
    "TaskValidationError",
    "WorkloadEngine",
    "apply_schedule_assignments",
    "build_task",
    "build_tasks_from_templates",
    "calculate_day_loads",
    "get_schedule_summary",
    "is_due_on",
    "is_occurrence_completed",
    "migrate_tasks",
    "needs_migration",
    "next_occurrence_on_or_after",
    "occurrences_in_range",
    "optimize_weekly_schedule",
    "rebalance_tasks",
    "refresh_due_state",
    "validate_task_data",
]
