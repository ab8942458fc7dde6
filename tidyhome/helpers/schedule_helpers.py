# File: helpers/schedule_helpers.py
"""Orchestration helpers wiring the workload and schedule engines.

The engines never call each other. Callers (task creation, onboarding, room
addition, daily rollover, manual edits) go through these helpers, which:
1. run WorkloadEngine to pick weekdays for Weekly/BiWeekly tasks
2. write the assignments into new task mappings
3. derive next_due_date / is_due / is_completed from RecurrenceEngine

Every helper returns new task mappings; inputs are never mutated. Persisting
the results is left to the caller's storage layer.
"""

from __future__ import annotations

from datetime import UTC, datetime
import re
from typing import TYPE_CHECKING, Any, cast
import uuid

from .. import const
from ..data_builders import build_task
from ..engines.schedule_engine import (
    RecurrenceEngine,
    is_occurrence_completed,
)
from ..engines.workload_engine import WorkloadEngine
from ..utils.dt_utils import dt_parse_date, dt_today_iso

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..type_defs import ISODate, ScheduleAssignment, TaskData, TaskTemplate


def _copy_task(task: TaskData, **changes: Any) -> TaskData:
    """Return a shallow copy of a task with changes applied."""
    updated: dict[str, Any] = dict(task)
    updated.update(changes)
    return cast("TaskData", updated)


def _slugify(value: str) -> str:
    """Lowercase and hyphenate a room label for task ids."""
    return re.sub(r"\s+", "-", value.strip().lower()) or "room"


# ==============================================================================
# Defaults
# ==============================================================================


def get_default_scheduled_day(frequency: str, index: int) -> int | None:
    """Return the initial scheduled_day for a new task.

    Monthly and Quarterly tasks are staggered across the month (days 1, 8,
    15, 22, then repeating) so they don't all land on the same date. Weekly
    and BiWeekly days come from the workload engine; Daily needs none.

    Examples:
        get_default_scheduled_day(FREQUENCY_MONTHLY, 0) → 1
        get_default_scheduled_day(FREQUENCY_QUARTERLY, 2) → 15
        get_default_scheduled_day(FREQUENCY_MONTHLY, 4) → 1
        get_default_scheduled_day(FREQUENCY_WEEKLY, 3) → None
    """
    if frequency in const.MONTH_DAY_FREQUENCIES:
        return (
            (index * const.DEFAULT_MONTH_DAY_STAGGER) % const.DEFAULT_MONTH_DAY_CYCLE
        ) + 1
    return None


# ==============================================================================
# Scheduling
# ==============================================================================


def apply_schedule_assignments(
    tasks: Iterable[TaskData],
    assignments: Iterable[ScheduleAssignment],
) -> list[TaskData]:
    """Return new tasks with scheduled_day set from assignments.

    Tasks without an assignment are copied unchanged.
    """
    by_id = {a["task_id"]: a["scheduled_day"] for a in assignments}
    return [
        _copy_task(task, scheduled_day=by_id[task[const.DATA_TASK_ID]])
        if task[const.DATA_TASK_ID] in by_id
        else _copy_task(task)
        for task in tasks
    ]


def refresh_due_state(
    tasks: Iterable[TaskData],
    today: ISODate | None = None,
) -> list[TaskData]:
    """Recompute the cached due fields for a day.

    Sets next_due_date (next occurrence on or after today), is_due (occurs
    today) and is_completed (today's occurrence is in completed_dates).

    Args:
        tasks: Tasks to refresh.
        today: Reference date; defaults to today in the configured timezone.

    Returns:
        New task list in input order.
    """
    reference = today or dt_today_iso()
    refreshed: list[TaskData] = []
    for task in tasks:
        engine = RecurrenceEngine(task)
        refreshed.append(
            _copy_task(
                task,
                next_due_date=engine.get_next_occurrence(reference),
                is_due=engine.is_due_on(reference),
                is_completed=is_occurrence_completed(task, reference),
            )
        )
    return refreshed


def rebalance_tasks(
    tasks: Sequence[TaskData],
    today: ISODate | None = None,
    available_days: Iterable[int] | None = None,
) -> list[TaskData]:
    """Reassign weekly weekdays, then refresh the due state.

    Used on onboarding completion, migration and explicit "balance schedule"
    actions.
    """
    assignments = WorkloadEngine.optimize_weekly_schedule(tasks, available_days)
    const.LOGGER.debug(
        "Rebalanced %s weekly tasks across %s",
        len(assignments),
        WorkloadEngine.normalize_available_days(available_days),
    )
    return refresh_due_state(apply_schedule_assignments(tasks, assignments), today)


# ==============================================================================
# Task Creation
# ==============================================================================


def build_tasks_from_templates(
    templates: Sequence[TaskTemplate],
    room: str,
    today: ISODate | None = None,
    room_id: str | None = None,
    room_type: str | None = None,
    available_days: Iterable[int] | None = None,
) -> list[TaskData]:
    """Create scheduled tasks for a newly added room.

    Month-day tasks get staggered days, BiWeekly/Quarterly tasks are
    anchored to today, then the new tasks are balanced among themselves and
    their due state is computed.

    Args:
        templates: Seed tasks (description, frequency, estimated_minutes, priority).
        room: Room name, also the grouping key when room_id is not given.
        today: Creation date; defaults to today in the configured timezone.
        room_id: Optional room identifier.
        room_type: Optional room type label.
        available_days: Weekdays for the weekly tasks.

    Returns:
        New, validated tasks ready for storage.

    Raises:
        TaskValidationError: If a template produces a malformed task.
    """
    reference = today or dt_today_iso()
    batch = uuid.uuid4().hex[:8]
    prefix = _slugify(room_type or room)

    new_tasks: list[TaskData] = []
    for index, template in enumerate(templates):
        frequency = template[const.DATA_TEMPLATE_FREQUENCY]
        user_input: dict[str, Any] = {
            const.DATA_TASK_ID: f"{prefix}-{batch}-{index}",
            const.DATA_TASK_DESCRIPTION: template[const.DATA_TEMPLATE_DESCRIPTION],
            const.DATA_TASK_FREQUENCY: frequency,
            const.DATA_TASK_ESTIMATED_MINUTES: template[
                const.DATA_TEMPLATE_ESTIMATED_MINUTES
            ],
            const.DATA_TASK_PRIORITY: template.get(
                const.DATA_TEMPLATE_PRIORITY, const.DEFAULT_PRIORITY
            ),
            const.DATA_TASK_ROOM: room,
            const.DATA_TASK_SCHEDULED_DAY: get_default_scheduled_day(frequency, index),
            const.DATA_TASK_ANCHOR_DATE: reference
            if frequency in const.ANCHORED_FREQUENCIES
            else None,
            const.DATA_TASK_COMPLETED_DATES: [],
            const.DATA_TASK_NEXT_DUE_DATE: reference,
            const.DATA_TASK_IS_DUE: False,
            const.DATA_TASK_IS_COMPLETED: False,
        }
        if room_id:
            user_input[const.DATA_TASK_ROOM_ID] = room_id
        if room_type:
            user_input[const.DATA_TASK_ROOM_TYPE] = room_type
        new_tasks.append(build_task(user_input))

    const.LOGGER.info("Created %s tasks for room %s", len(new_tasks), room)
    return rebalance_tasks(new_tasks, reference, available_days)


# ==============================================================================
# Task Mutations
# ==============================================================================


def toggle_completion(
    task: TaskData,
    on_date: ISODate,
    today: ISODate | None = None,
) -> TaskData:
    """Mark or unmark the occurrence on a date as done.

    Adds on_date to completed_dates (setting last_completed) or removes it
    (clearing last_completed). is_completed is then recomputed for today.

    Args:
        task: Task to update.
        on_date: Occurrence date to toggle.
        today: Date is_completed refers to; defaults to on_date.

    Returns:
        Updated task copy. Unparseable dates return an unchanged copy.
    """
    parsed = dt_parse_date(on_date)
    if parsed is None:
        const.LOGGER.debug(
            "toggle_completion: Invalid date %s for task %s",
            on_date,
            task.get(const.DATA_TASK_ID),
        )
        return _copy_task(task)

    on_iso = parsed.isoformat()
    completed = list(task.get(const.DATA_TASK_COMPLETED_DATES) or [])
    if on_iso in completed:
        completed = [d for d in completed if d != on_iso]
        last_completed = None
    else:
        completed = sorted([*completed, on_iso])
        last_completed = datetime.now(UTC).isoformat()

    updated = _copy_task(
        task, completed_dates=completed, last_completed=last_completed
    )
    return _copy_task(
        updated, is_completed=is_occurrence_completed(updated, today or on_iso)
    )


def reanchor_task(task: TaskData, anchor: ISODate | None) -> TaskData:
    """Set the recurrence anchor after a frequency edit.

    BiWeekly and Quarterly tasks take the new anchor; every other frequency
    has its anchor cleared. Whether to reanchor on an edit at all is the
    caller's policy.
    """
    if task.get(const.DATA_TASK_FREQUENCY) in const.ANCHORED_FREQUENCIES:
        return _copy_task(task, anchor_date=anchor)
    return _copy_task(task, anchor_date=None)
