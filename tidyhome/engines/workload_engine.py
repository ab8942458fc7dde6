"""Workload Engine - Pure logic for weekly load balancing.

This engine assigns a weekday to every Weekly/BiWeekly task so that:
- tasks sharing a room land on the same day (room grouping)
- total estimated minutes per day are as even as possible

Algorithm (Longest Processing Time first, room-grouped):
1. Keep Weekly and BiWeekly tasks; other frequencies get no assignment
2. Group them by room; a group is indivisible
3. Sort groups by total minutes, heaviest first
4. Put each group on the currently lightest available day
   (ties go to the earliest day in available_days order)

ARCHITECTURE: This is a pure logic engine. All methods are static and
operate on passed-in data; nothing is mutated or persisted. Writing the
resulting scheduled_day values back to storage is the caller's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..type_defs import (
        DayLoads,
        RoomKey,
        ScheduleAssignment,
        ScheduleSummary,
        TaskData,
    )


class WorkloadEngine:
    """Pure logic engine for weekday assignment and day-load reporting.

    All methods are static - no instance state.

    The result is a heuristic, not an optimal balance: LPT bin packing is
    within a bounded factor of the optimal peak day.
    """

    @staticmethod
    def is_weekly_task(task: TaskData) -> bool:
        """Return True if the task's scheduled_day is a day-of-week."""
        return task.get(const.DATA_TASK_FREQUENCY) in const.WEEKDAY_FREQUENCIES

    @staticmethod
    def room_key(task: TaskData) -> RoomKey:
        """Return the grouping key: room_id when present, else the room name."""
        return task.get(const.DATA_TASK_ROOM_ID) or task.get(const.DATA_TASK_ROOM) or ""

    @staticmethod
    def normalize_available_days(available_days: Iterable[int] | None) -> list[int]:
        """Return usable weekdays in caller order.

        Values outside 0-6 are dropped and duplicates keep their first
        position. None means DEFAULT_AVAILABLE_DAYS (Monday-Saturday).
        """
        if available_days is None:
            return list(const.DEFAULT_AVAILABLE_DAYS)

        days: list[int] = []
        for day in available_days:
            if isinstance(day, bool) or not isinstance(day, int):
                continue
            if 0 <= day <= 6 and day not in days:
                days.append(day)
        return days

    @staticmethod
    def group_by_room(tasks: Iterable[TaskData]) -> dict[RoomKey, list[TaskData]]:
        """Group weekly tasks by room, preserving first-appearance order."""
        groups: dict[RoomKey, list[TaskData]] = {}
        for task in tasks:
            if not WorkloadEngine.is_weekly_task(task):
                continue
            groups.setdefault(WorkloadEngine.room_key(task), []).append(task)
        return groups

    @staticmethod
    def total_minutes(tasks: Iterable[TaskData]) -> int:
        """Sum estimated minutes (missing values count as zero)."""
        return sum(task.get(const.DATA_TASK_ESTIMATED_MINUTES) or 0 for task in tasks)

    @staticmethod
    def optimize_weekly_schedule(
        tasks: Sequence[TaskData],
        available_days: Iterable[int] | None = None,
    ) -> list[ScheduleAssignment]:
        """Assign a weekday to every Weekly/BiWeekly task.

        Args:
            tasks: All tasks; non-weekly ones are ignored.
            available_days: Weekdays (0=Sunday..6=Saturday) to schedule on.
                Defaults to Monday-Saturday.

        Returns:
            One {task_id, scheduled_day} per weekly task, heaviest room first.
            Empty when there are no weekly tasks or no usable days.
        """
        days = WorkloadEngine.normalize_available_days(available_days)
        groups = WorkloadEngine.group_by_room(tasks)

        if not groups:
            return []

        if not days:
            const.LOGGER.warning(
                "WorkloadEngine: No usable available days in %s, skipping %s room groups",
                available_days,
                len(groups),
            )
            return []

        # sorted() is stable, so equal-weight rooms keep their input order
        ranked = sorted(
            (
                (room, room_tasks, WorkloadEngine.total_minutes(room_tasks))
                for room, room_tasks in groups.items()
            ),
            key=lambda entry: entry[2],
            reverse=True,
        )

        day_loads: dict[int, int] = dict.fromkeys(days, 0)
        assignments: list[ScheduleAssignment] = []

        for room, room_tasks, group_minutes in ranked:
            # min() returns the first minimum, i.e. the earliest listed day
            target_day = min(days, key=day_loads.__getitem__)
            assignments.extend(
                {
                    "task_id": task[const.DATA_TASK_ID],
                    "scheduled_day": target_day,
                }
                for task in room_tasks
            )
            day_loads[target_day] += group_minutes
            const.LOGGER.debug(
                "WorkloadEngine: Room %r (%s min, %s tasks) → day %s (load %s)",
                room,
                group_minutes,
                len(room_tasks),
                target_day,
                day_loads[target_day],
            )

        return assignments

    @staticmethod
    def calculate_day_loads(
        tasks: Iterable[TaskData],
        available_days: Iterable[int] | None = None,
    ) -> DayLoads:
        """Return current weekly minutes per available day.

        Only Weekly/BiWeekly tasks whose scheduled_day is one of the
        available days count. Every available day is present in the result.
        """
        days = WorkloadEngine.normalize_available_days(available_days)
        loads: DayLoads = dict.fromkeys(days, 0)
        for task in tasks:
            if not WorkloadEngine.is_weekly_task(task):
                continue
            day = task.get(const.DATA_TASK_SCHEDULED_DAY)
            if day in loads:
                loads[day] += task.get(const.DATA_TASK_ESTIMATED_MINUTES) or 0
        return loads

    @staticmethod
    def get_schedule_summary(
        tasks: Iterable[TaskData],
        assignments: Iterable[ScheduleAssignment],
    ) -> ScheduleSummary:
        """Summarize assignments per weekday for display.

        Args:
            tasks: Tasks the assignments refer to.
            assignments: Output of optimize_weekly_schedule.

        Returns:
            {weekday: {"rooms": sorted room labels, "total_minutes": int}}.
            Assignments naming unknown task ids are skipped.
        """
        task_map = {task[const.DATA_TASK_ID]: task for task in tasks}
        rooms_by_day: dict[int, set[str]] = {}
        minutes_by_day: dict[int, int] = {}

        for assignment in assignments:
            task = task_map.get(assignment["task_id"])
            if task is None:
                continue
            day = assignment["scheduled_day"]
            rooms_by_day.setdefault(day, set()).add(
                task.get(const.DATA_TASK_ROOM) or WorkloadEngine.room_key(task)
            )
            minutes_by_day[day] = minutes_by_day.get(day, 0) + (
                task.get(const.DATA_TASK_ESTIMATED_MINUTES) or 0
            )

        return {
            day: {
                "rooms": sorted(rooms),
                "total_minutes": minutes_by_day[day],
            }
            for day, rooms in rooms_by_day.items()
        }


# =============================================================================
# Module-level convenience functions
# =============================================================================


def optimize_weekly_schedule(
    tasks: Sequence[TaskData],
    available_days: Iterable[int] | None = None,
) -> list[ScheduleAssignment]:
    """Assign balanced, room-grouped weekdays to Weekly/BiWeekly tasks.

    Example:
        Kitchen 40 min, Bathroom 25 min, Office 10 min over [1..6]
        → Kitchen day 1, Bathroom day 2, Office day 3
    """
    return WorkloadEngine.optimize_weekly_schedule(tasks, available_days)


def get_schedule_summary(
    tasks: Iterable[TaskData],
    assignments: Iterable[ScheduleAssignment],
) -> ScheduleSummary:
    """Summarize assignments per weekday (rooms and total minutes)."""
    return WorkloadEngine.get_schedule_summary(tasks, assignments)


def calculate_day_loads(
    tasks: Iterable[TaskData],
    available_days: Iterable[int] | None = None,
) -> DayLoads:
    """Return current weekly minutes per available day."""
    return WorkloadEngine.calculate_day_loads(tasks, available_days)
