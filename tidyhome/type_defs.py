"""Type definitions for TidyHome data structures.

Tasks are plain mappings so they round-trip through the document store
unchanged. TypedDict gives static checking over those mappings; it does NOT
enforce anything at runtime, which is why the engines read fields with
``.get()`` and documented fallbacks, and why callers validate with
``data_builders.validate_task_data`` before handing data in.

IMPORTANT: This file must NOT import from engines or helpers to avoid
circular dependencies. Only import from typing.
"""

from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str  # Opaque unique identifier
RoomKey = str  # Room id or room name
ISODate = str  # ISO 8601 date string (no time) "2024-01-18"
ISODatetime = str  # ISO 8601 datetime string "2024-01-18T12:30:00+00:00"
Weekday = int  # 0=Sunday..6=Saturday

Priority = Literal["High", "Medium", "Low"]


# =============================================================================
# Task
# =============================================================================


class TaskData(TypedDict):
    """Type definition for a recurring household task.

    Only id, frequency and estimated_minutes are required. The recurrence
    descriptor is (frequency, scheduled_day, anchor_date); next_due_date is
    the cached last known due date and the fallback source when the
    descriptor is incomplete.
    """

    id: TaskId
    frequency: str  # FREQUENCY_* constant
    estimated_minutes: int
    scheduled_day: NotRequired[int | None]  # Weekday 0-6 or day-of-month 1-31
    anchor_date: NotRequired[ISODate | None]
    room: NotRequired[str]
    room_id: NotRequired[str]
    room_type: NotRequired[str]
    description: NotRequired[str]
    priority: NotRequired[Priority]
    completed_dates: NotRequired[list[ISODate]]
    next_due_date: NotRequired[ISODate]
    is_due: NotRequired[bool]
    is_completed: NotRequired[bool]
    last_completed: NotRequired[ISODatetime | None]
    assigned_to: NotRequired[str]


class TaskTemplate(TypedDict):
    """Seed task used when a room is added."""

    description: str
    frequency: str
    estimated_minutes: int
    priority: NotRequired[Priority]


# =============================================================================
# Scheduler Output
# =============================================================================


class ScheduleAssignment(TypedDict):
    """One weekday assignment produced by the workload engine."""

    task_id: TaskId
    scheduled_day: Weekday


class DaySummary(TypedDict):
    """Rooms and total minutes landing on one weekday."""

    rooms: list[str]
    total_minutes: int


# =============================================================================
# Collection Type Aliases
# =============================================================================

TaskUpdates = dict[str, Any]  # Partial TaskData produced by migrations
DayLoads = dict[Weekday, int]
ScheduleSummary = dict[Weekday, DaySummary]
