"""Schedule Engine for TidyHome.

Answers occurrence questions for a single recurring task using a hybrid approach:
- `dateutil.rrule` for day-based patterns (DAILY, WEEKLY, BIWEEKLY)
- `dateutil.relativedelta` month stepping with clamping for MONTHLY/QUARTERLY
  (scheduled_day=31 in February materializes as Feb 28/29)

All public methods are pure: the engine reads a task snapshot and never
mutates it. Malformed recurrence data degrades to documented fallbacks
instead of raising.

IMPORTANT: This module must NOT import from helpers to avoid circular imports.
Only import from const.py, type_defs.py, utils and third-party libraries.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import TYPE_CHECKING, ClassVar

from dateutil.rrule import DAILY, FR, MO, SA, SU, TH, TU, WE, WEEKLY, rrule, weekday

from .. import const
from ..utils.dt_utils import (
    clamp_day_of_month,
    day_of_month,
    day_of_week,
    dt_add_days,
    dt_add_months,
    dt_diff_days,
    dt_format_date,
    dt_parse_date,
)

if TYPE_CHECKING:
    from ..type_defs import ISODate, TaskData


def _is_int(value: object) -> bool:
    """Return True for real integers (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


class RecurrenceEngine:
    """Occurrence calculator for one task's recurrence descriptor.

    Handles the five task frequencies:
    - DAILY: every date
    - WEEKLY: every date on scheduled_day (0=Sunday..6=Saturday)
    - BIWEEKLY: WEEKLY dates in even weeks counted from anchor_date
    - MONTHLY: scheduled_day of every month, clamped to the month length
    - QUARTERLY: MONTHLY dates in months 0, 3, 6 or 9 months after the anchor month

    Fallbacks when the descriptor is incomplete:
    - scheduled_day missing/invalid → weekday (or day-of-month) of next_due_date
    - anchor_date missing/invalid → next_due_date
    If the fallback is unavailable too, the task has no occurrences.
    """

    # Sunday-first weekday numbering → rrule weekday constants
    WEEKDAY_TO_RRULE: ClassVar[dict[int, weekday]] = {
        const.SUNDAY: SU,
        const.MONDAY: MO,
        const.TUESDAY: TU,
        const.WEDNESDAY: WE,
        const.THURSDAY: TH,
        const.FRIDAY: FR,
        const.SATURDAY: SA,
    }

    def __init__(self, task: TaskData) -> None:
        """Initialize the recurrence engine from a task snapshot.

        Args:
            task: Task mapping; only frequency, scheduled_day, anchor_date and
                next_due_date are read.
        """
        self._task_id = task.get(const.DATA_TASK_ID)
        self._frequency = task.get(const.DATA_TASK_FREQUENCY)
        self._scheduled_day = task.get(const.DATA_TASK_SCHEDULED_DAY)

        # Last known due date backs up both scheduled_day and anchor_date
        self._fallback_date = dt_parse_date(task.get(const.DATA_TASK_NEXT_DUE_DATE))
        self._anchor_date = (
            dt_parse_date(task.get(const.DATA_TASK_ANCHOR_DATE)) or self._fallback_date
        )

    @property
    def frequency(self) -> str | None:
        """Frequency this engine was built for."""
        return self._frequency

    def get_occurrences(self, start: ISODate | date, end: ISODate | date) -> list[str]:
        """Return every occurrence within [start, end], both inclusive.

        Args:
            start: Range start (YYYY-MM-DD).
            end: Range end (YYYY-MM-DD).

        Returns:
            Strictly increasing list of YYYY-MM-DD strings. Empty when the
            range is empty or invalid, or the task cannot be resolved.
        """
        start_date = dt_parse_date(start)
        end_date = dt_parse_date(end)
        if start_date is None or end_date is None:
            const.LOGGER.debug(
                "RecurrenceEngine: Invalid range %s → %s for task %s",
                start,
                end,
                self._task_id,
            )
            return []
        if start_date > end_date:
            return []

        freq = self._frequency
        if freq == const.FREQUENCY_DAILY:
            dates = self._daily(start_date, end_date)
        elif freq == const.FREQUENCY_WEEKLY:
            dates = self._weekly(start_date, end_date)
        elif freq == const.FREQUENCY_BIWEEKLY:
            dates = self._biweekly(start_date, end_date)
        elif freq == const.FREQUENCY_MONTHLY:
            dates = self._month_days(start_date, end_date, quarterly=False)
        elif freq == const.FREQUENCY_QUARTERLY:
            dates = self._month_days(start_date, end_date, quarterly=True)
        else:
            const.LOGGER.debug(
                "RecurrenceEngine: Unknown frequency %s for task %s",
                freq,
                self._task_id,
            )
            return []

        return [dt_format_date(d) for d in dates]

    def is_due_on(self, on_date: ISODate | date) -> bool:
        """Return True if the task occurs on the given date."""
        return bool(self.get_occurrences(on_date, on_date))

    def get_next_occurrence(self, on_or_after: ISODate | date) -> str:
        """Return the earliest occurrence on or after a date.

        Searches NEXT_OCCURRENCE_SEARCH_DAYS ahead. When nothing is found the
        query date itself comes back; callers should treat that as "unknown,
        recheck later" rather than as a real occurrence.

        Args:
            on_or_after: Reference date (YYYY-MM-DD).

        Returns:
            Occurrence as YYYY-MM-DD string.
        """
        reference = dt_parse_date(on_or_after)
        if reference is None:
            const.LOGGER.debug(
                "RecurrenceEngine: Invalid reference date %s for task %s",
                on_or_after,
                self._task_id,
            )
            return str(on_or_after)

        reference_iso = dt_format_date(reference)
        if self._frequency == const.FREQUENCY_DAILY:
            return reference_iso

        horizon = dt_add_days(reference_iso, const.NEXT_OCCURRENCE_SEARCH_DAYS)
        occurrences = self.get_occurrences(reference_iso, horizon)
        if occurrences:
            return occurrences[0]

        const.LOGGER.debug(
            "RecurrenceEngine: No occurrence within %s days of %s for task %s",
            const.NEXT_OCCURRENCE_SEARCH_DAYS,
            reference_iso,
            self._task_id,
        )
        return reference_iso

    # =========================================================================
    # Private: rrule-based calculation (DAILY, WEEKLY, BIWEEKLY)
    # =========================================================================

    def _daily(self, start: date, end: date) -> list[date]:
        """Every date in range."""
        rule = rrule(DAILY, dtstart=_start_of(start), until=_start_of(end))
        return [occurrence.date() for occurrence in rule]

    def _weekly(self, start: date, end: date) -> list[date]:
        """Every date in range falling on the resolved weekday."""
        target = self._resolve_weekday()
        if target is None:
            return []

        # Type stubs expect Literal weekday values, but rrule accepts weekday objects
        rule = rrule(
            WEEKLY,
            dtstart=_start_of(start),
            until=_start_of(end),
            byweekday=self.WEEKDAY_TO_RRULE[target],  # type: ignore[arg-type]
        )
        return [occurrence.date() for occurrence in rule]

    def _biweekly(self, start: date, end: date) -> list[date]:
        """Weekly dates whose week offset from the anchor is even.

        The anchor's own week is week 0 (on), week 1 is off, and so on. The
        offset is round(days / 7), so the target weekday need not match the
        anchor's weekday. Python's modulo is non-negative for a positive
        divisor, so weeks before the anchor alternate the same way.
        """
        anchor = self._anchor_date
        if anchor is None:
            const.LOGGER.debug(
                "RecurrenceEngine: BiWeekly task %s has no anchor or due date",
                self._task_id,
            )
            return []

        return [
            candidate
            for candidate in self._weekly(start, end)
            if round(dt_diff_days(anchor, candidate) / const.DAYS_PER_WEEK) % 2 == 0
        ]

    # =========================================================================
    # Private: month walk with clamping (MONTHLY, QUARTERLY)
    # =========================================================================

    def _month_days(self, start: date, end: date, quarterly: bool) -> list[date]:
        """Walk months from start's month, materializing the clamped day.

        Args:
            start: Range start.
            end: Range end.
            quarterly: Only keep months 0 (mod 3) months after the anchor month.

        Returns:
            Occurrence dates within range.
        """
        target_day = self._resolve_month_day()
        if target_day is None:
            return []

        anchor_month: int | None = None
        if quarterly:
            if self._anchor_date is None:
                const.LOGGER.debug(
                    "RecurrenceEngine: Quarterly task %s has no anchor or due date",
                    self._task_id,
                )
                return []
            anchor_month = self._anchor_date.month

        results: list[date] = []
        cursor = start.replace(day=1)
        while True:
            in_cycle = (
                anchor_month is None
                or (cursor.month - anchor_month)
                % const.MONTHS_PER_YEAR
                % const.MONTHS_PER_QUARTER
                == 0
            )
            if in_cycle:
                occurrence = clamp_day_of_month(cursor.year, cursor.month, target_day)
                if occurrence > end:
                    break
                if occurrence >= start:
                    results.append(occurrence)

            cursor = dt_add_months(cursor, 1)
            # Safety bound against unbounded iteration
            if cursor.year > end.year + const.MONTH_WALK_YEAR_MARGIN:
                break

        return results

    # =========================================================================
    # Private: Helper methods
    # =========================================================================

    def _resolve_weekday(self) -> int | None:
        """Return the target weekday (0=Sunday), falling back to next_due_date."""
        if _is_int(self._scheduled_day) and 0 <= self._scheduled_day <= 6:
            return self._scheduled_day

        if self._fallback_date is None:
            const.LOGGER.debug(
                "RecurrenceEngine: Task %s has no weekday and no due date to derive one",
                self._task_id,
            )
            return None
        return day_of_week(self._fallback_date)

    def _resolve_month_day(self) -> int | None:
        """Return the target day-of-month, falling back to next_due_date.

        Out-of-range values are passed through; clamping happens per month.
        """
        if _is_int(self._scheduled_day):
            return self._scheduled_day

        if self._fallback_date is None:
            const.LOGGER.debug(
                "RecurrenceEngine: Task %s has no month day and no due date to derive one",
                self._task_id,
            )
            return None
        return day_of_month(self._fallback_date)


def _start_of(value: date) -> datetime:
    """Midnight datetime for a calendar date (rrule works on datetimes)."""
    return datetime.combine(value, time.min)


# =============================================================================
# Module-level convenience functions
# =============================================================================


def occurrences_in_range(
    task: TaskData, start_date: ISODate | date, end_date: ISODate | date
) -> list[str]:
    """Return all YYYY-MM-DD dates where the task occurs in [start_date, end_date].

    Examples:
        Weekly, scheduled_day=3, 2024-01-01 → 2024-01-31
        → ["2024-01-03", "2024-01-10", "2024-01-17", "2024-01-24", "2024-01-31"]
    """
    return RecurrenceEngine(task).get_occurrences(start_date, end_date)


def is_due_on(task: TaskData, on_date: ISODate | date) -> bool:
    """Return True if the task is scheduled to occur on the date."""
    return RecurrenceEngine(task).is_due_on(on_date)


def next_occurrence_on_or_after(task: TaskData, on_or_after: ISODate | date) -> str:
    """Return the next occurrence on or after a date (366-day search horizon)."""
    return RecurrenceEngine(task).get_next_occurrence(on_or_after)


def is_occurrence_completed(task: TaskData, on_date: ISODate | date) -> bool:
    """Return True if the task's occurrence on the date was marked done."""
    parsed = dt_parse_date(on_date)
    if parsed is None:
        return False
    return dt_format_date(parsed) in (task.get(const.DATA_TASK_COMPLETED_DATES) or [])
