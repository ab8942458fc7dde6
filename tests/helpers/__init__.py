"""Test helpers for TidyHome tests.

This module re-exports the task factories for convenient imports:

    from tests.helpers import make_task, make_room_tasks

See factories.py for full documentation.
"""

from tests.helpers.factories import make_room_tasks, make_task

__all__ = ["make_room_tasks", "make_task"]
