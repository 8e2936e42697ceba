import math
from datetime import datetime, timedelta
from typing import Optional

from .models import Priority, as_utc, utcnow

ONE_DAY = timedelta(days=1)
HIGH_WITHIN_DAYS = 3
MEDIUM_WITHIN_DAYS = 7


def days_until(due_date: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``due_date``, rounding any fraction up.

    Naive datetimes are taken to be UTC. A due date in the past, or exactly
    now, gives zero or a negative number.
    """
    delta = as_utc(due_date) - as_utc(now)
    return math.ceil(delta / ONE_DAY)


def derive_priority(task, now: Optional[datetime] = None) -> Priority:
    """Derive the priority label of a task from its current state.

    ``task`` is anything exposing ``is_completed``, ``is_critical`` and
    ``due_date``. The first matching rule wins:

    1. completed tasks are ``low``
    2. critical tasks are ``high``
    3. tasks due within 3 days (including overdue ones) are ``high``,
       within 7 days ``medium``
    4. everything else is ``medium``
    """
    if task.is_completed:
        return Priority.LOW

    if task.is_critical:
        return Priority.HIGH

    if task.due_date is not None:
        remaining = days_until(task.due_date, now or utcnow())
        if remaining <= HIGH_WITHIN_DAYS:
            return Priority.HIGH
        if remaining <= MEDIUM_WITHIN_DAYS:
            return Priority.MEDIUM

    return Priority.MEDIUM
