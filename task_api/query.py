"""Translate listing parameters into a filtered, ordered task query."""
import enum
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import case
from sqlmodel import select

from .models import PRIORITY_RANK, Task


class TaskFilter(str, enum.Enum):
    IS_COMPLETED = "isCompleted"
    PRIORITY = "priority"


class TaskSort(str, enum.Enum):
    DUE_DATE = "dueDate"
    PRIORITY = "priority"


DEFAULT_SORT = TaskSort.PRIORITY


@dataclass(frozen=True)
class TaskQuery:
    filter: Optional[TaskFilter] = None
    value: Optional[str] = None
    sort: TaskSort = DEFAULT_SORT


def resolve_query(
    filter: Optional[str] = None,
    value: Optional[str] = None,
    sort: Optional[str] = None,
) -> TaskQuery:
    """Resolve raw query-string values into a TaskQuery.

    Unknown filter names, and a filter or value given without the other,
    resolve to no filter. Unknown or missing sort keys resolve to the
    priority sort.
    """
    try:
        task_filter = TaskFilter(filter) if filter is not None else None
    except ValueError:
        task_filter = None
    if task_filter is None or value is None:
        task_filter, value = None, None

    try:
        task_sort = TaskSort(sort) if sort is not None else DEFAULT_SORT
    except ValueError:
        task_sort = DEFAULT_SORT

    return TaskQuery(filter=task_filter, value=value, sort=task_sort)


def priority_rank():
    """SQL expression mapping the stored priority label to its rank."""
    return case(
        *((Task.priority == label.value, rank) for label, rank in PRIORITY_RANK.items())
    )


def build_task_statement(query: TaskQuery):
    """Build the SELECT statement for a resolved TaskQuery."""
    statement = select(Task)

    if query.filter is TaskFilter.IS_COMPLETED:
        statement = statement.where(Task.is_completed == (query.value == "true"))
    elif query.filter is TaskFilter.PRIORITY:
        # No validation: an unknown label simply matches nothing.
        statement = statement.where(Task.priority == query.value)

    if query.sort is TaskSort.DUE_DATE:
        # Tasks without a due date go last on every backend.
        statement = statement.order_by(Task.due_date.asc().nulls_last())
    else:
        statement = statement.order_by(priority_rank().asc())

    return statement
