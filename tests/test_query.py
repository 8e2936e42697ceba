# tests/test_query.py

from __future__ import annotations

import pytest

from task_api.query import TaskFilter, TaskQuery, TaskSort, build_task_statement, resolve_query


def run(session, **params):
    return session.exec(build_task_statement(resolve_query(**params))).all()


@pytest.mark.parametrize(
    "params, expected",
    [
        ({}, TaskQuery(filter=None, value=None, sort=TaskSort.PRIORITY)),
        ({"filter": "isCompleted", "value": "true"}, TaskQuery(TaskFilter.IS_COMPLETED, "true", TaskSort.PRIORITY)),
        ({"filter": "priority", "value": "high", "sort": "dueDate"}, TaskQuery(TaskFilter.PRIORITY, "high", TaskSort.DUE_DATE)),
        ({"filter": "title", "value": "x"}, TaskQuery(None, None, TaskSort.PRIORITY)),
        ({"filter": "priority"}, TaskQuery(None, None, TaskSort.PRIORITY)),
        ({"value": "high"}, TaskQuery(None, None, TaskSort.PRIORITY)),
        ({"sort": "createdAt"}, TaskQuery(None, None, TaskSort.PRIORITY)),
        ({"sort": "priority"}, TaskQuery(None, None, TaskSort.PRIORITY)),
    ],
)
def test_resolve_query(params, expected):
    assert resolve_query(**params) == expected


def test_filter_by_completion(session, make_task):
    make_task("done", priority="low", is_completed=True)
    make_task("open", priority="medium")

    assert [t.title for t in run(session, filter="isCompleted", value="true")] == ["done"]
    assert [t.title for t in run(session, filter="isCompleted", value="false")] == ["open"]
    # Anything other than "true" parses as false.
    assert [t.title for t in run(session, filter="isCompleted", value="yes")] == ["open"]


def test_filter_by_priority(session, make_task):
    make_task("a", priority="high")
    make_task("b", priority="medium")
    make_task("c", priority="high")

    assert sorted(t.title for t in run(session, filter="priority", value="high")) == ["a", "c"]


def test_unknown_priority_value_matches_nothing(session, make_task):
    make_task("a", priority="high")

    assert run(session, filter="priority", value="urgent") == []


def test_unknown_filter_returns_everything(session, make_task):
    make_task("a", priority="high")
    make_task("b", priority="low", is_completed=True)

    assert len(run(session, filter="title", value="a")) == 2


def test_default_order_is_priority_rank(session, make_task):
    make_task("low", priority="low", is_completed=True)
    make_task("medium", priority="medium")
    make_task("high", priority="high")

    assert [t.priority for t in run(session)] == ["high", "medium", "low"]
    assert [t.priority for t in run(session, sort="priority")] == ["high", "medium", "low"]
    assert [t.priority for t in run(session, sort="bogus")] == ["high", "medium", "low"]


def test_sort_by_due_date_puts_undated_tasks_last(session, make_task):
    make_task("later", due_in_days=20)
    make_task("undated")
    make_task("sooner", due_in_days=1)

    assert [t.title for t in run(session, sort="dueDate")] == ["sooner", "later", "undated"]


def test_filter_and_sort_combine(session, make_task):
    make_task("late", priority="medium", due_in_days=5)
    make_task("early", priority="medium", due_in_days=4)
    make_task("other", priority="high", due_in_days=1)

    rows = run(session, filter="priority", value="medium", sort="dueDate")
    assert [t.title for t in rows] == ["early", "late"]
