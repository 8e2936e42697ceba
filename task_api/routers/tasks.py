import logging
from contextlib import contextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..database import get_db
from ..errors import TaskStorageError
from ..models import Task as TaskModel, utcnow
from ..priority import derive_priority
from ..query import build_task_statement, resolve_query
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate

router = APIRouter()

logger = logging.getLogger(__name__)

# Columns that may be left out of an update but never set to null.
_NON_NULLABLE_FLAGS = ("is_completed", "is_critical")


@contextmanager
def _storage_errors(db: Session, message: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise TaskStorageError(message) from exc


def _get_task_or_404(db: Session, task_id: int) -> TaskModel:
    task = db.get(TaskModel, task_id)
    if not task:
        logger.debug("Task %s not found", task_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


def _get_update_data(task_update: Optional[TaskUpdate]) -> dict:
    if task_update is None:
        return {}
    data = task_update.model_dump(exclude_unset=True)

    if "title" in data and not data["title"]:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    for field in _NON_NULLABLE_FLAGS:
        if field in data and data[field] is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{to_camel(field)} cannot be null",
            )
    return data


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    task: Optional[TaskCreate] = None,
    db: Session = Depends(get_db),
):
    """Create a task, deriving its priority before it is stored."""
    if task is None or not task.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")

    db_task = TaskModel(
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        is_completed=False,
        is_critical=bool(task.is_critical),
    )
    db_task.priority = derive_priority(db_task).value

    with _storage_errors(db, "Failed to create task"):
        db.add(db_task)
        db.commit()
        db.refresh(db_task)

    logger.info("Created task %s with priority %s", db_task.id, db_task.priority)
    return db_task


@router.get("/tasks", response_model=List[TaskSchema])
def get_tasks(
    sort: Optional[str] = None,
    filter_: Optional[str] = Query(default=None, alias="filter"),
    value: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List tasks, optionally filtered by one field and sorted by due date or priority.

    Unknown filter names and sort keys fall back to an unfiltered,
    priority-ordered listing.
    """
    statement = build_task_statement(resolve_query(filter_, value, sort))

    with _storage_errors(db, "Failed to get tasks"):
        return db.exec(statement).all()


@router.get("/tasks/{task_id}", response_model=TaskSchema)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
):
    """Get a specific task by ID."""
    with _storage_errors(db, "Failed to get task"):
        return _get_task_or_404(db, task_id)


@router.api_route("/tasks/{task_id}", methods=["PUT", "PATCH"], response_model=TaskSchema)
def update_task(
    task_id: int,
    task_update: Optional[TaskUpdate] = None,
    db: Session = Depends(get_db),
):
    """Apply a partial update and recompute the task's priority.

    Only fields present in the body change. ``null`` clears
    ``description`` and ``dueDate``. A missing body changes nothing
    but still recomputes the priority.
    """
    data = _get_update_data(task_update)

    with _storage_errors(db, "Failed to update task"):
        task = _get_task_or_404(db, task_id)

        for field, value in data.items():
            setattr(task, field, value)

        task.priority = derive_priority(task).value
        task.updated_at = utcnow()

        db.commit()
        db.refresh(task)

    logger.info("Updated task %s, priority now %s", task.id, task.priority)
    return task


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
):
    """Delete a specific task."""
    with _storage_errors(db, "Failed to delete task"):
        task = _get_task_or_404(db, task_id)
        db.delete(task)
        db.commit()

    logger.info("Deleted task %s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
