from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.models.user import User
from tracker.schemas.task import (
    TaskCreate, TaskAssign, TaskStatusUpdate, TaskUpdate, TaskEnvelope, TaskList, TaskAnalytics,
)
from tracker.services.task_manager import TaskManager
from tracker.utils.auth import get_current_user

router = APIRouter()


@router.get("", response_model=TaskList)
def list_tasks(
    week_start: Optional[date] = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"tasks": TaskManager(db).list_for_principal(current_user, week_start)}


@router.post("", response_model=TaskEnvelope)
def create_task(task: TaskCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    created = TaskManager(db).create_task(
        current_user,
        title=task.title,
        description=task.description,
        week_start=task.week_start,
        priority=task.priority,
    )
    return {"task": created}


@router.post("/assign", response_model=TaskEnvelope)
def assign_task(task: TaskAssign, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    assigned = TaskManager(db).assign_task(
        current_user,
        assignee_id=task.user_id,
        title=task.title,
        description=task.description,
        week_start=task.week_start,
        priority=task.priority,
    )
    return {"task": assigned}


# static paths are registered before /{task_id}
@router.get("/analytics", response_model=TaskAnalytics)
def task_analytics(
    week_start: Optional[date] = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TaskManager(db).analytics(current_user, week_start)


@router.get("/all", response_model=TaskList)
def list_all_tasks(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"tasks": TaskManager(db).list_all(current_user)}


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"task": TaskManager(db).get_details(current_user, task_id)}


@router.patch("/{task_id}/status", response_model=TaskEnvelope)
def update_task_status(
    task_id: int,
    payload: TaskStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"task": TaskManager(db).update_status(current_user, task_id, payload.status)}


@router.patch("/{task_id}/complete", response_model=TaskEnvelope)
def complete_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"task": TaskManager(db).complete_task(current_user, task_id)}


@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    patch = task_update.model_dump(exclude_unset=True)
    return {"task": TaskManager(db).update_fields(current_user, task_id, patch)}


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    TaskManager(db).delete_task(current_user, task_id)
    return {"success": True}
