from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.models.admin import Admin
from tracker.schemas.admin import AdminTaskAssign, AdminTaskStatusUpdate, AdminTaskEnvelope, AdminTaskList
from tracker.services.admin_task_manager import AdminTaskManager
from tracker.utils.auth import get_current_admin

router = APIRouter()


@router.post("/assign", response_model=AdminTaskEnvelope, status_code=status.HTTP_201_CREATED)
def assign_manager_task(
    payload: AdminTaskAssign,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    task = AdminTaskManager(db).assign_task(
        current_admin,
        assignee_id=payload.assignedTo,
        title=payload.title,
        description=payload.description,
        week_start=payload.week_start,
        priority=payload.priority,
    )
    return {"message": "Task assigned successfully", "task": task}


@router.get("", response_model=AdminTaskList)
def list_manager_tasks(
    week_start: Optional[date] = Query(default=None),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return {"tasks": AdminTaskManager(db).list_for_principal(current_admin, week_start)}


@router.patch("/{task_id}/status", response_model=AdminTaskEnvelope)
def update_manager_task_status(
    task_id: int,
    payload: AdminTaskStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    task = AdminTaskManager(db).update_status(current_admin, task_id, payload.status)
    return {"message": "Task status updated successfully", "task": task}
