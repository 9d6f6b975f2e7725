# tracker/services/admin_task_manager.py
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from tracker.database import commit
from tracker.exceptions import NotFound, ValidationError
from tracker.models.admin import Admin, AdminTask
from tracker.models.task import TaskStatus
from tracker.services.task_manager import clean_description, clean_title, parse_priority, parse_status
from tracker.utils.policy import Action, AdminRole, Resource, ResourceKind, authorize

logger = logging.getLogger(__name__)


def admin_task_resource(task: AdminTask) -> Resource:
    return Resource(kind=ResourceKind.TASK, id=task.id, owner_id=task.assigned_to, assigner_id=task.assigned_by)


class AdminTaskManager:
    """Tasks exchanged between managers (and the main admin) on the admin portal"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(AdminTask).options(joinedload(AdminTask.assignee), joinedload(AdminTask.assigner))

    def _get_task(self, task_id: int) -> AdminTask:
        task = self._query().filter(AdminTask.id == task_id).first()
        if task is None:
            raise NotFound("task not found")
        return task

    def assign_task(
        self,
        assigner: Admin,
        assignee_id: int,
        title: str,
        description: Optional[str] = None,
        week_start: Optional[date] = None,
        priority=None,
    ) -> AdminTask:
        if assignee_id is None:
            raise ValidationError("assignedTo (manager ID) is required")
        title = clean_title(title)
        description = clean_description(description)
        priority = parse_priority(priority)

        authorize(
            assigner.as_principal(),
            Action.ASSIGN,
            Resource(kind=ResourceKind.TASK, owner_id=assignee_id, assigner_id=assigner.id),
        )

        assignee = self.db.get(Admin, assignee_id)
        if assignee is None:
            raise NotFound("target manager not found")
        if assignee.admin_role != AdminRole.MANAGER:
            raise ValidationError("can only assign tasks to managers")

        task = AdminTask(
            title=title,
            description=description,
            assigned_to=assignee.id,
            assigned_by=assigner.id,
            priority=priority.value,
            week_start=week_start,
        )
        task.set_status(TaskStatus.PENDING)
        self.db.add(task)
        commit(self.db)

        logger.info("Admin task %s assigned to %s by %s", task.id, assignee.id, assigner.id)
        return self._get_task(task.id)

    def list_for_principal(self, admin: Admin, week_start: Optional[date] = None) -> List[AdminTask]:
        """Tasks assigned to or by the admin, newest first"""
        authorize(admin.as_principal(), Action.VIEW, Resource(kind=ResourceKind.TASK, owner_id=admin.id))

        query = self._query().filter(or_(AdminTask.assigned_to == admin.id, AdminTask.assigned_by == admin.id))
        if week_start is not None:
            query = query.filter(AdminTask.week_start == week_start)

        return query.order_by(AdminTask.created_at.desc(), AdminTask.id.desc()).all()

    def update_status(self, requester: Admin, task_id: int, status) -> AdminTask:
        new_status = parse_status(status)
        task = self._get_task(task_id)
        authorize(requester.as_principal(), Action.UPDATE_STATUS, admin_task_resource(task))

        task.set_status(new_status)
        commit(self.db)
        self.db.refresh(task)

        logger.info("Admin task %s moved to %s by %s", task.id, new_status.value, requester.id)
        return task
