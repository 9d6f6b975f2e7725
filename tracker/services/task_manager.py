# tracker/services/task_manager.py
import logging
import math
from datetime import date
from typing import List, Optional

from sqlalchemy import and_, case, func, or_
from sqlalchemy.orm import Session, joinedload

from tracker.database import commit
from tracker.exceptions import NotFound, ValidationError
from tracker.models.task import Task, TaskStatus, TaskPriority, TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from tracker.models.user import User
from tracker.utils.policy import Action, Resource, ResourceKind, authorize, can_assign

logger = logging.getLogger(__name__)

# optional columns an explicit null clears
CLEARABLE_FIELDS = ("description", "week_start")


def completion_rate(completed: int, assigned: int) -> int:
    """Whole-number percentage, halves rounded up (1 of 8 -> 13)"""
    if not assigned:
        return 0
    return int(math.floor(completed * 100.0 / assigned + 0.5))


def parse_status(value) -> TaskStatus:
    try:
        return TaskStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("invalid status")


def parse_priority(value) -> TaskPriority:
    if value is None or value == "":
        return TaskPriority.MEDIUM
    try:
        return TaskPriority(str(getattr(value, "value", value)).strip().lower())
    except ValueError:
        raise ValidationError("invalid priority")


def clean_title(title) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("title required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError("title must be at most %d characters" % TITLE_MAX_LENGTH)
    return title


def clean_description(description) -> Optional[str]:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError("description must be at most %d characters" % DESCRIPTION_MAX_LENGTH)
    return description


def task_resource(task: Task) -> Resource:
    return Resource(kind=ResourceKind.TASK, id=task.id, owner_id=task.user_id, assigner_id=task.assigned_by)


class TaskManager:
    """Lifecycle of employee-side tasks: creation, assignment, status and analytics"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Task).options(joinedload(Task.owner), joinedload(Task.assigner))

    def _get_task(self, task_id: int) -> Task:
        task = self._query().filter(Task.id == task_id).first()
        if task is None:
            raise NotFound("task not found")
        return task

    def _save(self, task: Task) -> Task:
        commit(self.db)
        self.db.refresh(task)
        return task

    def create_task(
        self,
        owner: User,
        title: str,
        description: Optional[str] = None,
        week_start: Optional[date] = None,
        priority=None,
    ) -> Task:
        """Create a task owned by ``owner`` with nobody recorded as assigner"""
        title = clean_title(title)
        description = clean_description(description)
        priority = parse_priority(priority)

        authorize(owner.as_principal(), Action.CREATE, Resource(kind=ResourceKind.TASK, owner_id=owner.id))

        task = Task(
            user_id=owner.id,
            title=title,
            description=description,
            week_start=week_start,
            priority=priority.value,
        )
        task.set_status(TaskStatus.PENDING)
        self.db.add(task)
        self._save(task)

        logger.info("Task %s created by user %s", task.id, owner.id)
        return task

    def assign_task(
        self,
        assigner: User,
        assignee_id: int,
        title: str,
        description: Optional[str] = None,
        week_start: Optional[date] = None,
        priority=None,
    ) -> Task:
        """Create a task owned by another user and record who handed it out"""
        title = clean_title(title)
        description = clean_description(description)
        priority = parse_priority(priority)

        authorize(
            assigner.as_principal(),
            Action.ASSIGN,
            Resource(kind=ResourceKind.TASK, owner_id=assignee_id, assigner_id=assigner.id),
        )

        assignee = self.db.get(User, assignee_id)
        if assignee is None:
            raise NotFound("user not found")

        task = Task(
            user_id=assignee.id,
            title=title,
            description=description,
            week_start=week_start,
            priority=priority.value,
            assigned_by=assigner.id,
        )
        task.set_status(TaskStatus.PENDING)
        self.db.add(task)
        self._save(task)

        logger.info("Task %s assigned to user %s by user %s", task.id, assignee.id, assigner.id)
        return task

    def update_status(self, requester: User, task_id: int, status) -> Task:
        new_status = parse_status(status)
        task = self._get_task(task_id)
        authorize(requester.as_principal(), Action.UPDATE_STATUS, task_resource(task))

        task.set_status(new_status)
        self._save(task)

        logger.info("Task %s moved to %s by user %s", task.id, new_status.value, requester.id)
        return task

    def complete_task(self, requester: User, task_id: int) -> Task:
        return self.update_status(requester, task_id, TaskStatus.COMPLETED.value)

    def update_fields(self, requester: User, task_id: int, patch: dict) -> Task:
        """Partially update title, description, week, priority or owner.

        A null description or week clears it; other null fields are ignored.
        """
        patch = {
            key: value for key, value in (patch or {}).items() if value is not None or key in CLEARABLE_FIELDS
        }
        if not patch:
            raise ValidationError("no fields to update")

        task = self._get_task(task_id)
        principal = requester.as_principal()
        authorize(principal, Action.UPDATE, task_resource(task))

        if "title" in patch:
            task.title = clean_title(patch["title"])
        if "description" in patch:
            task.description = clean_description(patch["description"])
        if "week_start" in patch:
            task.week_start = patch["week_start"]
        if "priority" in patch:
            task.priority = parse_priority(patch["priority"]).value

        new_owner_id = patch.get("user_id")
        if new_owner_id is not None and new_owner_id != task.user_id:
            authorize(
                principal,
                Action.ASSIGN,
                Resource(kind=ResourceKind.TASK, id=task.id, owner_id=new_owner_id, assigner_id=requester.id),
            )
            if self.db.get(User, new_owner_id) is None:
                raise NotFound("user not found")
            task.user_id = new_owner_id

        self._save(task)
        logger.info("Task %s updated by user %s (%s)", task.id, requester.id, ", ".join(sorted(patch)))
        return task

    def list_for_principal(self, user: User, week_start: Optional[date] = None) -> List[Task]:
        """Tasks the user owns, plus the ones it handed out when it can assign"""
        if can_assign(user.role):
            condition = or_(Task.user_id == user.id, Task.assigned_by == user.id)
        else:
            condition = Task.user_id == user.id

        query = self._query().filter(condition)
        if week_start is not None:
            query = query.filter(Task.week_start == week_start)

        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def list_all(self, requester: User) -> List[Task]:
        authorize(requester.as_principal(), Action.LIST_ALL, Resource(kind=ResourceKind.TASK))
        return self._query().order_by(Task.created_at.desc(), Task.id.desc()).all()

    def get_details(self, requester: User, task_id: int) -> Task:
        task = self._get_task(task_id)
        authorize(requester.as_principal(), Action.VIEW, task_resource(task))
        return task

    def delete_task(self, requester: User, task_id: int) -> None:
        authorize(requester.as_principal(), Action.DELETE, Resource(kind=ResourceKind.TASK, id=task_id))

        task = self.db.get(Task, task_id)
        if task is None:
            logger.info("Delete of missing task %s by user %s ignored", task_id, requester.id)
            return

        self.db.delete(task)
        commit(self.db)
        logger.info("Task %s deleted by user %s", task_id, requester.id)

    def analytics(self, requester: User, week_start: Optional[date] = None) -> dict:
        """Completion totals and a per-user breakdown covering every user"""
        authorize(requester.as_principal(), Action.VIEW_ANALYTICS, Resource(kind=ResourceKind.TASK))

        completed_expr = func.coalesce(
            func.sum(case((Task.status == TaskStatus.COMPLETED.value, 1), else_=0)), 0
        )

        totals_query = self.db.query(func.count(Task.id), completed_expr)
        if week_start is not None:
            totals_query = totals_query.filter(Task.week_start == week_start)
        assigned, completed = totals_query.one()
        assigned, completed = int(assigned or 0), int(completed or 0)

        # the week filter lives in the join so users without tasks still show up
        join_condition = Task.user_id == User.id
        if week_start is not None:
            join_condition = and_(join_condition, Task.week_start == week_start)

        rows = (
            self.db.query(
                User.id,
                User.name,
                func.count(Task.id).label("assigned"),
                completed_expr.label("completed"),
            )
            .outerjoin(Task, join_condition)
            .group_by(User.id, User.name)
            .order_by(User.name.asc(), User.id.asc())
            .all()
        )

        per_user = []
        for row in rows:
            user_assigned = int(row.assigned or 0)
            user_completed = int(row.completed or 0)
            per_user.append({
                "user_id": row.id,
                "name": row.name,
                "assigned": user_assigned,
                "completed": user_completed,
                "completion_rate": completion_rate(user_completed, user_assigned),
            })

        return {
            "totals": {
                "assigned": assigned,
                "completed": completed,
                "completion_rate": completion_rate(completed, assigned),
            },
            "perUser": per_user,
        }
