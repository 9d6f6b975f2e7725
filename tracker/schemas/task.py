# tracker/schemas/task.py
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List

from tracker.models.task import TaskStatus, TaskPriority, TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH


class TaskBase(BaseModel):
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    week_start: Optional[date] = None
    priority: Optional[TaskPriority] = None


class TaskCreate(TaskBase):
    pass


class TaskAssign(TaskBase):
    user_id: int


class TaskStatusUpdate(BaseModel):
    status: str


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    week_start: Optional[date] = None
    priority: Optional[TaskPriority] = None
    user_id: Optional[int] = None


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    week_start: Optional[date] = None
    assigned_by: Optional[int] = None
    priority: TaskPriority
    created_at: datetime
    completed_at: Optional[datetime] = None

    # joined from users, not stored on the task
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    assigned_by_name: Optional[str] = None
    assigned_by_email: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class TaskEnvelope(BaseModel):
    task: TaskOut


class TaskList(BaseModel):
    tasks: List[TaskOut]


class CompletionTotals(BaseModel):
    assigned: int
    completed: int
    completion_rate: int


class UserCompletion(BaseModel):
    user_id: int
    name: Optional[str] = None
    assigned: int
    completed: int
    completion_rate: int


class TaskAnalytics(BaseModel):
    totals: CompletionTotals
    perUser: List[UserCompletion]
