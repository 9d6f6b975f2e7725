# tracker/schemas/admin.py
from pydantic import BaseModel, EmailStr, Field
from datetime import date, datetime
from typing import Optional, List

from tracker.models.task import TaskStatus, TaskPriority, TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH


class AdminLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AdminCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)


class AdminUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)


class AdminBasic(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = {
        "from_attributes": True
    }


class AdminOut(AdminBasic):
    parent_admin_id: Optional[int] = None
    created_at: Optional[datetime] = None


class AdminProfile(AdminOut):
    parent: Optional[AdminBasic] = None


class AdminProfileEnvelope(BaseModel):
    admin: AdminProfile


class AdminList(BaseModel):
    admins: List[AdminOut]


class SubAdminList(BaseModel):
    subAdmins: List[AdminOut]


class ManagerList(BaseModel):
    managers: List[AdminOut]


class SubAdminCreated(BaseModel):
    message: str
    subAdmin: AdminOut


class ManagerCreated(BaseModel):
    message: str
    manager: AdminOut


class AdminUpdated(BaseModel):
    message: str
    admin: AdminOut


class Message(BaseModel):
    message: str


class AdminTaskAssign(BaseModel):
    assignedTo: int
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    week_start: Optional[date] = None
    priority: Optional[TaskPriority] = None


class AdminTaskStatusUpdate(BaseModel):
    status: str


class AdminTaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    week_start: Optional[date] = None
    completed_at: Optional[datetime] = None
    assignedTo: Optional[AdminBasic] = Field(default=None, validation_alias="assignee")
    assignedBy: Optional[AdminBasic] = Field(default=None, validation_alias="assigner")
    createdAt: Optional[datetime] = Field(default=None, validation_alias="created_at")
    updatedAt: Optional[datetime] = Field(default=None, validation_alias="updated_at")

    model_config = {
        "from_attributes": True
    }


class AdminTaskEnvelope(BaseModel):
    message: str
    task: AdminTaskOut


class AdminTaskList(BaseModel):
    tasks: List[AdminTaskOut]
