from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: EmailStr
    password: str = Field(min_length=6)
    user_type: Optional[str] = None
    department: Optional[str] = None


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    user_type: str
    department: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class UserEnvelope(BaseModel):
    user: UserOut


class UserList(BaseModel):
    users: List[UserOut]


class RoleUpdate(BaseModel):
    user_type: str


class UserStats(BaseModel):
    employees: int
    assistants: int
    admins: int
    total: int


class UserStatsEnvelope(BaseModel):
    stats: UserStats
