# tracker/models/user.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.utils.policy import Principal, UserRole


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    user_type = Column(String(20), nullable=False, default=UserRole.EMPLOYEE.value)
    department = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tasks = relationship(
        "Task",
        back_populates="owner",
        foreign_keys="Task.user_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    incentives = relationship(
        "Incentive",
        back_populates="user",
        foreign_keys="Incentive.user_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def role(self) -> UserRole:
        try:
            return UserRole(self.user_type)
        except ValueError:
            return UserRole.EMPLOYEE

    def as_principal(self) -> Principal:
        return Principal(id=self.id, role=self.role)
