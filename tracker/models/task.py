# tracker/models/task.py
import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tracker.database import Base


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class StatusTrackingMixin:
    """Status column whose completion timestamp follows the status.

    ``completed_at`` is set exactly when the status is ``completed``.
    """

    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)
    completed_at = Column(DateTime, nullable=True)

    def set_status(self, status: TaskStatus) -> None:
        self.status = status.value
        if status == TaskStatus.COMPLETED:
            self.completed_at = datetime.utcnow()
        else:
            self.completed_at = None


class Task(StatusTrackingMixin, Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    week_start = Column(Date, nullable=True, index=True)
    assigned_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", foreign_keys=[user_id], back_populates="tasks")
    assigner = relationship("User", foreign_keys=[assigned_by])

    @property
    def user_name(self):
        return self.owner.name if self.owner else None

    @property
    def user_email(self):
        return self.owner.email if self.owner else None

    @property
    def assigned_by_name(self):
        return self.assigner.name if self.assigner else None

    @property
    def assigned_by_email(self):
        return self.assigner.email if self.assigner else None
