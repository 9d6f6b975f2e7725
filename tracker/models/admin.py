# tracker/models/admin.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tracker.database import Base
from tracker.models.task import StatusTrackingMixin, TaskPriority
from tracker.utils.policy import AdminRole, Principal


class Admin(Base):
    """Admin-portal account (main admin, sub-admin or manager)"""

    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default=AdminRole.SUB_ADMIN.value, index=True)
    parent_admin_id = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    parent = relationship("Admin", remote_side=[id])

    @property
    def admin_role(self) -> AdminRole:
        return AdminRole(self.role)

    def as_principal(self) -> Principal:
        return Principal(id=self.id, role=self.admin_role, parent_id=self.parent_admin_id)


class AdminTask(StatusTrackingMixin, Base):
    """Task handed from one manager (or the main admin) to a manager"""

    __tablename__ = "admin_tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    assigned_to = Column(Integer, ForeignKey("admins.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_by = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True, index=True)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM.value)
    week_start = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assignee = relationship("Admin", foreign_keys=[assigned_to])
    assigner = relationship("Admin", foreign_keys=[assigned_by])
