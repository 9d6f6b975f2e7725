# tracker/models/incentive.py
import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tracker.database import Base


class IncentiveType(str, enum.Enum):
    BONUS = "bonus"
    DEDUCTION = "deduction"


class Incentive(Base):
    __tablename__ = "incentives"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    reason = Column(Text, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", foreign_keys=[user_id], back_populates="incentives")
    creator = relationship("User", foreign_keys=[created_by])

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def user_email(self):
        return self.user.email if self.user else None

    @property
    def created_by_name(self):
        return self.creator.name if self.creator else None

    @property
    def created_by_email(self):
        return self.creator.email if self.creator else None
