from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class IncentiveCreate(BaseModel):
    user_id: int
    type: str
    amount: float
    reason: str = ""


class IncentiveOut(BaseModel):
    id: int
    user_id: int
    type: str
    amount: float
    reason: str
    created_by: Optional[int] = None
    created_at: datetime

    user_name: Optional[str] = None
    user_email: Optional[str] = None
    created_by_name: Optional[str] = None
    created_by_email: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class IncentiveEnvelope(BaseModel):
    incentive: IncentiveOut


class IncentiveList(BaseModel):
    incentives: List[IncentiveOut] = Field(default_factory=list)
