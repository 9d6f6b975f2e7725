from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.models.user import User
from tracker.schemas.incentive import IncentiveCreate, IncentiveEnvelope, IncentiveList
from tracker.services.incentive_ledger import IncentiveLedger
from tracker.utils.auth import get_current_user

router = APIRouter()


@router.get("", response_model=IncentiveList)
def list_incentives(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"incentives": IncentiveLedger(db).list_for_user(current_user)}


@router.post("", response_model=IncentiveEnvelope)
def create_incentive(
    incentive: IncentiveCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    created = IncentiveLedger(db).create(
        current_user,
        user_id=incentive.user_id,
        type=incentive.type,
        amount=incentive.amount,
        reason=incentive.reason,
    )
    return {"incentive": created}


@router.get("/all", response_model=IncentiveList)
def list_all_incentives(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"incentives": IncentiveLedger(db).list_all(current_user)}


@router.delete("/{incentive_id}")
def delete_incentive(incentive_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    IncentiveLedger(db).delete(current_user, incentive_id)
    return {"success": True}
