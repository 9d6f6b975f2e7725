# tracker/routers/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.models.user import User
from tracker.schemas.reports import ComprehensiveReport
from tracker.services.report_service import ReportService
from tracker.utils.auth import get_current_user

router = APIRouter()


@router.get("", response_model=ComprehensiveReport)
def comprehensive_report(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Task, incentive and per-employee figures for the whole organisation"""
    return ReportService(db).comprehensive(current_user)
