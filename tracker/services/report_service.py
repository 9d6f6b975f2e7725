# tracker/services/report_service.py
import logging

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from tracker.models.incentive import Incentive, IncentiveType
from tracker.models.task import Task, TaskStatus
from tracker.models.user import User
from tracker.services.task_manager import completion_rate
from tracker.utils.policy import Action, Resource, ResourceKind, UserRole, authorize

logger = logging.getLogger(__name__)

OPEN_STATUSES = (TaskStatus.PENDING.value, TaskStatus.IN_PROGRESS.value)


def _count_where(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def _sum_where(condition, column):
    return func.coalesce(func.sum(case((condition, column), else_=0)), 0)


class ReportService:
    """Organisation-wide task and incentive figures for admins"""

    def __init__(self, db: Session):
        self.db = db

    def comprehensive(self, requester: User) -> dict:
        authorize(requester.as_principal(), Action.VIEW_ANALYTICS, Resource(kind=ResourceKind.TASK))

        report = {
            "tasks": self._task_stats(),
            "incentives": self._incentive_stats(),
            "employeePerformance": self._employee_performance(),
        }
        logger.info("Comprehensive report built for user %s", requester.id)
        return report

    def _task_stats(self) -> dict:
        total, completed, pending, in_progress = self.db.query(
            func.count(Task.id),
            _count_where(Task.status == TaskStatus.COMPLETED.value),
            _count_where(Task.status.in_(OPEN_STATUSES)),
            _count_where(Task.status == TaskStatus.IN_PROGRESS.value),
        ).one()
        return {
            "total": int(total or 0),
            "completed": int(completed or 0),
            "pending": int(pending or 0),
            "inProgress": int(in_progress or 0),
        }

    def _incentive_stats(self) -> dict:
        totals = {
            incentive_type: (int(count or 0), float(amount or 0))
            for incentive_type, count, amount in self.db.query(
                Incentive.type, func.count(Incentive.id), func.coalesce(func.sum(Incentive.amount), 0)
            ).group_by(Incentive.type)
        }
        bonus_count, bonus_total = totals.get(IncentiveType.BONUS.value, (0, 0.0))
        deduction_count, deduction_total = totals.get(IncentiveType.DEDUCTION.value, (0, 0.0))

        return {
            "bonuses": {"count": bonus_count, "total": bonus_total},
            "deductions": {"count": deduction_count, "total": deduction_total},
            "net": bonus_total - deduction_total,
        }

    def _employee_performance(self) -> list:
        # tasks and incentives are aggregated separately, joining both at once
        # would multiply each task row by the number of incentives
        task_counts = (
            self.db.query(
                Task.user_id.label("user_id"),
                func.count(Task.id).label("total"),
                _count_where(Task.status == TaskStatus.COMPLETED.value).label("completed"),
                _count_where(Task.status.in_(OPEN_STATUSES)).label("pending"),
            )
            .group_by(Task.user_id)
            .subquery()
        )
        incentive_sums = (
            self.db.query(
                Incentive.user_id.label("user_id"),
                func.count(Incentive.id).label("total"),
                _sum_where(Incentive.type == IncentiveType.BONUS.value, Incentive.amount).label("bonuses"),
                _sum_where(Incentive.type == IncentiveType.DEDUCTION.value, Incentive.amount).label("deductions"),
            )
            .group_by(Incentive.user_id)
            .subquery()
        )

        rows = (
            self.db.query(
                User.id,
                User.name,
                User.email,
                task_counts.c.total.label("total_tasks"),
                task_counts.c.completed.label("completed_tasks"),
                task_counts.c.pending.label("pending_tasks"),
                incentive_sums.c.total.label("total_incentives"),
                incentive_sums.c.bonuses.label("total_bonuses"),
                incentive_sums.c.deductions.label("total_deductions"),
            )
            .outerjoin(task_counts, task_counts.c.user_id == User.id)
            .outerjoin(incentive_sums, incentive_sums.c.user_id == User.id)
            .filter(User.user_type == UserRole.EMPLOYEE.value)
            .order_by(User.name.asc(), User.id.asc())
            .all()
        )

        performance = []
        for row in rows:
            total_tasks = int(row.total_tasks or 0)
            completed_tasks = int(row.completed_tasks or 0)
            bonuses = float(row.total_bonuses or 0)
            deductions = float(row.total_deductions or 0)
            performance.append({
                "id": row.id,
                "name": row.name,
                "email": row.email,
                "totalTasks": total_tasks,
                "completedTasks": completed_tasks,
                "pendingTasks": int(row.pending_tasks or 0),
                "completionRate": completion_rate(completed_tasks, total_tasks),
                "totalIncentives": int(row.total_incentives or 0),
                "totalBonuses": bonuses,
                "totalDeductions": deductions,
                "netIncentives": bonuses - deductions,
            })
        return performance
