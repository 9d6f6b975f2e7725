from pydantic import BaseModel
from typing import List, Optional


class TaskStats(BaseModel):
    total: int
    completed: int
    pending: int
    inProgress: int


class IncentiveTotals(BaseModel):
    count: int
    total: float


class IncentiveStats(BaseModel):
    bonuses: IncentiveTotals
    deductions: IncentiveTotals
    net: float


class EmployeePerformance(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    totalTasks: int
    completedTasks: int
    pendingTasks: int
    completionRate: int
    totalIncentives: int
    totalBonuses: float
    totalDeductions: float
    netIncentives: float


class ComprehensiveReport(BaseModel):
    tasks: TaskStats
    incentives: IncentiveStats
    employeePerformance: List[EmployeePerformance]
