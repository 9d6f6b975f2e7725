from .user import User
from .task import Task, TaskStatus, TaskPriority
from .incentive import Incentive, IncentiveType
from .admin import Admin, AdminTask
