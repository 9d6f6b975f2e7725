from .user import UserCreate, UserLogin, UserOut, UserEnvelope, UserList, RoleUpdate, UserStats, UserStatsEnvelope
from .admin import AdminLogin, AdminCreate, AdminUpdate, AdminBasic, AdminOut, AdminProfile, AdminTaskAssign, AdminTaskStatusUpdate, AdminTaskOut
from .tokens import Token, AdminToken
from .task import TaskCreate, TaskAssign, TaskStatusUpdate, TaskUpdate, TaskOut, TaskEnvelope, TaskList, TaskAnalytics
from .incentive import IncentiveCreate, IncentiveOut, IncentiveEnvelope, IncentiveList
from .reports import ComprehensiveReport
