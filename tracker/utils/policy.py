# tracker/utils/policy.py
"""Role policy for both account schemes.

Employee-facing accounts use a flat role set (admin / assistant / employee).
Admin-portal accounts use a scoped set (main_admin / sub_admin / manager)
where a sub_admin belongs to a parent main_admin. The two enumerations are
kept separate and only meet in :func:`evaluate`, which dispatches on the
principal's role type.

Everything here is pure: callers load the target resource first and pass
its owning / parent identifiers in a :class:`Resource`.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Type, Union

from tracker.exceptions import Forbidden, TrackerError, ValidationError


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    ASSISTANT = "assistant"
    EMPLOYEE = "employee"


class AdminRole(str, enum.Enum):
    MAIN_ADMIN = "main_admin"
    SUB_ADMIN = "sub_admin"
    MANAGER = "manager"


Role = Union[UserRole, AdminRole]

TOP_LEVEL_ROLES = (UserRole.ADMIN, AdminRole.MAIN_ADMIN)


class Action(str, enum.Enum):
    VIEW = "view"
    LIST_ALL = "list_all"
    CREATE = "create"
    ASSIGN = "assign"
    UPDATE = "update"
    UPDATE_STATUS = "update_status"
    DELETE = "delete"
    VIEW_ANALYTICS = "view_analytics"


class ResourceKind(str, enum.Enum):
    TASK = "task"
    INCENTIVE = "incentive"
    ACCOUNT = "account"


@dataclass(frozen=True)
class Principal:
    id: int
    role: Role
    parent_id: Optional[int] = None


@dataclass(frozen=True)
class Resource:
    kind: ResourceKind
    id: Optional[int] = None
    owner_id: Optional[int] = None
    assigner_id: Optional[int] = None
    role: Optional[Role] = None
    parent_id: Optional[int] = None


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""
    error: Type[TrackerError] = Forbidden

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str, error: Type[TrackerError] = Forbidden) -> "Decision":
        return cls(False, reason, error)

    def enforce(self) -> None:
        if not self.allowed:
            raise self.error(self.reason)


ALLOW = Decision.allow()

ASSISTANT_TASK_ACTIONS = {
    Action.VIEW,
    Action.CREATE,
    Action.ASSIGN,
    Action.UPDATE,
    Action.UPDATE_STATUS,
}


def parse_user_role(value: Optional[str]) -> Optional[UserRole]:
    try:
        return UserRole((value or "").strip().lower())
    except ValueError:
        return None


def can_assign(role: Role) -> bool:
    """Whether the role may create tasks owned by someone else"""
    return role in (UserRole.ADMIN, UserRole.ASSISTANT, AdminRole.MAIN_ADMIN, AdminRole.MANAGER)


def _check_self_protection(principal: Principal, action: Action, resource: Resource) -> Optional[Decision]:
    if resource.kind != ResourceKind.ACCOUNT or action != Action.DELETE:
        return None
    if resource.id is not None and resource.id == principal.id:
        return Decision.deny("cannot delete your own account", ValidationError)
    if resource.role in TOP_LEVEL_ROLES:
        return Decision.deny("cannot delete the top-level admin account")
    return None


def _evaluate_user_scheme(principal: Principal, action: Action, resource: Resource) -> Decision:
    role = principal.role

    if role == UserRole.ADMIN:
        return ALLOW

    if isinstance(resource.role, AdminRole):
        return Decision.deny("forbidden - admin portal resource")

    if role == UserRole.ASSISTANT:
        if resource.kind == ResourceKind.TASK and action in ASSISTANT_TASK_ACTIONS:
            return ALLOW
        if resource.kind == ResourceKind.ACCOUNT and action in (Action.VIEW, Action.LIST_ALL):
            return ALLOW
        if resource.kind == ResourceKind.INCENTIVE and action == Action.VIEW and resource.owner_id == principal.id:
            return ALLOW
        return Decision.deny("forbidden - admin access required")

    # employee: only its own resources, and nothing that reaches across owners
    if action in (Action.LIST_ALL, Action.ASSIGN, Action.VIEW_ANALYTICS, Action.DELETE):
        return Decision.deny("forbidden - admin access required")
    if resource.kind == ResourceKind.INCENTIVE and action != Action.VIEW:
        return Decision.deny("forbidden - admin access required")
    if resource.kind == ResourceKind.ACCOUNT and action == Action.UPDATE:
        return Decision.deny("forbidden - admin access required")
    if resource.owner_id is not None and resource.owner_id == principal.id:
        return ALLOW
    # whoever handed out a task keeps a say over it, even after a demotion
    if resource.kind == ResourceKind.TASK and resource.assigner_id == principal.id and action != Action.CREATE:
        return ALLOW
    return Decision.deny("forbidden")


def _evaluate_admin_account(principal: Principal, action: Action, resource: Resource) -> Decision:
    role = principal.role
    is_self = resource.id is not None and resource.id == principal.id

    if role == AdminRole.MAIN_ADMIN:
        if is_self:
            return ALLOW
        if resource.role == AdminRole.MAIN_ADMIN:
            return Decision.deny("forbidden - cannot act on another main admin")
        return ALLOW

    if role == AdminRole.SUB_ADMIN:
        # a main admin target is refused before any sibling check
        if resource.role == AdminRole.MAIN_ADMIN:
            return Decision.deny("forbidden - sub-admins cannot access main admin resources")
        if action in (Action.CREATE, Action.DELETE):
            return Decision.deny("forbidden - only main admin can manage admin accounts")
        if action == Action.LIST_ALL:
            if resource.role == AdminRole.SUB_ADMIN:
                return ALLOW
            return Decision.deny("forbidden")
        if is_self:
            return ALLOW
        if (
            resource.role == AdminRole.SUB_ADMIN
            and principal.parent_id is not None
            and resource.parent_id == principal.parent_id
        ):
            return ALLOW
        return Decision.deny("forbidden - can only access sub-admins under the same parent admin")

    # manager
    if action == Action.LIST_ALL and resource.role == AdminRole.MANAGER:
        return ALLOW
    if is_self and action in (Action.VIEW, Action.UPDATE):
        return ALLOW
    return Decision.deny("forbidden")


def _evaluate_admin_task(principal: Principal, action: Action, resource: Resource) -> Decision:
    role = principal.role

    if role == AdminRole.MAIN_ADMIN:
        return ALLOW

    if role == AdminRole.MANAGER:
        if action in (Action.CREATE, Action.ASSIGN):
            return ALLOW
        if action in (Action.VIEW, Action.UPDATE, Action.UPDATE_STATUS):
            if principal.id in (resource.owner_id, resource.assigner_id):
                return ALLOW
            return Decision.deny("forbidden - can only update tasks assigned to you or by you")
        return Decision.deny("forbidden - main admin access required")

    return Decision.deny("forbidden - manager or main admin access required")


def _evaluate_admin_scheme(principal: Principal, action: Action, resource: Resource) -> Decision:
    if isinstance(resource.role, UserRole):
        return Decision.deny("forbidden - employee account resource")
    if resource.kind == ResourceKind.ACCOUNT:
        return _evaluate_admin_account(principal, action, resource)
    if resource.kind == ResourceKind.TASK:
        return _evaluate_admin_task(principal, action, resource)
    return Decision.deny("forbidden - incentives are managed by employee-side admins")


def evaluate(principal: Principal, action: Action, resource: Resource) -> Decision:
    """Decide whether ``principal`` may perform ``action`` on ``resource``"""
    protected = _check_self_protection(principal, action, resource)
    if protected is not None:
        return protected

    if isinstance(principal.role, UserRole):
        return _evaluate_user_scheme(principal, action, resource)
    return _evaluate_admin_scheme(principal, action, resource)


def authorize(principal: Principal, action: Action, resource: Resource) -> None:
    """Raise the decision's error when the action is not allowed"""
    evaluate(principal, action, resource).enforce()
