# tests/test_policy.py

import pytest

from tracker.exceptions import Forbidden, ValidationError
from tracker.utils.policy import (
    Action,
    AdminRole,
    Principal,
    Resource,
    ResourceKind,
    UserRole,
    authorize,
    can_assign,
    evaluate,
    parse_user_role,
)

ADMIN = Principal(id=1, role=UserRole.ADMIN)
ASSISTANT = Principal(id=2, role=UserRole.ASSISTANT)
EMPLOYEE = Principal(id=3, role=UserRole.EMPLOYEE)


def task(owner_id, assigner_id=None):
    return Resource(kind=ResourceKind.TASK, id=10, owner_id=owner_id, assigner_id=assigner_id)


def test_parse_user_role_is_case_insensitive_and_rejects_unknown():
    assert parse_user_role(" Admin ") == UserRole.ADMIN
    assert parse_user_role("assistant") == UserRole.ASSISTANT
    assert parse_user_role("superuser") is None
    assert parse_user_role(None) is None


def test_can_assign_roles():
    assert can_assign(UserRole.ADMIN)
    assert can_assign(UserRole.ASSISTANT)
    assert not can_assign(UserRole.EMPLOYEE)
    assert can_assign(AdminRole.MAIN_ADMIN)
    assert can_assign(AdminRole.MANAGER)
    assert not can_assign(AdminRole.SUB_ADMIN)


def test_admin_may_do_everything_on_tasks():
    for action in Action:
        assert evaluate(ADMIN, action, task(owner_id=99)).allowed


def test_employee_only_touches_own_tasks():
    assert evaluate(EMPLOYEE, Action.UPDATE_STATUS, task(owner_id=3)).allowed
    assert evaluate(EMPLOYEE, Action.VIEW, task(owner_id=3)).allowed

    decision = evaluate(EMPLOYEE, Action.UPDATE_STATUS, task(owner_id=4))
    assert not decision.allowed
    assert decision.error is Forbidden


@pytest.mark.parametrize(
    "action",
    [Action.LIST_ALL, Action.ASSIGN, Action.VIEW_ANALYTICS, Action.DELETE],
)
def test_employee_never_reaches_across_owners(action):
    assert not evaluate(EMPLOYEE, action, task(owner_id=3)).allowed


def test_employee_keeps_access_to_tasks_it_assigned():
    assert evaluate(EMPLOYEE, Action.UPDATE_STATUS, task(owner_id=4, assigner_id=3)).allowed


def test_assistant_manages_tasks_but_not_deletion_or_analytics():
    assert evaluate(ASSISTANT, Action.ASSIGN, task(owner_id=3)).allowed
    assert evaluate(ASSISTANT, Action.UPDATE_STATUS, task(owner_id=3)).allowed
    assert not evaluate(ASSISTANT, Action.DELETE, task(owner_id=3)).allowed
    assert not evaluate(ASSISTANT, Action.VIEW_ANALYTICS, Resource(kind=ResourceKind.TASK)).allowed
    assert not evaluate(ASSISTANT, Action.LIST_ALL, Resource(kind=ResourceKind.TASK)).allowed


def test_incentives_are_admin_managed():
    incentive = Resource(kind=ResourceKind.INCENTIVE, owner_id=3)
    assert evaluate(ADMIN, Action.CREATE, incentive).allowed
    assert not evaluate(ASSISTANT, Action.CREATE, incentive).allowed
    assert not evaluate(EMPLOYEE, Action.CREATE, incentive).allowed
    assert evaluate(EMPLOYEE, Action.VIEW, incentive).allowed


def test_nobody_deletes_their_own_account():
    decision = evaluate(ADMIN, Action.DELETE, Resource(kind=ResourceKind.ACCOUNT, id=ADMIN.id))
    assert not decision.allowed
    assert decision.error is ValidationError


def test_top_level_accounts_cannot_be_deleted():
    target = Resource(kind=ResourceKind.ACCOUNT, id=50, role=UserRole.ADMIN)
    with pytest.raises(Forbidden):
        authorize(ADMIN, Action.DELETE, target)

    main = Principal(id=1, role=AdminRole.MAIN_ADMIN)
    other_main = Resource(kind=ResourceKind.ACCOUNT, id=2, role=AdminRole.MAIN_ADMIN)
    assert not evaluate(main, Action.DELETE, other_main).allowed


def test_sub_admin_sees_siblings_under_the_same_parent():
    sub = Principal(id=11, role=AdminRole.SUB_ADMIN, parent_id=1)
    sibling = Resource(kind=ResourceKind.ACCOUNT, id=12, role=AdminRole.SUB_ADMIN, parent_id=1)
    stranger = Resource(kind=ResourceKind.ACCOUNT, id=13, role=AdminRole.SUB_ADMIN, parent_id=2)

    assert evaluate(sub, Action.VIEW, sibling).allowed
    assert evaluate(sub, Action.UPDATE, sibling).allowed
    assert not evaluate(sub, Action.VIEW, stranger).allowed


def test_sub_admin_without_parent_has_no_siblings():
    orphan = Principal(id=11, role=AdminRole.SUB_ADMIN, parent_id=None)
    other_orphan = Resource(kind=ResourceKind.ACCOUNT, id=12, role=AdminRole.SUB_ADMIN, parent_id=None)
    assert not evaluate(orphan, Action.VIEW, other_orphan).allowed


def test_sub_admin_never_reaches_the_main_admin():
    sub = Principal(id=11, role=AdminRole.SUB_ADMIN, parent_id=1)
    main = Resource(kind=ResourceKind.ACCOUNT, id=1, role=AdminRole.MAIN_ADMIN, parent_id=1)
    assert not evaluate(sub, Action.VIEW, main).allowed
    assert not evaluate(sub, Action.UPDATE, main).allowed


def test_sub_admin_cannot_create_or_delete_accounts():
    sub = Principal(id=11, role=AdminRole.SUB_ADMIN, parent_id=1)
    sibling = Resource(kind=ResourceKind.ACCOUNT, id=12, role=AdminRole.SUB_ADMIN, parent_id=1)
    assert not evaluate(sub, Action.CREATE, Resource(kind=ResourceKind.ACCOUNT, role=AdminRole.SUB_ADMIN)).allowed
    assert not evaluate(sub, Action.DELETE, sibling).allowed


def test_manager_task_rules():
    manager = Principal(id=21, role=AdminRole.MANAGER)
    assert evaluate(manager, Action.ASSIGN, Resource(kind=ResourceKind.TASK, owner_id=22)).allowed
    assert evaluate(manager, Action.UPDATE_STATUS, Resource(kind=ResourceKind.TASK, owner_id=21, assigner_id=22)).allowed
    assert evaluate(manager, Action.UPDATE_STATUS, Resource(kind=ResourceKind.TASK, owner_id=22, assigner_id=21)).allowed
    assert not evaluate(manager, Action.UPDATE_STATUS, Resource(kind=ResourceKind.TASK, owner_id=22, assigner_id=23)).allowed


def test_sub_admins_do_not_handle_tasks():
    sub = Principal(id=11, role=AdminRole.SUB_ADMIN, parent_id=1)
    assert not evaluate(sub, Action.ASSIGN, Resource(kind=ResourceKind.TASK, owner_id=21)).allowed


def test_schemes_do_not_cross():
    main = Principal(id=1, role=AdminRole.MAIN_ADMIN)
    employee_account = Resource(kind=ResourceKind.ACCOUNT, id=3, role=UserRole.EMPLOYEE)
    assert not evaluate(main, Action.VIEW, employee_account).allowed

    portal_account = Resource(kind=ResourceKind.ACCOUNT, id=11, role=AdminRole.SUB_ADMIN)
    assert not evaluate(ASSISTANT, Action.VIEW, portal_account).allowed


def test_only_main_admin_lists_every_portal_account():
    everyone = Resource(kind=ResourceKind.ACCOUNT)
    assert evaluate(Principal(id=1, role=AdminRole.MAIN_ADMIN), Action.LIST_ALL, everyone).allowed
    assert not evaluate(Principal(id=11, role=AdminRole.SUB_ADMIN, parent_id=1), Action.LIST_ALL, everyone).allowed
    assert not evaluate(Principal(id=21, role=AdminRole.MANAGER), Action.LIST_ALL, everyone).allowed
