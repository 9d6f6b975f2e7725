# tests/test_incentives.py

import pytest

from tracker.exceptions import ValidationError
from tracker.services.incentive_ledger import parse_amount


def give(client, headers, creator, user, type="bonus", amount=50, reason="Great quarter"):
    return client.post(
        "/api/incentives",
        json={"user_id": user.id, "type": type, "amount": amount, "reason": reason},
        headers=headers(creator),
    )


def test_admin_records_bonus(client, admin_user, employee, headers):
    response = give(client, headers, admin_user, employee, amount=120.5)
    assert response.status_code == 200

    incentive = response.json()["incentive"]
    assert incentive["type"] == "bonus"
    assert incentive["amount"] == 120.5
    assert incentive["user_email"] == employee.email
    assert incentive["created_by"] == admin_user.id
    assert incentive["created_by_name"] == "Boss"


@pytest.mark.parametrize("amount, status", [(0, 400), (-5, 400), (0.01, 200)])
def test_amount_must_be_positive(client, admin_user, employee, headers, amount, status):
    assert give(client, headers, admin_user, employee, amount=amount).status_code == status


def test_type_and_reason_are_validated(client, admin_user, employee, headers):
    bad_type = give(client, headers, admin_user, employee, type="gift")
    assert bad_type.status_code == 400
    assert bad_type.json()["detail"] == "type must be bonus or deduction"

    assert give(client, headers, admin_user, employee, reason="   ").status_code == 400
    assert give(client, headers, admin_user, employee, type="Deduction").status_code == 200


def test_only_admins_create_incentives(client, assistant_user, employee, headers):
    assert give(client, headers, assistant_user, employee).status_code == 403
    assert give(client, headers, employee, employee).status_code == 403


def test_target_must_exist(client, admin_user, headers):
    response = client.post(
        "/api/incentives",
        json={"user_id": 999, "type": "bonus", "amount": 10, "reason": "Ghost"},
        headers=headers(admin_user),
    )
    assert response.status_code == 404


def test_employee_lists_only_own_incentives(client, admin_user, employee, make_user, headers):
    other = make_user("other@example.com")
    give(client, headers, admin_user, employee, reason="first")
    give(client, headers, admin_user, other, reason="not mine")
    give(client, headers, admin_user, employee, type="deduction", amount=10, reason="second")

    response = client.get("/api/incentives", headers=headers(employee))
    assert response.status_code == 200
    assert [item["reason"] for item in response.json()["incentives"]] == ["second", "first"]

    assert client.get("/api/incentives/all", headers=headers(employee)).status_code == 403
    everything = client.get("/api/incentives/all", headers=headers(admin_user)).json()["incentives"]
    assert len(everything) == 3


def test_delete_incentive(client, admin_user, employee, headers):
    incentive_id = give(client, headers, admin_user, employee).json()["incentive"]["id"]

    assert client.delete(f"/api/incentives/{incentive_id}", headers=headers(employee)).status_code == 403
    assert client.delete(f"/api/incentives/{incentive_id}", headers=headers(admin_user)).json() == {"success": True}
    assert client.delete(f"/api/incentives/{incentive_id}", headers=headers(admin_user)).status_code == 404
    assert client.get("/api/incentives", headers=headers(employee)).json()["incentives"] == []


@pytest.mark.parametrize("amount", [0.004, 1e13, 9999999999.999])
def test_amount_must_fit_the_stored_precision(client, admin_user, employee, headers, amount):
    response = give(client, headers, admin_user, employee, amount=amount)
    assert response.status_code == 400
    assert client.get("/api/incentives/all", headers=headers(admin_user)).json()["incentives"] == []


def test_amount_is_rounded_to_cents(client, admin_user, employee, headers):
    response = give(client, headers, admin_user, employee, amount=10.005)
    assert response.status_code == 200
    assert response.json()["incentive"]["amount"] == 10.01


@pytest.mark.parametrize("value", ["nan", "inf", "-1e300", "abc", None])
def test_parse_amount_rejects_non_positive_numbers(value):
    with pytest.raises(ValidationError):
        parse_amount(value)
