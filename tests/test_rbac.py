from healthsync import permissions as perm
from healthsync.extensions import db
from healthsync.models import Permission, Role, RolePermission
from healthsync.utils.decorators import user_has_permission


def test_missing_token_is_401(client):
    response = client.get("/api/goals")
    assert response.status_code == 401


def test_garbage_token_is_401(client):
    response = client.get("/api/goals", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_customer_cannot_reach_admin_endpoints(client, auth_headers):
    response = client.get("/api/admin/users", headers=auth_headers)
    assert response.status_code == 403
    assert "USER_READ" in response.get_json()["msg"]


def test_admin_can_reach_admin_endpoints(client, admin_headers):
    assert client.get("/api/admin/users", headers=admin_headers).status_code == 200


def test_admin_has_no_goal_write_permission(client, admin_headers):
    response = client.post("/api/goals", json={
        "type": "weight_loss", "target_value": 70, "start_date": "2026-01-01"
    }, headers=admin_headers)
    assert response.status_code == 403


def test_inactive_user_is_rejected(client, customer, auth_headers):
    customer.is_active = False
    db.session.commit()
    assert client.get("/api/goals", headers=auth_headers).status_code == 401
    assert client.get("/api/userprofile", headers=auth_headers).status_code == 401


def test_deleted_user_is_rejected(client, customer, auth_headers):
    db.session.delete(customer)
    db.session.commit()
    assert client.get("/api/goals", headers=auth_headers).status_code == 401


def test_revoked_permission_takes_effect_immediately(client, customer, auth_headers):
    assert client.get("/api/goals", headers=auth_headers).status_code == 200

    role = Role.query.filter_by(role_name=perm.ROLE_CUSTOMER).one()
    permission = Permission.query.filter_by(permission_code=perm.GOAL_READ).one()
    RolePermission.query.filter_by(role_id=role.id, permission_id=permission.id).delete()
    db.session.commit()

    assert not user_has_permission(customer.id, perm.GOAL_READ)
    assert client.get("/api/goals", headers=auth_headers).status_code == 403


def test_health_needs_no_token(client):
    response = client.get("/api/chat/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"
