from datetime import datetime, timedelta
from urllib.parse import urlparse, parse_qs

from healthsync.extensions import db
from healthsync.models import User, UserActionLog
from healthsync.services.codes import CodeStore


def register(client, mailer, email="new@example.com", password="secret123", path="/api/auth/register"):
    client.post("/api/auth/send-verification-code", json={"email": email})
    code = mailer.last_code("verification", email)
    return client.post(path, json={
        "email": email, "password": password, "verification_code": code, "full_name": "New Person"
    })


def test_register_with_emailed_code(client, mailer):
    response = register(client, mailer)
    assert response.status_code == 200
    body = response.get_json()
    assert body["token"]
    assert body["email"] == "new@example.com"
    assert body["role"] == "Customer"
    assert "GOAL_CREATE" in body["permissions"]
    assert body["requires_password"] is False
    assert body["is_profile_complete"] is False

    user = User.query.filter_by(email="new@example.com").one()
    assert user.email_confirmed
    assert user.profile.full_name == "New Person"


def test_register_rejects_wrong_code(client, mailer):
    client.post("/api/auth/send-verification-code", json={"email": "new@example.com"})
    response = client.post("/api/auth/register", json={
        "email": "new@example.com", "password": "secret123", "verification_code": "not-it"
    })
    assert response.status_code == 400
    assert User.query.filter_by(email="new@example.com").first() is None


def test_register_rejects_duplicate_email(client, mailer, customer):
    response = register(client, mailer, email=customer.email)
    assert response.status_code == 400
    assert response.get_json()["msg"] == "Email already exists"


def test_register_validates_password_length(client, mailer):
    response = register(client, mailer, password="123")
    assert response.status_code == 400
    assert "password" in response.get_json()["errors"]


def test_verify_code_endpoint(client, mailer):
    client.post("/api/auth/send-verification-code", json={"email": "new@example.com"})
    code = mailer.last_code("verification", "new@example.com")

    ok = client.post("/api/auth/verify-code", json={"email": "new@example.com", "code": code})
    assert ok.status_code == 200
    assert ok.get_json()["success"] is True

    bad = client.post("/api/auth/verify-code", json={"email": "new@example.com", "code": "000000x"})
    assert bad.status_code == 400


def test_register_admin(client, mailer):
    response = register(client, mailer, email="boss@example.com", path="/api/auth/register-admin")
    assert response.status_code == 200
    assert response.get_json()["role"] == "Admin"


def test_register_admin_disabled(app, client, mailer):
    app.config["ADMIN_REGISTRATION_ENABLED"] = False
    response = register(client, mailer, email="boss@example.com", path="/api/auth/register-admin")
    assert response.status_code == 404


def test_login(client, customer):
    response = client.post("/api/auth/login", json={"email": "Casey@Example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.get_json()
    assert body["user_id"] == customer.id
    assert body["full_name"] == "Casey Customer"

    assert db.session.get(User, customer.id).last_login_at is not None
    assert UserActionLog.query.filter_by(user_id=customer.id, action_type="login").count() == 1


def test_login_wrong_password(client, customer):
    response = client.post("/api/auth/login", json={"email": customer.email, "password": "wrong"})
    assert response.status_code == 401
    assert response.get_json()["msg"] == "Invalid email or password"


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert response.status_code == 401


def test_me(client, customer, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["email"] == customer.email


def test_password_reset_flow(client, mailer, customer):
    assert client.post("/api/auth/forgot-password", json={"email": customer.email}).status_code == 200
    otp = mailer.last_code("reset", customer.email)
    assert otp and len(otp) == 6

    assert client.post("/api/auth/verify-reset-otp", json={"email": customer.email, "otp": otp}).status_code == 200

    response = client.post("/api/auth/reset-password", json={
        "email": customer.email, "otp": otp, "new_password": "brand-new"
    })
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": customer.email, "password": "brand-new"})
    assert login.status_code == 200

    reused = client.post("/api/auth/reset-password", json={
        "email": customer.email, "otp": otp, "new_password": "another-one"
    })
    assert reused.status_code == 400


def test_forgot_password_unknown_email_is_silent(client, mailer):
    response = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert response.status_code == 200
    assert mailer.sent == []


def test_google_mobile_creates_customer(client, google):
    google.identities["id-token-1"] = {"email": "gina@gmail.com", "name": "Gina G", "picture": "https://pic/g.png"}

    response = client.post("/api/auth/google/mobile", json={"id_token": "id-token-1"})
    assert response.status_code == 200
    body = response.get_json()
    assert body["role"] == "Customer"
    assert body["requires_password"] is True
    assert body["is_profile_complete"] is False
    assert body["avatar_url"] == "https://pic/g.png"

    user = User.query.filter_by(email="gina@gmail.com").one()
    assert user.profile.gender == "Unknown"
    assert not user.has_password


def test_google_only_account_cannot_use_password_login(client, google):
    google.identities["id-token-1"] = {"email": "gina@gmail.com", "name": "Gina G", "picture": ""}
    client.post("/api/auth/google/mobile", json={"id_token": "id-token-1"})

    response = client.post("/api/auth/login", json={"email": "gina@gmail.com", "password": "whatever"})
    assert response.status_code == 401
    assert "Google" in response.get_json()["msg"]


def test_google_user_can_set_password_once(client, google, headers_for):
    google.identities["id-token-1"] = {"email": "gina@gmail.com", "name": "Gina G", "picture": ""}
    client.post("/api/auth/google/mobile", json={"id_token": "id-token-1"})
    headers = headers_for(User.query.filter_by(email="gina@gmail.com").one())

    assert client.post("/api/auth/set-password", json={"password": "secret123"}, headers=headers).status_code == 200
    assert client.post("/api/auth/set-password", json={"password": "secret456"}, headers=headers).status_code == 400

    login = client.post("/api/auth/login", json={"email": "gina@gmail.com", "password": "secret123"})
    assert login.status_code == 200


def test_google_rejects_admin_accounts(client, google, admin):
    google.identities["id-token-1"] = {"email": admin.email, "name": "Ada", "picture": ""}
    response = client.post("/api/auth/google/mobile", json={"id_token": "id-token-1"})
    assert response.status_code == 401


def test_google_invalid_token(client):
    response = client.post("/api/auth/google/mobile", json={"id_token": "unknown"})
    assert response.status_code == 401


def test_google_callback_redirects_with_token(client, google):
    google.identities["auth-code"] = {"email": "gina@gmail.com", "name": "Gina G", "picture": ""}

    response = client.get("/api/auth/google/callback?code=auth-code")
    assert response.status_code == 302
    location = urlparse(response.headers["Location"])
    assert location.netloc == "frontend.test"
    assert location.path == "/google/callback"
    params = parse_qs(location.query)
    assert params["token"][0]
    assert params["email"] == ["gina@gmail.com"]
    assert params["requiresPassword"] == ["true"]


def test_google_callback_without_code(client):
    response = client.get("/api/auth/google/callback?error=access_denied")
    assert response.status_code == 302
    location = urlparse(response.headers["Location"])
    assert location.path == "/login"
    assert parse_qs(location.query)["error"] == ["access_denied"]


def test_code_store_expiry_and_single_use():
    store = CodeStore(timedelta(minutes=5))
    now = datetime(2026, 1, 1, 12, 0)
    code = store.issue("A@example.com", now=now)

    assert store.check("a@example.com", code, now=now + timedelta(minutes=4))
    assert not store.check("a@example.com", code, now=now + timedelta(minutes=6))

    code = store.issue("a@example.com", now=now)
    assert store.consume("a@example.com", code, now=now)
    assert not store.consume("a@example.com", code, now=now)
