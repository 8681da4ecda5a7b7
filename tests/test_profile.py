import io
from datetime import date, timedelta

from healthsync.extensions import db
from healthsync.models import User, UserActionLog, UserProfile

PROFILE = {
    "full_name": "Casey Customer",
    "dob": "1990-04-12",
    "gender": "Female",
    "height_cm": 168,
    "weight_kg": 64.5,
    "activity_level": "Active",
}


def test_get_profile(client, customer, auth_headers):
    body = client.get("/api/userprofile", headers=auth_headers).get_json()
    assert body["email"] == customer.email
    assert body["full_name"] == "Casey Customer"
    assert body["is_complete"] is False


def test_update_profile_completes_it(client, customer, auth_headers):
    response = client.put("/api/userprofile", json=PROFILE, headers=auth_headers)
    assert response.status_code == 200
    profile = response.get_json()["profile"]
    assert profile["is_complete"] is True
    assert profile["gender"] == "Female"
    assert profile["age"] >= 30
    assert UserActionLog.query.filter_by(user_id=customer.id, action_type="profile_updated").count() == 1


def test_login_reports_complete_profile(client, customer, auth_headers):
    client.put("/api/userprofile", json=PROFILE, headers=auth_headers)
    login = client.post("/api/auth/login", json={"email": customer.email, "password": "secret123"}).get_json()
    assert login["is_profile_complete"] is True


def test_update_profile_validation(client, auth_headers):
    future = (date.today() + timedelta(days=1)).isoformat()
    cases = [
        ({"dob": future}, "dob"),
        ({"gender": "Robot"}, "gender"),
        ({"height_cm": 20}, "height_cm"),
        ({"weight_kg": 900}, "weight_kg"),
        ({"activity_level": "Couch"}, "activity_level"),
    ]
    for overrides, field in cases:
        response = client.put("/api/userprofile", json=dict(PROFILE, **overrides), headers=auth_headers)
        assert response.status_code == 400
        assert field in response.get_json()["errors"]


def test_upload_avatar(client, customer, auth_headers):
    data = {"file": (io.BytesIO(b"\xff\xd8\xff" + b"0" * 32), "me.jpg", "image/jpeg")}
    response = client.post("/api/userprofile/upload-avatar", data=data,
                           content_type="multipart/form-data", headers=auth_headers)
    assert response.status_code == 200
    url = response.get_json()["avatar_url"]
    assert url.startswith("/static/uploads/avatars/user_")

    user = db.session.get(User, customer.id)
    assert user.avatar_url == url
    assert user.profile.avatar_url == url


def test_upload_avatar_too_large(app, client, auth_headers):
    app.config["MAX_AVATAR_SIZE"] = 10
    data = {"file": (io.BytesIO(b"0" * 64), "me.png", "image/png")}
    response = client.post("/api/userprofile/upload-avatar", data=data,
                           content_type="multipart/form-data", headers=auth_headers)
    assert response.status_code == 400


def test_profile_completeness_rules():
    today = date(2026, 6, 1)
    profile = UserProfile(full_name="Kim", gender="Male", height_cm=180, weight_kg=80, dob=date(1995, 1, 1))
    assert profile.is_complete(today)

    assert not UserProfile(full_name="Kim", gender="Unknown", height_cm=180, weight_kg=80,
                           dob=date(1995, 1, 1)).is_complete(today)
    assert not UserProfile(full_name="Kim", gender="Male", height_cm=0, weight_kg=80,
                           dob=date(1995, 1, 1)).is_complete(today)
    assert not UserProfile(full_name="  ", gender="Male", height_cm=180, weight_kg=80,
                           dob=date(1995, 1, 1)).is_complete(today)
    assert not UserProfile(full_name="Kim", gender="Male", height_cm=180, weight_kg=80,
                           dob=date(2020, 1, 1)).is_complete(today)
