import io
import os
from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from healthsync.clients import EXTENSION_KEY
from healthsync.extensions import db
from healthsync.models import Exercise, FoodItem
from healthsync.seed import EXERCISES


@pytest.fixture
def exercise_id(client, admin_headers):
    response = client.post("/api/exercises", json={
        "name": "Bulgarian Split Squat", "muscle_group": "Legs", "difficulty": "Intermediate", "equipment": "Dumbbells"
    }, headers=admin_headers)
    return response.get_json()["id"]


def png_upload(name="photo.png"):
    return {"file": (io.BytesIO(b"\x89PNG\r\n\x1a\n" + b"0" * 64), name, "image/png")}


def test_exercise_listing_is_paginated(client, auth_headers):
    body = client.get("/api/exercises?page=2&page_size=5", headers=auth_headers).get_json()
    assert body["total"] == len(EXERCISES)
    assert body["page"] == 2
    assert body["page_size"] == 5
    assert len(body["items"]) == 5


def test_exercise_search(client, auth_headers):
    items = client.get("/api/exercises?search=press", headers=auth_headers).get_json()["items"]
    assert items
    assert all("press" in item["name"].lower() for item in items)


def test_customer_cannot_create_exercise(client, auth_headers):
    response = client.post("/api/exercises", json={"name": "Muscle Up", "muscle_group": "Back"}, headers=auth_headers)
    assert response.status_code == 403


def test_admin_creates_and_updates_exercise(client, admin, admin_headers, exercise_id):
    exercise = client.get(f"/api/exercises/{exercise_id}", headers=admin_headers).get_json()
    assert exercise["name"] == "Bulgarian Split Squat"

    response = client.put(f"/api/exercises/{exercise_id}", json={"difficulty": "Advanced"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()["exercise"]["difficulty"] == "Advanced"
    assert response.get_json()["exercise"]["name"] == "Bulgarian Split Squat"


def test_invalid_difficulty(client, admin_headers):
    response = client.post("/api/exercises", json={
        "name": "Muscle Up", "muscle_group": "Back", "difficulty": "Impossible"
    }, headers=admin_headers)
    assert response.status_code == 400
    assert "difficulty" in response.get_json()["errors"]


def test_delete_unused_exercise(client, admin_headers, exercise_id):
    assert client.delete(f"/api/exercises/{exercise_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/exercises/{exercise_id}", headers=admin_headers).status_code == 404


def test_delete_exercise_in_use_is_rejected(client, admin_headers, auth_headers, exercise_id):
    client.post("/api/workout/workout-logs", json={
        "workout_date": date.today().isoformat(),
        "duration_min": 30,
        "exercise_sessions": [{"exercise_id": exercise_id, "sets": 3, "reps": 8}],
    }, headers=auth_headers)

    response = client.delete(f"/api/exercises/{exercise_id}", headers=admin_headers)
    assert response.status_code == 400
    assert Exercise.query.filter_by(id=exercise_id).count() == 1


def test_food_item_crud(client, admin_headers, auth_headers):
    response = client.post("/api/fooditems", json={
        "name": "Lentils", "serving_size": 100, "calories_kcal": 116, "protein_g": 9, "carbs_g": 20, "fat_g": 0.4
    }, headers=admin_headers)
    assert response.status_code == 201
    food_id = response.get_json()["id"]

    found = client.get("/api/fooditems?search=lent", headers=auth_headers).get_json()
    assert [item["name"] for item in found["items"]] == ["Lentils"]

    updated = client.put(f"/api/fooditems/{food_id}", json={"calories_kcal": 120}, headers=admin_headers)
    assert updated.get_json()["food_item"]["calories_kcal"] == 120

    assert client.delete(f"/api/fooditems/{food_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/fooditems/{food_id}", headers=auth_headers).status_code == 404


def test_food_item_needs_positive_serving(client, admin_headers):
    response = client.post("/api/fooditems", json={
        "name": "Air", "serving_size": 0, "calories_kcal": 0
    }, headers=admin_headers)
    assert response.status_code == 400


def test_delete_food_item_in_use_is_rejected(client, admin_headers, auth_headers):
    egg = FoodItem.query.filter_by(name="Egg").one()
    client.post("/api/nutrition/food-entry", json={
        "food_item_id": egg.id, "quantity": 1, "meal_type": "Breakfast"
    }, headers=auth_headers)

    assert client.delete(f"/api/fooditems/{egg.id}", headers=admin_headers).status_code == 400


def test_upload_exercise_image(client, admin_headers, exercise_id):
    response = client.post(f"/api/exercises/{exercise_id}/image", data=png_upload(),
                           content_type="multipart/form-data", headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()["image_url"].startswith("/static/uploads/exercises/")


def test_upload_rejects_non_images(client, admin_headers, exercise_id):
    data = {"file": (io.BytesIO(b"hello"), "notes.txt", "text/plain")}
    response = client.post(f"/api/exercises/{exercise_id}/image", data=data,
                           content_type="multipart/form-data", headers=admin_headers)
    assert response.status_code == 400


def test_upload_requires_a_file(client, admin_headers, exercise_id):
    response = client.post(f"/api/exercises/{exercise_id}/image", data={},
                           content_type="multipart/form-data", headers=admin_headers)
    assert response.status_code == 400


def stored_path(storage, url):
    return os.path.join(storage.upload_folder, *url[len(storage.url_prefix) + 1:].split("/"))


def upload_image(client, headers, exercise_id, method="post"):
    return getattr(client, method)(f"/api/exercises/{exercise_id}/image", data=png_upload(),
                                   content_type="multipart/form-data", headers=headers)


def test_upload_accepts_put(client, admin_headers, exercise_id):
    response = upload_image(client, admin_headers, exercise_id, method="put")
    assert response.status_code == 200
    assert db.session.get(Exercise, exercise_id).image_url == response.get_json()["image_url"]


def test_reupload_removes_previous_file(app, client, admin_headers, exercise_id):
    storage = app.extensions[EXTENSION_KEY]["storage"]
    urls = [upload_image(client, admin_headers, exercise_id).get_json()["image_url"] for _ in range(2)]

    assert not os.path.exists(stored_path(storage, urls[0]))
    assert os.path.exists(stored_path(storage, urls[1]))


def test_failed_commit_keeps_previous_file(app, client, admin_headers, exercise_id, monkeypatch):
    storage = app.extensions[EXTENSION_KEY]["storage"]
    first = upload_image(client, admin_headers, exercise_id).get_json()["image_url"]

    def failing_commit(session):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(Session, "commit", failing_commit)
    response = upload_image(client, admin_headers, exercise_id)
    monkeypatch.undo()

    assert response.status_code == 500
    assert os.path.exists(stored_path(storage, first))
    assert db.session.get(Exercise, exercise_id).image_url == first
