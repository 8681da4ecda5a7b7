from datetime import date, timedelta

import pytest

from healthsync.models import Exercise, WorkoutLog


@pytest.fixture
def squat(app):
    return Exercise.query.filter_by(name="Squat").one()


def workout_body(exercise_id, **overrides):
    body = {
        "workout_date": date.today().isoformat(),
        "duration_min": 45,
        "notes": "leg day",
        "exercise_sessions": [
            {"exercise_id": exercise_id, "sets": 5, "reps": 5, "weight_kg": 100, "rest_sec": 180, "rpe": 8},
        ],
    }
    body.update(overrides)
    return body


def test_list_exercises(client, auth_headers):
    response = client.get("/api/workout/exercises?muscle_group=Legs", headers=auth_headers)
    assert response.status_code == 200
    exercises = response.get_json()
    assert exercises
    assert {e["muscle_group"] for e in exercises} == {"Legs"}


def test_create_workout_log(client, customer, auth_headers, squat):
    response = client.post("/api/workout/workout-logs", json=workout_body(squat.id), headers=auth_headers)
    assert response.status_code == 201
    log = response.get_json()["workout_log"]
    assert log["duration_min"] == 45
    assert log["exercise_sessions"][0]["exercise_name"] == "Squat"
    assert log["exercise_sessions"][0]["weight_kg"] == 100
    assert WorkoutLog.query.filter_by(user_id=customer.id).count() == 1


def test_future_workout_date_is_rejected(client, auth_headers, squat):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    response = client.post("/api/workout/workout-logs", json=workout_body(squat.id, workout_date=tomorrow),
                           headers=auth_headers)
    assert response.status_code == 400
    assert "workout_date" in response.get_json()["errors"]


def test_workout_needs_an_exercise(client, auth_headers, squat):
    response = client.post("/api/workout/workout-logs", json=workout_body(squat.id, exercise_sessions=[]),
                           headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.parametrize("session_overrides", [{"sets": 0}, {"reps": 0}, {"rpe": 11}, {"weight_kg": -5}])
def test_exercise_session_ranges(client, auth_headers, squat, session_overrides):
    session = {"exercise_id": squat.id, "sets": 3, "reps": 10}
    session.update(session_overrides)
    response = client.post("/api/workout/workout-logs", json=workout_body(squat.id, exercise_sessions=[session]),
                           headers=auth_headers)
    assert response.status_code == 400


def test_unknown_exercise_is_404(client, auth_headers):
    response = client.post("/api/workout/workout-logs", json=workout_body(99999), headers=auth_headers)
    assert response.status_code == 404
    assert WorkoutLog.query.count() == 0


def test_list_workout_logs_by_date_range(client, auth_headers, squat):
    week_ago = (date.today() - timedelta(days=7)).isoformat()
    client.post("/api/workout/workout-logs", json=workout_body(squat.id, workout_date=week_ago), headers=auth_headers)
    client.post("/api/workout/workout-logs", json=workout_body(squat.id), headers=auth_headers)

    all_logs = client.get("/api/workout/workout-logs", headers=auth_headers).get_json()
    assert [log["workout_date"] for log in all_logs] == [date.today().isoformat(), week_ago]

    recent = client.get(f"/api/workout/workout-logs?start_date={date.today().isoformat()}",
                        headers=auth_headers).get_json()
    assert len(recent) == 1


def test_bad_date_filter(client, auth_headers):
    response = client.get("/api/workout/workout-logs?start_date=yesterday", headers=auth_headers)
    assert response.status_code == 400


def test_workout_logs_are_private(client, auth_headers, squat, other_customer, headers_for):
    log_id = client.post("/api/workout/workout-logs", json=workout_body(squat.id), headers=auth_headers).get_json()["id"]
    other = headers_for(other_customer)
    assert client.get(f"/api/workout/workout-logs/{log_id}", headers=other).status_code == 404
    assert client.delete(f"/api/workout/workout-logs/{log_id}", headers=other).status_code == 404


def test_delete_workout_log(client, auth_headers, squat):
    log_id = client.post("/api/workout/workout-logs", json=workout_body(squat.id), headers=auth_headers).get_json()["id"]
    assert client.delete(f"/api/workout/workout-logs/{log_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/workout/workout-logs/{log_id}", headers=auth_headers).status_code == 404
