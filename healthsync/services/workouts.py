from healthsync.errors import NotFoundError
from healthsync.extensions import db
from healthsync.models import Exercise, ExerciseSession, WorkoutLog
from healthsync.services.audit import audited


def list_exercises(muscle_group=None, difficulty=None, search=None):
    query = Exercise.query
    if muscle_group:
        query = query.filter(Exercise.muscle_group == muscle_group)
    if difficulty:
        query = query.filter(Exercise.difficulty == difficulty)
    if search:
        query = query.filter(Exercise.name.ilike(f"%{search.strip()}%"))
    return query.order_by(Exercise.name).all()


def list_workout_logs(user_id, start_date=None, end_date=None):
    query = WorkoutLog.query.filter_by(user_id=user_id)
    if start_date:
        query = query.filter(WorkoutLog.workout_date >= start_date)
    if end_date:
        query = query.filter(WorkoutLog.workout_date <= end_date)
    return query.order_by(WorkoutLog.workout_date.desc(), WorkoutLog.id.desc()).all()


def get_workout_log(user_id, log_id):
    log = WorkoutLog.query.filter_by(id=log_id, user_id=user_id).first()
    if not log:
        raise NotFoundError("Workout log not found")
    return log


@audited("workout_logged", lambda log: f"Logged a {log.duration_min} min workout with {len(log.exercise_sessions)} exercises")
def create_workout_log(user_id, data):
    exercise_ids = {s["exercise_id"] for s in data["exercise_sessions"]}
    found = {e.id for e in Exercise.query.filter(Exercise.id.in_(exercise_ids)).all()}
    missing = exercise_ids - found
    if missing:
        raise NotFoundError(f"Exercise {sorted(missing)[0]} not found")

    log = WorkoutLog(
        user_id=user_id,
        workout_date=data["workout_date"],
        duration_min=data["duration_min"],
        notes=data.get("notes"),
    )
    for s in data["exercise_sessions"]:
        log.exercise_sessions.append(ExerciseSession(
            exercise_id=s["exercise_id"],
            sets=s["sets"],
            reps=s["reps"],
            weight_kg=s.get("weight_kg") or 0.0,
            rest_sec=s.get("rest_sec"),
            rpe=s.get("rpe"),
        ))
    db.session.add(log)
    db.session.flush()
    return log


@audited("workout_deleted", lambda log_id: f"Deleted workout log {log_id}")
def delete_workout_log(user_id, log_id):
    log = get_workout_log(user_id, log_id)
    db.session.delete(log)
    return log_id
