from flask import Blueprint, jsonify, request, g

from healthsync import permissions as perm
from healthsync.schemas.workout import WorkoutLogSchema
from healthsync.services import workouts as workout_service
from healthsync.utils.decorators import require_permission
from healthsync.utils.helpers import get_json_body, parse_date

workout_bp = Blueprint("workout", __name__)


@workout_bp.route("/exercises", methods=["GET"])
@require_permission(perm.EXERCISE_READ)
def get_exercises():
    exercises = workout_service.list_exercises(
        muscle_group=request.args.get("muscle_group"),
        difficulty=request.args.get("difficulty"),
        search=request.args.get("search"),
    )
    return jsonify([e.to_dict() for e in exercises])


@workout_bp.route("/workout-logs", methods=["GET"])
@require_permission(perm.WORKOUT_LOG_READ)
def get_workout_logs():
    logs = workout_service.list_workout_logs(
        g.current_user.id,
        start_date=parse_date(request.args.get("start_date"), "start_date"),
        end_date=parse_date(request.args.get("end_date"), "end_date"),
    )
    return jsonify([log.to_dict() for log in logs])


@workout_bp.route("/workout-logs", methods=["POST"])
@require_permission(perm.WORKOUT_LOG_CREATE)
def create_workout_log():
    data = WorkoutLogSchema().load(get_json_body())
    log = workout_service.create_workout_log(g.current_user.id, data)
    return jsonify({"msg": "Workout logged", "id": log.id, "workout_log": log.to_dict()}), 201


@workout_bp.route("/workout-logs/<int:log_id>", methods=["GET"])
@require_permission(perm.WORKOUT_LOG_READ)
def get_workout_log(log_id):
    return jsonify(workout_service.get_workout_log(g.current_user.id, log_id).to_dict())


@workout_bp.route("/workout-logs/<int:log_id>", methods=["DELETE"])
@require_permission(perm.WORKOUT_LOG_DELETE)
def delete_workout_log(log_id):
    workout_service.delete_workout_log(g.current_user.id, log_id)
    return jsonify({"msg": "Workout log deleted"})
