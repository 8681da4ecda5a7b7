from flask import Blueprint, jsonify, request, g

from healthsync import permissions as perm
from healthsync.schemas.catalog import ExerciseSchema
from healthsync.services import catalog as catalog_service
from healthsync.utils.decorators import require_permission
from healthsync.utils.helpers import get_json_body, get_page_args, paginated

exercises_bp = Blueprint("exercises", __name__)


@exercises_bp.route("", methods=["GET"])
@require_permission(perm.EXERCISE_READ)
def list_exercises():
    page, per_page = get_page_args(default_size=20)
    pagination = catalog_service.search_exercises(
        search=request.args.get("search"),
        muscle_group=request.args.get("muscle_group"),
        difficulty=request.args.get("difficulty"),
        page=page,
        per_page=per_page,
    )
    return jsonify(paginated(pagination, [e.to_dict() for e in pagination.items]))


@exercises_bp.route("/<int:exercise_id>", methods=["GET"])
@require_permission(perm.EXERCISE_READ)
def get_exercise(exercise_id):
    return jsonify(catalog_service.get_exercise(exercise_id).to_dict())


@exercises_bp.route("", methods=["POST"])
@require_permission(perm.EXERCISE_CREATE)
def create_exercise():
    data = ExerciseSchema().load(get_json_body())
    exercise = catalog_service.create_exercise(g.current_user.id, data)
    return jsonify({"msg": "Exercise created", "id": exercise.id, "exercise": exercise.to_dict()}), 201


@exercises_bp.route("/<int:exercise_id>", methods=["PUT"])
@require_permission(perm.EXERCISE_UPDATE)
def update_exercise(exercise_id):
    data = ExerciseSchema(partial=True).load(get_json_body())
    exercise = catalog_service.update_exercise(g.current_user.id, exercise_id, data)
    return jsonify({"msg": "Exercise updated", "exercise": exercise.to_dict()})


@exercises_bp.route("/<int:exercise_id>", methods=["DELETE"])
@require_permission(perm.EXERCISE_DELETE)
def delete_exercise(exercise_id):
    catalog_service.delete_exercise(g.current_user.id, exercise_id)
    return jsonify({"msg": "Exercise deleted"})


@exercises_bp.route("/<int:exercise_id>/image", methods=["POST", "PUT"])
@require_permission(perm.EXERCISE_UPDATE)
def upload_exercise_image(exercise_id):
    exercise = catalog_service.upload_exercise_image(g.current_user.id, exercise_id, request.files.get("file"))
    return jsonify({"msg": "Image uploaded", "image_url": exercise.image_url})
