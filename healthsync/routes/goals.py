from flask import Blueprint, jsonify, request, g

from healthsync import permissions as perm
from healthsync.schemas.goal import GoalCreateSchema, GoalUpdateSchema, ProgressRecordSchema
from healthsync.services import goals as goal_service
from healthsync.utils.decorators import require_permission
from healthsync.utils.helpers import get_json_body

goals_bp = Blueprint("goals", __name__)


# ---------------- API: Get all goals ----------------
@goals_bp.route("", methods=["GET"])
@require_permission(perm.GOAL_READ)
def get_goals():
    goals = goal_service.list_goals(g.current_user.id, request.args.get("status"))
    return jsonify([goal.to_dict() for goal in goals])


# ---------------- API: Create goal ----------------
@goals_bp.route("", methods=["POST"])
@require_permission(perm.GOAL_CREATE)
def create_goal():
    data = GoalCreateSchema().load(get_json_body())
    goal = goal_service.create_goal(g.current_user.id, data)
    return jsonify({"msg": "Goal created", "id": goal.id, "goal": goal.to_dict()}), 201


@goals_bp.route("/<int:goal_id>", methods=["GET"])
@require_permission(perm.GOAL_READ)
def get_goal(goal_id):
    return jsonify(goal_service.get_goal(g.current_user.id, goal_id).to_dict())


# ---------------- API: Update goal ----------------
@goals_bp.route("/<int:goal_id>", methods=["PUT"])
@require_permission(perm.GOAL_UPDATE)
def update_goal(goal_id):
    data = GoalUpdateSchema().load(get_json_body())
    goal = goal_service.update_goal(g.current_user.id, goal_id, data)
    return jsonify({"msg": "Goal updated", "goal": goal.to_dict()})


# ---------------- API: Delete goal ----------------
@goals_bp.route("/<int:goal_id>", methods=["DELETE"])
@require_permission(perm.GOAL_DELETE)
def delete_goal(goal_id):
    goal_service.delete_goal(g.current_user.id, goal_id)
    return jsonify({"msg": "Goal deleted"})


# ---------------- API: Record progress ----------------
@goals_bp.route("/<int:goal_id>/progress", methods=["POST"])
@require_permission(perm.GOAL_UPDATE)
def add_progress(goal_id):
    data = ProgressRecordSchema().load(get_json_body())
    record = goal_service.add_progress(g.current_user.id, goal_id, data)
    goal = goal_service.get_goal(g.current_user.id, goal_id)
    return jsonify({"msg": "Progress recorded", "id": record.id, "goal": goal.to_dict()}), 201
