from flask import jsonify, request

from healthsync import permissions as perm
from healthsync.services import statistics as stats
from healthsync.utils.decorators import require_permission
from . import admin_bp


def _days():
    days = request.args.get("days", 365, type=int) or 365
    return max(1, min(days, 3650))


@admin_bp.route("/statistics", methods=["GET"])
@require_permission(perm.DASHBOARD_ADMIN)
def statistics():
    return jsonify(stats.all_statistics(_days()))


@admin_bp.route("/statistics/users", methods=["GET"])
@require_permission(perm.DASHBOARD_ADMIN)
def user_statistics():
    return jsonify(stats.user_statistics(_days()))


@admin_bp.route("/statistics/workouts", methods=["GET"])
@require_permission(perm.DASHBOARD_ADMIN)
def workout_statistics():
    return jsonify(stats.workout_statistics(_days()))


@admin_bp.route("/statistics/nutrition", methods=["GET"])
@require_permission(perm.DASHBOARD_ADMIN)
def nutrition_statistics():
    return jsonify(stats.nutrition_statistics(_days()))


@admin_bp.route("/statistics/goals", methods=["GET"])
@require_permission(perm.DASHBOARD_ADMIN)
def goal_statistics():
    return jsonify(stats.goal_statistics(_days()))
