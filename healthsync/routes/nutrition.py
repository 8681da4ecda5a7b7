from datetime import date

from flask import Blueprint, jsonify, request, g

from healthsync import permissions as perm
from healthsync.schemas.nutrition import NutritionLogSchema, AddFoodEntrySchema
from healthsync.services import nutrition as nutrition_service
from healthsync.utils.decorators import require_permission
from healthsync.utils.helpers import get_json_body, parse_date

nutrition_bp = Blueprint("nutrition", __name__)


@nutrition_bp.route("/food-items", methods=["GET"])
@require_permission(perm.FOOD_READ)
def get_food_items():
    items = nutrition_service.list_food_items(request.args.get("search"))
    return jsonify([item.to_dict() for item in items])


@nutrition_bp.route("/nutrition-log", methods=["GET"])
@require_permission(perm.NUTRITION_LOG_READ)
def get_nutrition_log_by_date():
    log_date = parse_date(request.args.get("date"), "date") or date.today()
    log = nutrition_service.get_log_for_date(g.current_user.id, log_date)
    return jsonify(log.to_dict() if log else None)


@nutrition_bp.route("/nutrition-logs", methods=["GET"])
@require_permission(perm.NUTRITION_LOG_READ)
def get_nutrition_logs():
    logs = nutrition_service.list_nutrition_logs(
        g.current_user.id,
        start_date=parse_date(request.args.get("start_date"), "start_date"),
        end_date=parse_date(request.args.get("end_date"), "end_date"),
    )
    return jsonify([log.to_dict() for log in logs])


@nutrition_bp.route("/nutrition-logs", methods=["POST"])
@require_permission(perm.NUTRITION_LOG_CREATE)
def create_nutrition_log():
    data = NutritionLogSchema().load(get_json_body())
    log = nutrition_service.create_nutrition_log(g.current_user.id, data)
    return jsonify({"msg": "Nutrition log created", "id": log.id, "nutrition_log": log.to_dict()}), 201


@nutrition_bp.route("/nutrition-logs/<int:log_id>", methods=["DELETE"])
@require_permission(perm.NUTRITION_LOG_DELETE)
def delete_nutrition_log(log_id):
    nutrition_service.delete_nutrition_log(g.current_user.id, log_id)
    return jsonify({"msg": "Nutrition log deleted"})


@nutrition_bp.route("/food-entry", methods=["POST"])
@require_permission(perm.NUTRITION_LOG_CREATE)
def add_food_entry():
    data = AddFoodEntrySchema().load(get_json_body())
    entry = nutrition_service.add_food_entry(g.current_user.id, data)
    return jsonify({
        "msg": "Food entry added",
        "id": entry.id,
        "food_entry": entry.to_dict(),
        "nutrition_log": entry.nutrition_log.to_dict(),
    }), 201


@nutrition_bp.route("/food-entry/<int:entry_id>", methods=["DELETE"])
@require_permission(perm.NUTRITION_LOG_DELETE)
def delete_food_entry(entry_id):
    nutrition_service.delete_food_entry(g.current_user.id, entry_id)
    return jsonify({"msg": "Food entry deleted"})
