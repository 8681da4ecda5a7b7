from flask import Blueprint, jsonify, request, g

from healthsync import permissions as perm
from healthsync.schemas.catalog import FoodItemSchema
from healthsync.services import catalog as catalog_service
from healthsync.utils.decorators import require_permission
from healthsync.utils.helpers import get_json_body, get_page_args, paginated

food_items_bp = Blueprint("food_items", __name__)


@food_items_bp.route("", methods=["GET"])
@require_permission(perm.FOOD_READ)
def list_food_items():
    page, per_page = get_page_args(default_size=20)
    pagination = catalog_service.search_food_items(request.args.get("search"), page=page, per_page=per_page)
    return jsonify(paginated(pagination, [f.to_dict() for f in pagination.items]))


@food_items_bp.route("/<int:food_item_id>", methods=["GET"])
@require_permission(perm.FOOD_READ)
def get_food_item(food_item_id):
    return jsonify(catalog_service.get_food_item(food_item_id).to_dict())


@food_items_bp.route("", methods=["POST"])
@require_permission(perm.FOOD_CREATE)
def create_food_item():
    data = FoodItemSchema().load(get_json_body())
    item = catalog_service.create_food_item(g.current_user.id, data)
    return jsonify({"msg": "Food item created", "id": item.id, "food_item": item.to_dict()}), 201


@food_items_bp.route("/<int:food_item_id>", methods=["PUT"])
@require_permission(perm.FOOD_UPDATE)
def update_food_item(food_item_id):
    data = FoodItemSchema(partial=True).load(get_json_body())
    item = catalog_service.update_food_item(g.current_user.id, food_item_id, data)
    return jsonify({"msg": "Food item updated", "food_item": item.to_dict()})


@food_items_bp.route("/<int:food_item_id>", methods=["DELETE"])
@require_permission(perm.FOOD_DELETE)
def delete_food_item(food_item_id):
    catalog_service.delete_food_item(g.current_user.id, food_item_id)
    return jsonify({"msg": "Food item deleted"})


@food_items_bp.route("/<int:food_item_id>/image", methods=["POST", "PUT"])
@require_permission(perm.FOOD_UPDATE)
def upload_food_item_image(food_item_id):
    item = catalog_service.upload_food_item_image(g.current_user.id, food_item_id, request.files.get("file"))
    return jsonify({"msg": "Image uploaded", "image_url": item.image_url})
