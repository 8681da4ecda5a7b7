from flask import jsonify, request, g

from healthsync import permissions as perm
from healthsync.schemas.admin import (
    CreateUserSchema, UpdateUserSchema, RoleChangeSchema, AdminPasswordSchema, ToggleStatusSchema
)
from healthsync.services import admin_users
from healthsync.services.accounts import get_user
from healthsync.utils.decorators import require_permission
from healthsync.utils.helpers import get_json_body, get_page_args, paginated
from . import admin_bp


@admin_bp.route("/users", methods=["GET"])
@require_permission(perm.USER_READ)
def list_users():
    page, per_page = get_page_args(default_size=50, max_size=200)
    pagination = admin_users.list_users(
        page=page,
        per_page=per_page,
        search_term=request.args.get("search_term", "").strip() or None,
        role=request.args.get("role") or None,
        sort_by=request.args.get("sort_by", "created_at"),
        sort_order=request.args.get("sort_order", "desc"),
    )
    return jsonify(paginated(pagination, [u.to_dict() for u in pagination.items]))


@admin_bp.route("/users/<int:user_id>", methods=["GET"])
@require_permission(perm.USER_READ)
def get_user_detail(user_id):
    user = get_user(user_id)
    data = user.to_dict()
    data["profile"] = user.profile.to_dict() if user.profile else None
    data["permissions"] = sorted(user.permission_codes())
    return jsonify(data)


@admin_bp.route("/users", methods=["POST"])
@require_permission(perm.USER_UPDATE_ROLE)
def create_user():
    data = CreateUserSchema().load(get_json_body())
    user = admin_users.create_user(g.current_user.id, data)
    return jsonify({"msg": "User created", "id": user.id, "user": user.to_dict()}), 201


@admin_bp.route("/users/<int:user_id>", methods=["PUT"])
@require_permission(perm.USER_UPDATE_ROLE)
def update_user(user_id):
    data = UpdateUserSchema().load(get_json_body())
    user = admin_users.update_user(g.current_user.id, user_id, data)
    return jsonify({"msg": "User updated", "user": user.to_dict()})


@admin_bp.route("/users/<int:user_id>/role", methods=["PUT"])
@require_permission(perm.USER_UPDATE_ROLE)
def change_role(user_id):
    data = RoleChangeSchema().load(get_json_body())
    user = admin_users.change_role(g.current_user.id, user_id, data["role"])
    return jsonify({"msg": "Role updated", "user": user.to_dict()})


@admin_bp.route("/users/<int:user_id>/password", methods=["PUT"])
@require_permission(perm.USER_UPDATE_ROLE)
def change_password(user_id):
    data = AdminPasswordSchema().load(get_json_body())
    admin_users.change_password(g.current_user.id, user_id, data["password"])
    return jsonify({"msg": "Password updated"})


@admin_bp.route("/users/<int:user_id>/avatar", methods=["POST", "PUT"])
@require_permission(perm.USER_UPDATE_ROLE)
def upload_avatar(user_id):
    user = admin_users.upload_avatar(g.current_user.id, user_id, request.files.get("file"))
    return jsonify({"msg": "Avatar uploaded", "avatar_url": user.avatar_url})


@admin_bp.route("/users/<int:user_id>/toggle-status", methods=["PATCH"])
@require_permission(perm.USER_BAN)
def toggle_status(user_id):
    data = ToggleStatusSchema().load(get_json_body())
    user = admin_users.toggle_status(g.current_user.id, user_id, data.get("is_active"))
    return jsonify({"msg": "Status updated", "is_active": user.is_active})


@admin_bp.route("/users/<int:user_id>", methods=["DELETE"])
@require_permission(perm.USER_DELETE)
def delete_user(user_id):
    admin_users.delete_user(g.current_user.id, user_id)
    return jsonify({"msg": "User deleted"})
