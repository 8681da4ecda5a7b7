from flask import jsonify, g

from healthsync import permissions as perm
from healthsync.services import admin_users
from healthsync.utils.decorators import require_permission
from . import admin_bp


@admin_bp.route("/usermanagement/<int:user_id>/roles/<int:role_id>", methods=["POST"])
@require_permission(perm.USER_UPDATE_ROLE)
def assign_role(user_id, role_id):
    admin_users.assign_role(g.current_user.id, user_id, role_id)
    return jsonify({"msg": "Role assigned", "assigned": True}), 200


@admin_bp.route("/usermanagement/<int:user_id>/roles/<int:role_id>", methods=["DELETE"])
@require_permission(perm.USER_UPDATE_ROLE)
def remove_role(user_id, role_id):
    admin_users.remove_role(g.current_user.id, user_id, role_id)
    return jsonify({"msg": "Role removed"})


@admin_bp.route("/usermanagement/roles", methods=["GET"])
@require_permission(perm.USER_READ)
def list_roles():
    return jsonify([r.to_dict(with_permissions=True) for r in admin_users.list_roles()])


@admin_bp.route("/usermanagement/permissions", methods=["GET"])
@require_permission(perm.USER_READ)
def list_permissions():
    return jsonify([p.to_dict() for p in admin_users.list_permissions()])


@admin_bp.route("/usermanagement/<int:user_id>/roles", methods=["GET"])
@require_permission(perm.USER_READ)
def get_user_roles(user_id):
    return jsonify({"user_id": user_id, "roles": admin_users.user_roles(user_id)})


@admin_bp.route("/usermanagement/<int:user_id>/permissions", methods=["GET"])
@require_permission(perm.USER_READ)
def get_user_permissions(user_id):
    return jsonify({"user_id": user_id, "permissions": admin_users.user_permissions(user_id)})
