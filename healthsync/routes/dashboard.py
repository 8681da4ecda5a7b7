from flask import Blueprint, jsonify, g

from healthsync import permissions as perm
from healthsync.services import dashboard as dashboard_service
from healthsync.utils.decorators import require_permission

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/summary", methods=["GET"])
@require_permission(perm.DASHBOARD_ADMIN)
def summary():
    return jsonify(dashboard_service.admin_summary())


@dashboard_bp.route("/customer", methods=["GET"])
@require_permission(perm.DASHBOARD_VIEW)
def customer():
    return jsonify(dashboard_service.customer_dashboard(g.current_user.id))
