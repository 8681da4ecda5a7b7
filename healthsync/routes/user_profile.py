from flask import Blueprint, jsonify, request, g

from healthsync.schemas.profile import ProfileUpdateSchema
from healthsync.services import profile as profile_service
from healthsync.utils.decorators import login_required
from healthsync.utils.helpers import get_json_body

profile_bp = Blueprint("userprofile", __name__)


@profile_bp.route("", methods=["GET"])
@login_required
def get_profile():
    return jsonify(profile_service.get_profile(g.current_user.id))


@profile_bp.route("", methods=["PUT"])
@login_required
def update_profile():
    data = ProfileUpdateSchema().load(get_json_body())
    profile_service.update_profile(g.current_user.id, data)
    return jsonify({"msg": "Profile updated", "profile": profile_service.get_profile(g.current_user.id)})


@profile_bp.route("/upload-avatar", methods=["POST"])
@login_required
def upload_avatar():
    url = profile_service.upload_avatar(g.current_user.id, request.files.get("file"))
    return jsonify({"msg": "Avatar uploaded", "avatar_url": url})
