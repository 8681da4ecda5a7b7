from urllib.parse import urlencode

from flask import Blueprint, jsonify, redirect, request, current_app, g

from healthsync.errors import HealthSyncError, NotFoundError
from healthsync.extensions import limiter
from healthsync.schemas.auth import (
    EmailSchema, VerifyCodeSchema, RegisterSchema, LoginSchema,
    VerifyResetOtpSchema, ResetPasswordSchema, SetPasswordSchema, GoogleMobileSchema
)
from healthsync.services import auth as auth_service
from healthsync.utils.decorators import login_required
from healthsync.utils.helpers import get_json_body

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/send-verification-code", methods=["POST"])
@limiter.limit("5 per minute")
def send_verification_code():
    data = EmailSchema().load(get_json_body())
    auth_service.send_verification_code(data["email"])
    return jsonify({"msg": "Verification code sent to your email"}), 200


@auth_bp.route("/verify-code", methods=["POST"])
def verify_code():
    data = VerifyCodeSchema().load(get_json_body())
    if auth_service.verify_code(data["email"], data["code"]):
        return jsonify({"msg": "Verification code is valid", "success": True}), 200
    return jsonify({"msg": "Invalid or expired verification code", "success": False}), 400


@auth_bp.route("/register", methods=["POST"])
@limiter.limit("10 per hour")
def register():
    data = RegisterSchema().load(get_json_body())
    response = auth_service.register(
        data["email"], data["password"], data["verification_code"], data.get("full_name", "")
    )
    return jsonify(response), 200


@auth_bp.route("/register-admin", methods=["POST"])
def register_admin():
    if not current_app.config.get("ADMIN_REGISTRATION_ENABLED"):
        raise NotFoundError("Not found")
    data = RegisterSchema().load(get_json_body())
    response = auth_service.register_admin(
        data["email"], data["password"], data["verification_code"], data.get("full_name", "")
    )
    return jsonify(response), 200


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
def login():
    data = LoginSchema().load(get_json_body())
    return jsonify(auth_service.login(data["email"], data["password"])), 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify(g.current_user.to_dict()), 200


# ---------------- Google ----------------

@auth_bp.route("/google/web", methods=["GET"])
def google_web():
    return redirect(auth_service.google_authorization_url(request.args.get("state", "")))


@auth_bp.route("/google/callback", methods=["GET"])
def google_callback():
    frontend = current_app.config["FRONTEND_URL"].rstrip("/")
    code = request.args.get("code")
    if not code:
        error = request.args.get("error") or "Authorization code is missing"
        return redirect(f"{frontend}/login?{urlencode({'error': error})}")

    try:
        auth = auth_service.google_web_login(code)
    except HealthSyncError as e:
        current_app.logger.warning(f"Google login failed: {e.message}")
        return redirect(f"{frontend}/login?{urlencode({'error': e.message})}")

    params = {
        "token": auth["token"],
        "userId": auth["user_id"],
        "email": auth["email"],
        "fullName": auth["full_name"],
        "role": auth["role"] or "",
        "requiresPassword": str(auth["requires_password"]).lower(),
        "isProfileComplete": str(auth["is_profile_complete"]).lower(),
        "expiresAt": auth["expires_at"],
    }
    return redirect(f"{frontend}/google/callback?{urlencode(params)}")


@auth_bp.route("/google/mobile", methods=["POST"])
def google_mobile():
    data = GoogleMobileSchema().load(get_json_body())
    return jsonify(auth_service.google_mobile_login(data["id_token"])), 200


@auth_bp.route("/google/android-client-id", methods=["GET"])
def google_android_client_id():
    client_id = current_app.config.get("GOOGLE_ANDROID_CLIENT_ID")
    if not client_id:
        return jsonify({"msg": "Android client id is not configured"}), 404
    return jsonify({"client_id": client_id}), 200


@auth_bp.route("/set-password", methods=["POST"])
@login_required
def set_password():
    data = SetPasswordSchema().load(get_json_body())
    auth_service.set_password(g.current_user.id, data["password"])
    return jsonify({"msg": "Password set successfully"}), 200


# ---------------- Password reset ----------------

@auth_bp.route("/forgot-password", methods=["POST"])
@limiter.limit("5 per minute")
def forgot_password():
    data = EmailSchema().load(get_json_body())
    auth_service.forgot_password(data["email"])
    return jsonify({"msg": "If the email exists, a reset code has been sent."}), 200


@auth_bp.route("/resend-reset-otp", methods=["POST"])
@limiter.limit("5 per minute")
def resend_reset_otp():
    data = EmailSchema().load(get_json_body())
    auth_service.forgot_password(data["email"])
    return jsonify({"msg": "OTP resent"}), 200


@auth_bp.route("/verify-reset-otp", methods=["POST"])
def verify_reset_otp():
    data = VerifyResetOtpSchema().load(get_json_body())
    if auth_service.verify_reset_otp(data["email"], data["otp"]):
        return jsonify({"msg": "OTP verified"}), 200
    return jsonify({"msg": "Invalid OTP"}), 400


@auth_bp.route("/reset-password", methods=["POST"])
def reset_password():
    data = ResetPasswordSchema().load(get_json_body())
    auth_service.reset_password(data["email"], data["otp"], data["new_password"])
    return jsonify({"msg": "Password reset successfully"}), 200
