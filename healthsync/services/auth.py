import logging
from datetime import datetime

from flask import current_app
from flask_jwt_extended import create_access_token

from healthsync.clients import get_client
from healthsync.errors import InvalidOperationError, UnauthorizedError
from healthsync.extensions import db
from healthsync.permissions import ROLE_ADMIN, ROLE_CUSTOMER
from healthsync.services.accounts import find_user_by_email, create_account, get_user
from healthsync.services.audit import log_action
from healthsync.services.codes import get_store

logger = logging.getLogger(__name__)


def _verification_codes():
    return get_store(current_app, "verification", current_app.config["VERIFICATION_CODE_TTL"])


def _reset_otps():
    return get_store(current_app, "reset", current_app.config["RESET_OTP_TTL"])


def build_auth_response(user):
    roles = user.role_names
    permissions = sorted(user.permission_codes())
    expires_delta = current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    token = create_access_token(
        identity=str(user.id),
        additional_claims={"email": user.email, "roles": roles, "permissions": permissions},
        expires_delta=expires_delta
    )
    return {
        "token": token,
        "user_id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "role": user.primary_role,
        "roles": roles,
        "permissions": permissions,
        "expires_at": (datetime.utcnow() + expires_delta).isoformat() + "Z",
        "requires_password": not user.has_password,
        "is_profile_complete": bool(user.profile and user.profile.is_complete()),
        "avatar_url": user.avatar_url,
    }


# ---------------- Email verification ----------------

def send_verification_code(email):
    code = _verification_codes().issue(email)
    get_client("mailer").send_verification_code(email, code)
    logger.info(f"Verification code sent to {email}")


def verify_code(email, code):
    return _verification_codes().check(email, code)


# ---------------- Registration / login ----------------

def register(email, password, verification_code, full_name="", role_name=ROLE_CUSTOMER):
    if find_user_by_email(email):
        raise InvalidOperationError("Email already exists")
    if not _verification_codes().consume(email, verification_code):
        raise InvalidOperationError("Invalid or expired verification code")

    user = create_account(email, password, full_name=full_name, role_name=role_name, email_confirmed=True)
    log_action(user.id, "register", f"Registered as {role_name}")
    db.session.commit()
    logger.info(f"Registered user {user.id} ({role_name})")
    return build_auth_response(user)


def register_admin(email, password, verification_code, full_name=""):
    return register(email, password, verification_code, full_name, role_name=ROLE_ADMIN)


def login(email, password):
    user = find_user_by_email(email)
    if not user or not user.is_active:
        raise UnauthorizedError("Invalid email or password")
    if not user.has_password:
        raise UnauthorizedError("This account signs in with Google. Use Google login or set a password first.")
    if not user.check_password(password):
        raise UnauthorizedError("Invalid email or password")

    user.last_login_at = datetime.utcnow()
    log_action(user.id, "login", "Logged in")
    db.session.commit()
    return build_auth_response(user)


# ---------------- Google ----------------

def _login_google_user(info):
    """Find or create the account behind a verified Google identity."""
    user = find_user_by_email(info["email"])
    if user and ROLE_ADMIN in user.role_names:
        raise UnauthorizedError("Admin accounts cannot sign in with Google. Use email and password.")

    if user is None:
        user = create_account(
            info["email"],
            full_name=info["name"],
            role_name=ROLE_CUSTOMER,
            email_confirmed=True,
            avatar_url=info.get("picture"),
            placeholder_profile=True,
        )
        log_action(user.id, "register", "Registered with Google")
    else:
        if not user.is_active:
            raise UnauthorizedError("Account is disabled")
        if info.get("picture") and not user.avatar_url:
            user.avatar_url = info["picture"]
        if user.profile and not user.profile.full_name and info.get("name"):
            user.profile.full_name = info["name"]
        user.email_confirmed = True

    user.last_login_at = datetime.utcnow()
    log_action(user.id, "login", "Logged in with Google")
    db.session.commit()
    return build_auth_response(user)


def google_authorization_url(state=""):
    return get_client("google").authorization_url(state)


def google_web_login(code):
    info = get_client("google").exchange_code(code)
    return _login_google_user(info)


def google_mobile_login(id_token):
    info = get_client("google").verify_id_token(id_token)
    return _login_google_user(info)


def set_password(user_id, password):
    user = get_user(user_id)
    if user.has_password:
        raise InvalidOperationError("Account already has a password")
    user.set_password(password)
    log_action(user.id, "password_set", "Set account password")
    db.session.commit()


# ---------------- Password reset ----------------

def forgot_password(email):
    """Email a reset OTP when the account exists. Silent otherwise."""
    user = find_user_by_email(email)
    if not user or not user.is_active:
        logger.info(f"Password reset requested for unknown email {email}")
        return
    otp = _reset_otps().issue(user.email)
    get_client("mailer").send_reset_otp(user.email, otp)


def verify_reset_otp(email, otp):
    return _reset_otps().check(email, otp)


def reset_password(email, otp, new_password):
    user = find_user_by_email(email)
    if not user:
        raise InvalidOperationError("Invalid or expired OTP")
    if not _reset_otps().consume(user.email, otp):
        raise InvalidOperationError("Invalid or expired OTP")
    user.set_password(new_password)
    log_action(user.id, "password_reset", "Reset password")
    db.session.commit()
