from flask import current_app

from healthsync.extensions import db
from healthsync.models import UserProfile
from healthsync.services.accounts import get_user
from healthsync.services.audit import audited
from healthsync.services.catalog import replace_image, validate_image


def get_profile(user_id):
    user = get_user(user_id)
    if user.profile is None:
        user.profile = UserProfile(full_name="", activity_level="Moderate")
        db.session.commit()
    data = user.profile.to_dict()
    data["email"] = user.email
    data["avatar_url"] = user.avatar_url or user.profile.avatar_url
    return data


@audited("profile_updated", lambda profile: "Updated profile")
def update_profile(user_id, data):
    user = get_user(user_id)
    profile = user.profile or UserProfile(user_id=user.id)
    for field in ("full_name", "dob", "gender", "height_cm", "weight_kg", "activity_level"):
        if field in data:
            setattr(profile, field, data[field])
    profile.full_name = (profile.full_name or "").strip()
    user.profile = profile
    return profile


def store_avatar(user, file):
    """Validate and save an avatar, pointing both user and profile at it."""
    validate_image(file, current_app.config["MAX_AVATAR_SIZE"])
    url = replace_image(file, user.avatar_url, "avatars", f"user_{user.id}")
    user.avatar_url = url
    if user.profile is None:
        user.profile = UserProfile(full_name="", activity_level="Moderate")
    user.profile.avatar_url = url
    return url


@audited("avatar_uploaded", lambda url: "Uploaded a new avatar")
def upload_avatar(user_id, file):
    return store_avatar(get_user(user_id), file)
