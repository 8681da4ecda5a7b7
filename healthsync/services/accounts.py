from datetime import date, timedelta

from healthsync.errors import InvalidOperationError, NotFoundError
from healthsync.extensions import db
from healthsync.models import User, UserProfile, Role, UserRole


def find_user_by_email(email):
    return User.query.filter(db.func.lower(User.email) == (email or "").strip().lower()).first()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def get_role_by_name(role_name):
    role = Role.query.filter(db.func.lower(Role.role_name) == (role_name or "").strip().lower()).first()
    if not role:
        raise NotFoundError(f"Role '{role_name}' not found")
    return role


def replace_roles(user, role):
    """Make ``role`` the user's only role."""
    for user_role in list(user.user_roles):
        if user_role.role_id != role.id:
            user.user_roles.remove(user_role)
    if not any(ur.role_id == role.id for ur in user.user_roles):
        user.user_roles.append(UserRole(role=role))


def create_account(email, password=None, full_name="", role_name="Customer",
                   email_confirmed=False, avatar_url=None, placeholder_profile=False):
    """Add a user with one role and a profile to the session (no commit).

    ``placeholder_profile`` fills the profile with the defaults used for
    accounts created through Google sign-in.
    """
    email = email.strip().lower()
    if find_user_by_email(email):
        raise InvalidOperationError("Email already exists")
    role = get_role_by_name(role_name)

    user = User(email=email, is_active=True, email_confirmed=email_confirmed, avatar_url=avatar_url or None)
    if password:
        user.set_password(password)
    user.user_roles.append(UserRole(role=role))

    if placeholder_profile:
        user.profile = UserProfile(
            full_name=full_name or email,
            dob=date.today() - timedelta(days=365 * 25),
            gender="Unknown",
            height_cm=0,
            weight_kg=0,
            activity_level="Moderate",
            avatar_url=avatar_url or None,
        )
    else:
        user.profile = UserProfile(full_name=full_name or "", activity_level="Moderate")

    db.session.add(user)
    db.session.flush()
    return user
