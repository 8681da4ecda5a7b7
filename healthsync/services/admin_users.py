"""Administrator commands over user accounts and role assignments."""
from sqlalchemy import or_

from healthsync.errors import ConflictError, InvalidOperationError, NotFoundError
from healthsync.extensions import db
from healthsync.models import User, UserProfile, Role, UserRole, Permission
from healthsync.services.accounts import get_user, get_role_by_name, replace_roles, create_account
from healthsync.services.audit import audited
from healthsync.services.profile import store_avatar

SORT_COLUMNS = {
    "email": User.email,
    "created_at": User.created_at,
    "full_name": UserProfile.full_name,
    "last_login_at": User.last_login_at,
}


def list_users(page=1, per_page=50, search_term=None, role=None, sort_by="created_at", sort_order="desc"):
    query = User.query.outerjoin(UserProfile, UserProfile.user_id == User.id)

    if search_term:
        like = f"%{search_term.strip()}%"
        query = query.filter(or_(User.email.ilike(like), UserProfile.full_name.ilike(like)))

    if role:
        query = query.filter(User.user_roles.any(UserRole.role.has(Role.role_name == role)))

    column = SORT_COLUMNS.get(sort_by, User.created_at)
    ordering = column.asc() if (sort_order or "").lower() == "asc" else column.desc()
    return query.order_by(ordering, User.id.asc()).paginate(page=page, per_page=per_page, error_out=False)


@audited("admin_user_created", lambda user: f"Created user {user.email}")
def create_user(admin_id, data):
    return create_account(
        data["email"],
        data["password"],
        full_name=data["full_name"],
        role_name=data.get("role") or "Customer",
        email_confirmed=True,
    )


@audited("admin_user_updated", lambda user: f"Updated user {user.email}")
def update_user(admin_id, user_id, data):
    user = get_user(user_id)
    if "full_name" in data:
        if user.profile is None:
            user.profile = UserProfile(activity_level="Moderate")
        user.profile.full_name = data["full_name"].strip()
    if data.get("role"):
        replace_roles(user, get_role_by_name(data["role"]))
    return user


@audited("admin_role_changed", lambda user: f"Set role of {user.email} to {user.primary_role}")
def change_role(admin_id, user_id, role_name):
    user = get_user(user_id)
    replace_roles(user, get_role_by_name(role_name))
    return user


@audited("admin_password_changed", lambda user: f"Changed password of {user.email}")
def change_password(admin_id, user_id, password):
    user = get_user(user_id)
    user.set_password(password)
    return user


@audited("admin_avatar_uploaded", lambda user: f"Uploaded avatar for {user.email}")
def upload_avatar(admin_id, user_id, file):
    user = get_user(user_id)
    store_avatar(user, file)
    return user


@audited("admin_status_changed", lambda user: f"{'Activated' if user.is_active else 'Deactivated'} {user.email}")
def toggle_status(admin_id, user_id, is_active=None):
    if int(admin_id) == int(user_id):
        raise InvalidOperationError("You cannot change the status of your own account")
    user = get_user(user_id)
    user.is_active = (not user.is_active) if is_active is None else bool(is_active)
    return user


@audited("admin_user_deleted", lambda email: f"Deleted user {email}")
def delete_user(admin_id, user_id):
    if int(admin_id) == int(user_id):
        raise InvalidOperationError("You cannot delete your own account")
    user = get_user(user_id)
    email = user.email
    db.session.delete(user)
    return email


# ---------------- Role assignments ----------------

def assign_role(admin_id, user_id, role_id):
    """Add a role to a user. Raises ConflictError when it is already assigned."""
    user = db.session.get(User, user_id)
    if not user:
        raise InvalidOperationError(f"User {user_id} not found")
    role = db.session.get(Role, role_id)
    if not role:
        raise InvalidOperationError(f"Role {role_id} not found")
    if UserRole.query.filter_by(user_id=user_id, role_id=role_id).first():
        raise ConflictError("Role already assigned", {"assigned": False})
    return _add_role(admin_id, user, role)


@audited("admin_role_assigned", lambda ur: f"Assigned role {ur.role.role_name} to {ur.user.email}")
def _add_role(admin_id, user, role):
    user_role = UserRole(role=role)
    user.user_roles.append(user_role)
    return user_role


@audited("admin_role_removed", lambda label: f"Removed role {label}")
def remove_role(admin_id, user_id, role_id):
    user_role = UserRole.query.filter_by(user_id=user_id, role_id=role_id).first()
    if not user_role:
        raise NotFoundError("Role is not assigned to this user")
    label = f"{user_role.role.role_name} from {user_role.user.email}"
    db.session.delete(user_role)
    return label


def list_roles():
    return Role.query.order_by(Role.id).all()


def list_permissions():
    return Permission.query.order_by(Permission.category, Permission.permission_code).all()


def user_roles(user_id):
    return get_user(user_id).role_names


def user_permissions(user_id):
    return sorted(get_user(user_id).permission_codes())
