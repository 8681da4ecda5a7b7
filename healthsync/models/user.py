from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from healthsync.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    # Google-only accounts have no password until they set one
    password_hash = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    email_confirmed = db.Column(db.Boolean, default=False, nullable=False)
    avatar_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    last_login_at = db.Column(db.DateTime, nullable=True)

    profile = db.relationship("UserProfile", uselist=False, back_populates="user", cascade="all, delete-orphan")
    user_roles = db.relationship("UserRole", back_populates="user", cascade="all, delete-orphan")
    goals = db.relationship("Goal", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    workout_logs = db.relationship("WorkoutLog", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    nutrition_logs = db.relationship("NutritionLog", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    chat_messages = db.relationship("ChatMessage", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    action_logs = db.relationship("UserActionLog", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    @property
    def roles(self):
        return [ur.role for ur in self.user_roles]

    @property
    def role_names(self):
        return [r.role_name for r in self.roles]

    @property
    def primary_role(self):
        names = self.role_names
        if "Admin" in names:
            return "Admin"
        return names[0] if names else None

    @property
    def full_name(self):
        if self.profile and self.profile.full_name:
            return self.profile.full_name
        return self.email

    def permission_codes(self):
        codes = set()
        for role in self.roles:
            for rp in role.role_permissions:
                codes.add(rp.permission.permission_code)
        return codes

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "is_active": self.is_active,
            "email_confirmed": self.email_confirmed,
            "avatar_url": self.avatar_url or (self.profile.avatar_url if self.profile else None),
            "role": self.primary_role,
            "roles": self.role_names,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_login_at": self.last_login_at.isoformat() if self.last_login_at else None,
        }
