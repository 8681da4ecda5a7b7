from datetime import datetime
from healthsync.extensions import db


class Role(db.Model):
    __tablename__ = "roles"

    id = db.Column(db.Integer, primary_key=True)
    role_name = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    role_permissions = db.relationship("RolePermission", back_populates="role", cascade="all, delete-orphan")
    user_roles = db.relationship("UserRole", back_populates="role", cascade="all, delete-orphan")

    def to_dict(self, with_permissions=False):
        data = {
            "id": self.id,
            "role_name": self.role_name,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if with_permissions:
            data["permissions"] = sorted(rp.permission.permission_code for rp in self.role_permissions)
        return data
