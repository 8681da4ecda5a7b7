from datetime import datetime
from healthsync.extensions import db


class UserActionLog(db.Model):
    __tablename__ = "user_action_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    action_type = db.Column(db.String(50), nullable=False, index=True)
    description = db.Column(db.String(500), nullable=False)
    metadata_json = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    user = db.relationship("User", back_populates="action_logs")

    def to_dict(self):
        return {
            "id": self.id,
            "action_type": self.action_type,
            "description": self.description,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
