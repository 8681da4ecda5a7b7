from datetime import date
from healthsync.extensions import db

GOAL_TYPES = ("weight_loss", "weight_gain", "muscle_gain", "fat_loss")
GOAL_STATUSES = ("active", "in_progress", "completed", "paused", "cancelled")
OPEN_STATUSES = ("active", "in_progress")


class Goal(db.Model):
    __tablename__ = "goals"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False)
    target_value = db.Column(db.Float, nullable=False)
    start_date = db.Column(db.Date, nullable=False, default=date.today)
    end_date = db.Column(db.Date, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="active", index=True)
    notes = db.Column(db.Text, nullable=True)

    user = db.relationship("User", back_populates="goals")
    progress_records = db.relationship(
        "ProgressRecord",
        back_populates="goal",
        order_by="ProgressRecord.record_date",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.Index("idx_goals_user_status", "user_id", "status"),
    )

    @property
    def is_open(self):
        return self.status in OPEN_STATUSES

    def to_dict(self, today=None):
        from healthsync.services.goal_progress import summarize_goal

        data = {
            "id": self.id,
            "user_id": self.user_id,
            "type": self.type,
            "target_value": self.target_value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "status": self.status,
            "notes": self.notes or "",
            "progress_records": [r.to_dict() for r in self.progress_records],
        }
        data.update(summarize_goal(self, today=today))
        return data
