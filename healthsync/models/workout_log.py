from datetime import datetime, date
from healthsync.extensions import db


class WorkoutLog(db.Model):
    __tablename__ = "workout_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    duration_min = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship("User", back_populates="workout_logs")
    exercise_sessions = db.relationship(
        "ExerciseSession",
        back_populates="workout_log",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.Index("idx_workout_logs_user_date", "user_id", "workout_date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "workout_date": self.workout_date.isoformat() if self.workout_date else None,
            "duration_min": self.duration_min,
            "notes": self.notes or "",
            "exercise_sessions": [s.to_dict() for s in self.exercise_sessions],
        }
