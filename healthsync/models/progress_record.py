from datetime import date
from healthsync.extensions import db


class ProgressRecord(db.Model):
    __tablename__ = "progress_records"

    id = db.Column(db.Integer, primary_key=True)
    goal_id = db.Column(db.Integer, db.ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    record_date = db.Column(db.Date, nullable=False, default=date.today)
    value = db.Column(db.Float, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    weight_kg = db.Column(db.Float, nullable=True)
    waist_cm = db.Column(db.Float, nullable=True)

    goal = db.relationship("Goal", back_populates="progress_records")

    def to_dict(self):
        return {
            "id": self.id,
            "goal_id": self.goal_id,
            "record_date": self.record_date.isoformat() if self.record_date else None,
            "value": self.value,
            "notes": self.notes or "",
            "weight_kg": self.weight_kg,
            "waist_cm": self.waist_cm,
        }
