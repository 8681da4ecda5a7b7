from healthsync.extensions import db


class ExerciseSession(db.Model):
    __tablename__ = "exercise_sessions"

    id = db.Column(db.Integer, primary_key=True)
    workout_log_id = db.Column(db.Integer, db.ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = db.Column(db.Integer, db.ForeignKey("exercises.id"), nullable=False, index=True)
    sets = db.Column(db.Integer, nullable=False)
    reps = db.Column(db.Integer, nullable=False)
    weight_kg = db.Column(db.Float, nullable=False, default=0.0)
    rest_sec = db.Column(db.Integer, nullable=True)
    rpe = db.Column(db.Float, nullable=True)

    workout_log = db.relationship("WorkoutLog", back_populates="exercise_sessions")
    exercise = db.relationship("Exercise", back_populates="sessions")

    def to_dict(self):
        return {
            "id": self.id,
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise.name if self.exercise else None,
            "sets": self.sets,
            "reps": self.reps,
            "weight_kg": self.weight_kg,
            "rest_sec": self.rest_sec,
            "rpe": self.rpe,
        }
