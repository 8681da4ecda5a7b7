from healthsync.extensions import db

DIFFICULTIES = ("Beginner", "Intermediate", "Advanced")


class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, index=True)
    muscle_group = db.Column(db.String(50), nullable=False, index=True)
    difficulty = db.Column(db.String(20), nullable=False, default="Beginner")
    equipment = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)

    sessions = db.relationship("ExerciseSession", back_populates="exercise", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "muscle_group": self.muscle_group,
            "difficulty": self.difficulty,
            "equipment": self.equipment,
            "description": self.description,
            "image_url": self.image_url,
        }
