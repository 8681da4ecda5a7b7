from datetime import date
from healthsync.extensions import db

GENDERS = ("Male", "Female", "Other")
ACTIVITY_LEVELS = ("Sedentary", "Light", "Moderate", "Active", "VeryActive")


class UserProfile(db.Model):
    __tablename__ = "user_profiles"

    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    full_name = db.Column(db.String(150), nullable=False, default="")
    dob = db.Column(db.Date, nullable=True)
    gender = db.Column(db.String(20), nullable=False, default="")
    height_cm = db.Column(db.Float, nullable=False, default=0.0)
    weight_kg = db.Column(db.Float, nullable=False, default=0.0)
    activity_level = db.Column(db.String(20), nullable=False, default="Moderate")
    avatar_url = db.Column(db.String(500), nullable=True)

    user = db.relationship("User", back_populates="profile")

    @property
    def age(self):
        if not self.dob:
            return None
        today = date.today()
        return today.year - self.dob.year - ((today.month, today.day) < (self.dob.month, self.dob.day))

    def is_complete(self, today=None) -> bool:
        """A profile is complete once the user has entered real body data.

        Google sign-ups start with gender "Unknown" and zero height/weight,
        and the date of birth must be more than ten years in the past.
        """
        today = today or date.today()
        if not self.full_name or not self.full_name.strip():
            return False
        if not self.gender or self.gender == "Unknown":
            return False
        if not self.height_cm or self.height_cm <= 0:
            return False
        if not self.weight_kg or self.weight_kg <= 0:
            return False
        if not self.dob:
            return False
        try:
            ten_years_ago = today.replace(year=today.year - 10)
        except ValueError:
            # Feb 29
            ten_years_ago = today.replace(year=today.year - 10, day=28)
        return self.dob < ten_years_ago

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "dob": self.dob.isoformat() if self.dob else None,
            "age": self.age,
            "gender": self.gender,
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "activity_level": self.activity_level,
            "avatar_url": self.avatar_url,
            "is_complete": self.is_complete(),
        }
