from datetime import date
from healthsync.extensions import db


class NutritionLog(db.Model):
    __tablename__ = "nutrition_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    log_date = db.Column(db.Date, nullable=False, default=date.today, index=True)
    total_calories = db.Column(db.Float, nullable=False, default=0.0)
    protein_g = db.Column(db.Float, nullable=False, default=0.0)
    carbs_g = db.Column(db.Float, nullable=False, default=0.0)
    fat_g = db.Column(db.Float, nullable=False, default=0.0)

    user = db.relationship("User", back_populates="nutrition_logs")
    food_entries = db.relationship(
        "FoodEntry",
        back_populates="nutrition_log",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.Index("idx_nutrition_logs_user_date", "user_id", "log_date"),
    )

    def recalculate_totals(self):
        self.total_calories = round(sum(e.calories_kcal or 0 for e in self.food_entries), 2)
        self.protein_g = round(sum(e.protein_g or 0 for e in self.food_entries), 2)
        self.carbs_g = round(sum(e.carbs_g or 0 for e in self.food_entries), 2)
        self.fat_g = round(sum(e.fat_g or 0 for e in self.food_entries), 2)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "log_date": self.log_date.isoformat() if self.log_date else None,
            "total_calories": self.total_calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
            "food_entries": [e.to_dict() for e in self.food_entries],
        }
