from healthsync.extensions import db

MEAL_TYPES = ("Breakfast", "Lunch", "Dinner", "Snack")


class FoodEntry(db.Model):
    __tablename__ = "food_entries"

    id = db.Column(db.Integer, primary_key=True)
    nutrition_log_id = db.Column(db.Integer, db.ForeignKey("nutrition_logs.id", ondelete="CASCADE"), nullable=False, index=True)
    food_item_id = db.Column(db.Integer, db.ForeignKey("food_items.id"), nullable=False, index=True)
    quantity = db.Column(db.Float, nullable=False)
    meal_type = db.Column(db.String(20), nullable=False)
    calories_kcal = db.Column(db.Float, nullable=True)
    protein_g = db.Column(db.Float, nullable=True)
    carbs_g = db.Column(db.Float, nullable=True)
    fat_g = db.Column(db.Float, nullable=True)

    nutrition_log = db.relationship("NutritionLog", back_populates="food_entries")
    food_item = db.relationship("FoodItem", back_populates="entries")

    def to_dict(self):
        return {
            "id": self.id,
            "food_item_id": self.food_item_id,
            "food_item_name": self.food_item.name if self.food_item else None,
            "quantity": self.quantity,
            "meal_type": self.meal_type,
            "calories_kcal": self.calories_kcal,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
        }
