from healthsync.extensions import db


class FoodItem(db.Model):
    __tablename__ = "food_items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False, index=True)
    serving_size = db.Column(db.Float, nullable=False, default=100.0)
    serving_unit = db.Column(db.String(20), nullable=False, default="g")
    calories_kcal = db.Column(db.Float, nullable=False, default=0.0)
    protein_g = db.Column(db.Float, nullable=False, default=0.0)
    carbs_g = db.Column(db.Float, nullable=False, default=0.0)
    fat_g = db.Column(db.Float, nullable=False, default=0.0)
    image_url = db.Column(db.String(500), nullable=True)

    entries = db.relationship("FoodEntry", back_populates="food_item", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "serving_size": self.serving_size,
            "serving_unit": self.serving_unit,
            "calories_kcal": self.calories_kcal,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
            "image_url": self.image_url,
        }
