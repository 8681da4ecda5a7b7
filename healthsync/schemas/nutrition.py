from marshmallow import fields, validate

from healthsync.models.food_entry import MEAL_TYPES
from . import BaseSchema

_quantity = validate.Range(min=0, max=10000, min_inclusive=False)


class FoodEntryInputSchema(BaseSchema):
    food_item_id = fields.Integer(required=True)
    quantity = fields.Float(required=True, validate=_quantity)
    meal_type = fields.String(required=True, validate=validate.OneOf(MEAL_TYPES))


class NutritionLogSchema(BaseSchema):
    log_date = fields.Date(required=True)
    entries = fields.List(
        fields.Nested(FoodEntryInputSchema),
        required=True,
        validate=validate.Length(min=1, error="At least one food entry is required.")
    )


class AddFoodEntrySchema(FoodEntryInputSchema):
    log_date = fields.Date(load_default=None, allow_none=True)
