from marshmallow import fields, validate

from healthsync.models.exercise import DIFFICULTIES
from . import BaseSchema

_non_negative = validate.Range(min=0)


class ExerciseSchema(BaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    muscle_group = fields.String(required=True, validate=validate.Length(min=1, max=50))
    difficulty = fields.String(load_default="Beginner", validate=validate.OneOf(DIFFICULTIES))
    equipment = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=100))
    description = fields.String(load_default=None, allow_none=True)
    image_url = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))


class FoodItemSchema(BaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    serving_size = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    serving_unit = fields.String(load_default="g", validate=validate.Length(min=1, max=20))
    calories_kcal = fields.Float(required=True, validate=_non_negative)
    protein_g = fields.Float(load_default=0.0, validate=_non_negative)
    carbs_g = fields.Float(load_default=0.0, validate=_non_negative)
    fat_g = fields.Float(load_default=0.0, validate=_non_negative)
    image_url = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))
