from datetime import date

from marshmallow import fields, validate, validates, ValidationError

from healthsync.models.user_profile import GENDERS, ACTIVITY_LEVELS
from . import BaseSchema


class ProfileUpdateSchema(BaseSchema):
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    dob = fields.Date(required=True)
    gender = fields.String(required=True, validate=validate.OneOf(GENDERS))
    height_cm = fields.Float(required=True, validate=validate.Range(min=50, max=300))
    weight_kg = fields.Float(required=True, validate=validate.Range(min=20, max=500))
    activity_level = fields.String(load_default="Moderate", validate=validate.OneOf(ACTIVITY_LEVELS))

    @validates("dob")
    def dob_in_past(self, value, **kwargs):
        if value >= date.today():
            raise ValidationError("Date of birth must be in the past.")
