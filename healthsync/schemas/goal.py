from marshmallow import fields, validate, validates_schema, ValidationError

from healthsync.models.goal import GOAL_TYPES, GOAL_STATUSES
from . import BaseSchema


class GoalCreateSchema(BaseSchema):
    type = fields.String(required=True, validate=validate.OneOf(GOAL_TYPES))
    target_value = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    start_date = fields.Date(required=True)
    end_date = fields.Date(load_default=None, allow_none=True)
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=1000))

    @validates_schema
    def check_dates(self, data, **kwargs):
        start, end = data.get("start_date"), data.get("end_date")
        if start and end and end < start:
            raise ValidationError("End date must be on or after the start date.", "end_date")


class GoalUpdateSchema(BaseSchema):
    target_value = fields.Float(validate=validate.Range(min=0, min_inclusive=False))
    start_date = fields.Date()
    end_date = fields.Date(allow_none=True)
    status = fields.String(validate=validate.OneOf(GOAL_STATUSES))
    notes = fields.String(allow_none=True, validate=validate.Length(max=1000))


class ProgressRecordSchema(BaseSchema):
    value = fields.Float(required=True, validate=validate.Range(min=0))
    record_date = fields.Date(load_default=None, allow_none=True)
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=1000))
    weight_kg = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0, max=1000))
    waist_cm = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=0, max=500))
