from datetime import date

from marshmallow import fields, validate, validates, ValidationError

from . import BaseSchema


class ExerciseSessionSchema(BaseSchema):
    exercise_id = fields.Integer(required=True)
    sets = fields.Integer(required=True, validate=validate.Range(min=1, max=100))
    reps = fields.Integer(required=True, validate=validate.Range(min=1, max=1000))
    weight_kg = fields.Float(load_default=0.0, validate=validate.Range(min=0, max=1000))
    rest_sec = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=0, max=3600))
    rpe = fields.Float(load_default=None, allow_none=True, validate=validate.Range(min=1, max=10))


class WorkoutLogSchema(BaseSchema):
    workout_date = fields.Date(required=True)
    duration_min = fields.Integer(required=True, validate=validate.Range(min=1, max=1440))
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=1000))
    exercise_sessions = fields.List(
        fields.Nested(ExerciseSessionSchema),
        required=True,
        validate=validate.Length(min=1, error="At least one exercise is required.")
    )

    @validates("workout_date")
    def not_in_future(self, value, **kwargs):
        if value > date.today():
            raise ValidationError("Workout date cannot be in the future.")
