from marshmallow import fields, validate, pre_load

from . import BaseSchema


class CreateUserSchema(BaseSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=6))
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=150))
    role = fields.String(load_default="Customer", validate=validate.Length(min=1, max=50))

    @pre_load
    def normalize_email(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data = dict(data, email=data["email"].strip().lower())
        return data


class UpdateUserSchema(BaseSchema):
    full_name = fields.String(validate=validate.Length(min=1, max=150))
    role = fields.String(validate=validate.Length(min=1, max=50))


class RoleChangeSchema(BaseSchema):
    role = fields.String(required=True, validate=validate.Length(min=1, max=50))


class AdminPasswordSchema(BaseSchema):
    password = fields.String(required=True, validate=validate.Length(min=6))


class ToggleStatusSchema(BaseSchema):
    is_active = fields.Boolean(load_default=None, allow_none=True)
