from marshmallow import fields, validate, pre_load

from . import BaseSchema


class _EmailSchema(BaseSchema):
    email = fields.Email(required=True)

    @pre_load
    def normalize_email(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data = dict(data, email=data["email"].strip().lower())
        return data


class EmailSchema(_EmailSchema):
    pass


class VerifyCodeSchema(_EmailSchema):
    code = fields.String(required=True, validate=validate.Length(min=1))


class RegisterSchema(_EmailSchema):
    password = fields.String(required=True, validate=validate.Length(min=6))
    verification_code = fields.String(required=True, validate=validate.Length(min=1))
    full_name = fields.String(load_default="", validate=validate.Length(max=150))


class LoginSchema(_EmailSchema):
    password = fields.String(required=True, validate=validate.Length(min=1))


class VerifyResetOtpSchema(_EmailSchema):
    otp = fields.String(required=True, validate=validate.Length(equal=6))


class ResetPasswordSchema(VerifyResetOtpSchema):
    new_password = fields.String(required=True, validate=validate.Length(min=6))


class SetPasswordSchema(BaseSchema):
    password = fields.String(required=True, validate=validate.Length(min=6))


class GoogleMobileSchema(BaseSchema):
    id_token = fields.String(required=True, validate=validate.Length(min=1))
