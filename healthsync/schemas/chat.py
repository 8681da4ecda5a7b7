from marshmallow import fields, validate

from . import BaseSchema


class AskSchema(BaseSchema):
    question = fields.String(required=True, validate=validate.Length(min=1, max=2000))
