from marshmallow import EXCLUDE

from healthsync.extensions import ma


class BaseSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE
