from flask import jsonify, current_app
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

from healthsync.extensions import db


class HealthSyncError(Exception):
    """Base class for errors raised by service functions."""
    status_code = 500

    def __init__(self, message=None, payload=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__
        self.payload = payload

    def to_dict(self):
        body = {"msg": self.message, "status_code": self.status_code}
        if self.payload:
            body.update(self.payload)
        return body


class InvalidOperationError(HealthSyncError):
    """Operation is not allowed in the current state"""
    status_code = 400


class ValidationError(HealthSyncError):
    """Validation failed"""
    status_code = 400

    def __init__(self, message=None, errors=None):
        super().__init__(message, {"errors": errors} if errors else None)
        self.errors = errors or {}


class UnauthorizedError(HealthSyncError):
    """Authentication required"""
    status_code = 401


class ForbiddenError(HealthSyncError):
    """Permission denied"""
    status_code = 403


class NotFoundError(HealthSyncError):
    """Resource not found"""
    status_code = 404


class ConflictError(HealthSyncError):
    """Resource already exists"""
    status_code = 409


class AiServiceError(HealthSyncError):
    """AI service is unavailable"""
    status_code = 503


def register_error_handlers(app):

    @app.errorhandler(HealthSyncError)
    def handle_healthsync_error(error):
        db.session.rollback()
        if error.status_code >= 500:
            current_app.logger.error(f"{error.__class__.__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(error):
        return jsonify({"msg": "Validation failed", "errors": error.messages, "status_code": 400}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"msg": error.description, "status_code": error.code}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {error}")
        return jsonify({"msg": "Internal server error", "status_code": 500}), 500
