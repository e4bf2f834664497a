from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from showcase.extensions import db


class ApiError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 400
    error = "ApiError"

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400
    error = "ValidationError"


class AuthError(ApiError):
    status_code = 401
    error = "AuthError"


class PermissionDenied(ApiError):
    status_code = 403
    error = "PermissionDenied"


class NotFoundError(ApiError):
    status_code = 404
    error = "NotFound"


class ConflictError(ApiError):
    # Blocked deletes are reported as a plain 400
    status_code = 400
    error = "Conflict"


def error_response(error, message, status_code):
    response = jsonify({
        "error": error,
        "message": message
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return error_response(error.error, error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.name.replace(" ", ""), error.description, error.code)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Database error: %s", error)
        return error_response("InternalError", "Internal server error", 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error: %s", error)
        return error_response("InternalError", "Internal server error", 500)
