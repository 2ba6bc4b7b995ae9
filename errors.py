import logging
from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from models import db

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Error carrying the message and status code of a JSON error response."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidPayloadError(APIError):
    status_code = 400


class ValidationError(APIError):
    status_code = 400


class NotFoundError(APIError):
    status_code = 404


def error_response(message, status_code):
    return jsonify(error=message), status_code


def storage_message(exc):
    """The driver's own message, without SQLAlchemy's statement dump."""
    orig = getattr(exc, 'orig', None)
    return str(orig) if orig is not None else str(exc)


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def api_error(e):
        return error_response(e.message, e.status_code)

    @app.errorhandler(SQLAlchemyError)
    def storage_error(e):
        db.session.rollback()
        logger.exception("Storage failure on %s %s", request.method, request.path)
        return error_response(storage_message(e), 500)

    @app.errorhandler(404)
    def not_found(e):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("Method not allowed", 405)

    @app.errorhandler(413)
    def too_large(e):
        return error_response("Import file too large", 413)

    @app.errorhandler(500)
    def server_error(e):
        return error_response("Internal server error", 500)
