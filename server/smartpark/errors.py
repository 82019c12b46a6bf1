import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from server.smartpark.extensions import db

logger = logging.getLogger(__name__)


class SmartParkError(Exception):
    """Base error; carries the HTTP status and the message shown to the caller."""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFound(SmartParkError):
    status_code = 404
    message = 'Not found'


class Conflict(SmartParkError):
    # The admin client treats every rejected request as 400
    status_code = 400
    message = 'Conflict'


class ValidationError(SmartParkError):
    status_code = 400
    message = 'Invalid request'


class Unauthorized(SmartParkError):
    status_code = 401
    message = 'Unauthorized'


class Forbidden(SmartParkError):
    status_code = 403
    message = 'Forbidden'


class InternalError(SmartParkError):
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(SmartParkError)
    def handle_smartpark_error(error):
        return jsonify({'message': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.error(f"Unhandled error: {error}", exc_info=True)
        return jsonify({'message': 'Internal server error'}), 500
