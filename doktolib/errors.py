"""
API error taxonomy and the JSON error handlers that translate it.

Views and services raise these exceptions; register_error_handlers() turns
them into {'success': False, 'error': ...} responses. Server-side failures
carry a generic public message, the real cause is only logged.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ClientInputError(ApiError):
    status_code = 400
    message = 'Invalid request'


class UnsupportedFileType(ClientInputError):
    message = 'File type not allowed. Supported: PDF, JPG, PNG, GIF, DOC, DOCX, TXT'


class FileTooLarge(ClientInputError):
    message = 'File size exceeds 10MB limit'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class PersistenceError(ApiError):
    """A database operation failed."""
    message = 'Database operation failed'


class StorageError(ApiError):
    """Base class for object store failures."""
    message = 'File storage operation failed'


class StorageUnavailable(StorageError):
    """The object store gateway was never configured."""
    message = 'File storage is not available'


class UploadFailed(StorageError):
    message = 'Failed to upload file'


class DeleteFailed(StorageError):
    message = 'Failed to delete file from storage'


class LinkGenerationFailed(StorageError):
    message = 'Failed to generate file access link'


def error_response(message, status_code):
    return jsonify({
        'success': False,
        'error': message
    }), status_code


def register_error_handlers(app):
    """Attach JSON error handlers to the Flask app."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            cause = error.__cause__ or error
            logger.error("%s: %s", type(error).__name__, cause, exc_info=cause)
        return error_response(error.message, error.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def request_too_large(error):
        return error_response(FileTooLarge.message, 400)

    @app.errorhandler(404)
    def not_found(error):
        return error_response('Endpoint not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response('Method not allowed', 405)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_exception(e):
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return error_response('Internal server error. Check server logs for details.', 500)
