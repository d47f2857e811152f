"""
JSON error responses shared by the API blueprints.
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .logging_service import LoggingService


def internal_error(source, error, message='Internal server error'):
    """Log the failure server side and answer with a generic 500"""
    LoggingService.log_error_with_traceback(source, error, {'path': request.path})
    return jsonify({'message': message}), 500


def register_error_handlers(app):
    """API paths answer HTTP errors as {"message": ...} instead of HTML pages"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if not request.path.startswith('/api/'):
            return error
        messages = {
            404: 'Not found',
            405: 'Method not allowed',
            413: 'File too large',
        }
        return jsonify({'message': messages.get(error.code, error.name)}), error.code

    return handle_http_exception
