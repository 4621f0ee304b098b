"""
Global Flask error handling middleware.

All exceptions (custom or unexpected) are returned as JSON payloads:
{
    "status": "error",
    "error": "ErrorClassName",
    "message": "Human readable message",
    "details": { ... optional context ... }
}
"""

import os
import traceback

from flask import jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from middleware.errors import BaseAppError, DatabaseConnectionError


def register_error_handlers(app):
    """Attach all JSON error handlers to a Flask app instance."""

    @app.errorhandler(BaseAppError)
    def handle_custom_error(err):
        """Handle custom, domain-specific errors."""
        app.logger.warning("%s: %s", err.__class__.__name__, err.message)
        response = jsonify(err.to_dict())
        response.status_code = err.code
        return response

    @app.errorhandler(PyMongoError)
    def handle_database_error(err):
        app.logger.error("Database error: %s", err)
        return handle_custom_error(DatabaseConnectionError(details={"reason": str(err)}))

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        """Render Werkzeug errors (404 routes, 405 methods...) as JSON."""
        # Flask dispatches HTTPException subclasses by status code, so custom
        # errors with a non-500 code land here.
        if isinstance(err, BaseAppError):
            return handle_custom_error(err)
        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": err.description,
            "details": {},
        }
        return jsonify(payload), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        """Catch-all handler for unexpected exceptions."""
        app.logger.exception("Unhandled %s", err.__class__.__name__)
        details = {}
        if app.debug or os.getenv("FLASK_DEBUG") == "1":
            details["traceback"] = traceback.format_exc()

        payload = {
            "status": "error",
            "error": err.__class__.__name__,
            "message": str(err) or "Unexpected internal error",
            "details": details
        }
        return jsonify(payload), 500
