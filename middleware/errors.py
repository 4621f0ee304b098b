"""
Custom exception definitions for the recruitment dashboard service.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, so Flask's error system renders them as JSON responses.

Domain Groups:
--------------
1. Request Errors (400-404)
2. Upstream Errors (502)
3. Database Errors (503)
4. System Errors (500)
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        if code:
            self.code = code

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# ==============================================================================
# 1. REQUEST ERRORS (HTTP 400-404)
# ==============================================================================

class ValidationError(BaseAppError):
    code = 400
    description = "Validation error"


class InvalidQueryParameterError(ValidationError):
    description = "Invalid query parameter"


class AuthenticationError(BaseAppError):
    code = 401
    description = "Authentication required"


class RecordNotFoundError(BaseAppError):
    code = 404
    description = "Requested record not found"


# ==============================================================================
# 2. UPSTREAM ERRORS (HTTP 502)
# ==============================================================================

class RemoteStatisticsError(BaseAppError):
    """Raised when the upstream statistics API fails or answers garbage."""
    code = 502
    description = "Upstream statistics service unavailable"


# ==============================================================================
# 3. DATABASE ERRORS (HTTP 503)
# ==============================================================================

class DatabaseConnectionError(BaseAppError):
    code = 503
    description = "Database connection failed"


# ==============================================================================
# 4. SYSTEM ERRORS (HTTP 500)
# ==============================================================================

class ConfigurationError(BaseAppError):
    code = 500
    description = "Configuration missing or invalid"
