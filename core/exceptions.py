"""
Custom exceptions for the application.
Following domain-driven design principles with specific exception types.
Each exception carries the HTTP status the API layer answers with.
"""


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"
    status_code = 400

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationException):
    """Raised when validation fails"""
    default_message = "Validation failed"
    status_code = 400


class AuthenticationError(BaseApplicationException):
    """Raised for missing/invalid credentials or a locked account"""
    default_message = "Not authorized to access this route"
    status_code = 401


class NotFoundError(BaseApplicationException):
    """Raised when a resource is not found"""
    default_message = "Resource not found"
    status_code = 404

    def __init__(self, resource_type=None, resource_id=None, **kwargs):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if resource_type and 'message' not in kwargs:
            kwargs['message'] = f"{resource_type} not found"
        super().__init__(**kwargs)


class PermissionDeniedError(BaseApplicationException):
    """Raised when user doesn't have permission"""
    default_message = "Not authorized to access this resource"
    status_code = 403


ForbiddenError = PermissionDeniedError


class ConflictError(BaseApplicationException):
    """Raised on uniqueness violations and capacity conflicts"""
    default_message = "Resource conflict"
    status_code = 409


class BusinessLogicError(BaseApplicationException):
    """Raised when business rule is violated"""
    default_message = "Business rule violation"
    status_code = 400
