"""
Custom exceptions for the application.

This module defines domain-specific exceptions for better error handling
and more meaningful error messages throughout the application. The request
layer maps each class to a transport status; the core only raises them.
"""

from typing import Optional, Any, Dict


class ApplicationException(Exception):
    """Base exception for all application-specific exceptions."""

    error_code = "APPLICATION_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatabaseException(ApplicationException):
    """Exception raised for database-related errors."""

    error_code = "DATABASE_ERROR"


class ValidationException(ApplicationException):
    """
    Exception raised when caller-supplied data fails schema rules.

    Carries a field -> message mapping covering every invalid field.
    """

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        self.errors = errors or {}
        super().__init__(message, {"errors": self.errors})


class NotFoundException(ApplicationException):
    """Exception raised when a requested resource is not found."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} not found: {identifier}"
        super().__init__(message, {"resource": resource, "identifier": identifier})


class ForbiddenException(ApplicationException):
    """Exception raised when an authenticated actor lacks rights on a resource."""

    error_code = "FORBIDDEN"


class ConflictException(ApplicationException):
    """Exception raised when attempting to create a duplicate resource."""

    error_code = "CONFLICT"

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} already exists with {field}: {value}"
        super().__init__(message, {"resource": resource, "field": field, "value": value})


class AuthenticationException(ApplicationException):
    """Exception raised when the request carries no usable identity."""

    error_code = "UNAUTHENTICATED"
