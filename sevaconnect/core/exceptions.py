"""
Custom Exceptions for the SevaConnect backend

This module defines the exception classes raised inside services and
repositories. Services convert them into ``ServiceResult`` failures at their
public boundary.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    OTP_MISMATCH = "OTP_MISMATCH"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    DATA_INTEGRITY_ERROR = "DATA_INTEGRITY_ERROR"

    # Business logic errors
    CONFLICT = "CONFLICT"
    INVALID_STATE = "INVALID_STATE"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__,
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        field: Optional[str] = None,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        self.field = field
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        self.resource_type = resource_type
        self.resource_id = resource_id
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details)


class ConflictError(BaseAppException):
    """Exception raised when an operation collides with existing state"""

    def __init__(
        self,
        message: str = "Conflict with existing data",
        details: Optional[Dict[str, Any]] = None,
        error_code: ErrorCode = ErrorCode.CONFLICT,
    ):
        super().__init__(message, error_code, details)


class InvalidStateError(BaseAppException):
    """Exception raised when an entity is not in a state that allows the operation"""

    def __init__(
        self,
        message: str = "Operation not allowed in current state",
        current_state: Optional[str] = None,
        requested_state: Optional[str] = None,
    ):
        details = {
            "current_state": current_state,
            "requested_state": requested_state,
        }
        super().__init__(message, ErrorCode.INVALID_STATE, details)


# ========================================
# Authentication Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class OtpVerificationError(AuthenticationError):
    """Exception raised when a submitted one-time code does not match"""

    def __init__(
        self,
        message: str = "The code you entered is incorrect.",
        phase: Optional[str] = None,
    ):
        details = {"phase": phase} if phase else {}
        super().__init__(message, ErrorCode.OTP_MISMATCH, details)


class TokenError(AuthenticationError):
    """Exception raised for access token problems"""

    def __init__(
        self,
        message: str = "Invalid token",
        error_code: ErrorCode = ErrorCode.TOKEN_INVALID,
    ):
        super().__init__(message, error_code)


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
    ):
        details = {
            "operation": operation,
            "table": table,
        }
        super().__init__(message, error_code, details)


class DuplicateEntryError(ConflictError):
    """Exception raised when trying to create a duplicate entry"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        field: Optional[str] = None,
        value: Optional[str] = None,
    ):
        details = {
            "field": field,
            "value": value,
        }
        self.field = field
        super().__init__(message, details, ErrorCode.DUPLICATE_ENTRY)


class DataIntegrityError(DatabaseError):
    """Exception raised when stored data violates a domain invariant"""

    def __init__(
        self,
        message: str = "Stored data violates an integrity rule",
        table: Optional[str] = None,
    ):
        super().__init__(message, table=table, error_code=ErrorCode.DATA_INTEGRITY_ERROR)


# ========================================
# External Service Exceptions
# ========================================

class ExternalServiceError(BaseAppException):
    """Exception raised when external service calls fail"""

    def __init__(
        self,
        message: str = "External service error",
        service_name: Optional[str] = None,
        endpoint: Optional[str] = None,
    ):
        details = {
            "service_name": service_name,
            "endpoint": endpoint,
        }
        super().__init__(message, ErrorCode.EXTERNAL_SERVICE_ERROR, details)


# ========================================
# Utility Functions
# ========================================

def create_validation_error(field_errors: Dict[str, List[str]]) -> ValidationError:
    """
    Create a validation error naming every offending field.

    Args:
        field_errors: Dictionary mapping field names to error messages

    Returns:
        ValidationError instance
    """
    fields = ", ".join(field_errors)
    first = next(iter(field_errors), None)
    return ValidationError(f"Invalid or missing fields: {fields}", field_errors, field=first)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'ConflictError',
    'InvalidStateError',
    'AuthenticationError',
    'OtpVerificationError',
    'TokenError',
    'DatabaseError',
    'DuplicateEntryError',
    'DataIntegrityError',
    'ExternalServiceError',
    'create_validation_error',
]
