# taskboard/core/exceptions.py
"""
Core exceptions - standardized error handling for the Taskboard API.

Every failure the API reports to a caller is one of these exceptions.
The HTTP layer maps each class to a status code, so services raise
domain errors and never build HTTP responses themselves.
"""

from typing import Optional, Dict, Any


class TaskboardError(Exception):
    """Base exception for all Taskboard errors"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Response body for this error"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TaskboardError):
    """Malformed or missing required input"""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize validation error.

        Args:
            message: Error description
            field: Field that failed validation
            value: Invalid value
            details: Additional validation context
        """
        super().__init__(message, details)
        self.field = field
        self.value = value

        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = str(value)


class DuplicateRecordError(TaskboardError):
    """A write violated a unique index in the store"""

    status_code = 409

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.collection = collection

        if collection:
            self.details['collection'] = collection


class DuplicateEmailError(DuplicateRecordError):
    """A user with this email already exists"""

    def __init__(self, email: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__("A user with this email already exists", collection="users", details=details)
        self.email = email

        if email:
            self.details['email'] = email


class NotFoundError(TaskboardError):
    """Referenced entity does not exist"""

    status_code = 404

    def __init__(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize not-found error.

        Args:
            message: Error description
            entity: Kind of entity (user, directory, task)
            entity_id: Identifier that was looked up
            details: Additional context
        """
        super().__init__(message, details)
        self.entity = entity
        self.entity_id = entity_id

        if entity:
            self.details['entity'] = entity
        if entity_id:
            self.details['id'] = entity_id


class UnauthenticatedError(TaskboardError):
    """Missing, invalid or expired credentials or token"""

    status_code = 401

    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID = "invalid"
    INVALID_CREDENTIALS = "invalid_credentials"

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize authentication error.

        Args:
            message: Error description
            reason: Why authentication failed (missing, malformed, expired, ...)
            details: Additional context
        """
        super().__init__(message, details)
        self.reason = reason

        if reason:
            self.details['reason'] = reason


class ServiceError(TaskboardError):
    """Errors in external service interactions"""

    def __init__(
        self,
        message: str,
        service_name: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize service error.

        Args:
            message: Error description
            service_name: Name of the failing service
            operation: Operation that failed
            details: Additional service context
        """
        super().__init__(message, details)
        self.service_name = service_name
        self.operation = operation

        if service_name:
            self.details['service'] = service_name
        if operation:
            self.details['operation'] = operation


class StoreUnavailableError(ServiceError):
    """The document store cannot be reached"""

    status_code = 503

    def __init__(
        self,
        message: str = "Document store is unavailable",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, service_name="MongoDB", operation=operation, details=details)


class ConfigurationError(TaskboardError):
    """Errors in system configuration and initialization"""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error description
            component: Component with configuration issue
            details: Additional configuration context
        """
        super().__init__(message, details)
        self.component = component

        if component:
            self.details['component'] = component


# Convenience functions for creating common errors

def validation_error(message: str, field: str, value: Any = None) -> ValidationError:
    """Create a validation error with field context."""
    return ValidationError(message, field=field, value=value)


def not_found(entity: str, entity_id: str) -> NotFoundError:
    """Create a not-found error for an entity id."""
    return NotFoundError(f"{entity.capitalize()} not found", entity=entity, entity_id=entity_id)
