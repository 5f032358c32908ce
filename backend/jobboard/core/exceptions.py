"""
Custom exception classes for the application
"""
from typing import Optional, Dict, Any


class JobBoardException(Exception):
    """Base exception for the job board API"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(JobBoardException):
    """Missing or malformed input"""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(JobBoardException):
    """Authentication related errors"""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=401, details=details)


class AuthorizationError(JobBoardException):
    """Authorization/permission errors"""

    def __init__(self, message: str = "Insufficient permissions", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=403, details=details)


class NotFoundError(JobBoardException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Optional[str] = None, message: Optional[str] = None):
        if message is None:
            message = f"{resource} not found"
            if identifier:
                message += f": {identifier}"
        super().__init__(message, status_code=404, details={"resource": resource})


class ConflictError(JobBoardException):
    """Duplicate records (email, application, report)"""

    def __init__(self, message: str = "Resource already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class StorageError(JobBoardException):
    """Rejected file uploads"""

    def __init__(self, message: str = "Upload failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)
