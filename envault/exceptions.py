"""Custom exception hierarchy for Envault."""

from typing import Optional, Dict, Any


class EnvaultException(Exception):
    """
    Base exception for all Envault errors.

    Carries a human-readable message, the HTTP status code used at the API
    boundary, and optional details that are logged but never returned to
    callers.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code to return
            details: Optional additional context for logs
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the plain-text error body returned by the API."""
        return {"error": self.message}


class ValidationError(EnvaultException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class ProjectNotFoundError(EnvaultException):
    """Project not found in database."""

    def __init__(self, project_id: int):
        super().__init__(
            f"Project not found: {project_id}",
            status_code=404,
            details={"project_id": project_id}
        )


class ProjectAlreadyExistsError(EnvaultException):
    """A project is already registered for this path."""

    def __init__(self, path: str):
        super().__init__(
            f"Project already registered: {path}",
            status_code=409,
            details={"path": path}
        )


class FilesystemError(EnvaultException):
    """Reading, listing or copying files in a project directory failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path else {}
        super().__init__(message, status_code=500, details=details)


class DatabaseError(EnvaultException):
    """Database operation failed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(message, status_code=500, details=details)


class StoreInitializationError(EnvaultException):
    """The local database could not be created or opened at startup."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        details = {}
        if original_error:
            details["original_error"] = str(original_error)

        super().__init__(message, status_code=500, details=details)
