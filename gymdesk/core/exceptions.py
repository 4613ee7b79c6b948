"""Error kinds raised by the gym platform and their HTTP status codes."""

from fastapi import status


class GymDeskError(Exception):
    """Base exception for the gym platform."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(GymDeskError):
    """Raised when the caller's credential is missing, invalid or expired."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(GymDeskError):
    """Raised when the caller may not perform the operation."""
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(GymDeskError):
    """Raised when input validation fails."""
    status_code = status.HTTP_400_BAD_REQUEST


class ResourceNotFoundError(GymDeskError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class ResourceConflictError(GymDeskError):
    """Raised when a resource already exists."""
    status_code = status.HTTP_409_CONFLICT
