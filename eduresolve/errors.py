from typing import Any, Callable
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from fastapi import FastAPI, status

class EduResolveException(Exception):
    """Base class for all grievance platform-related exceptions."""

    def __init__(self, message: str = "An error occurred", error_code: str = "error"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class StoreUnavailable(EduResolveException):
    """The record store could not be read or written."""
    def __init__(self, message: str = "Record store unavailable", error_code: str = "store_unavailable"):
        super().__init__(message=message, error_code=error_code)


class InvalidToken(EduResolveException):
    """User has provided an invalid or expired token."""
    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message=message, error_code="invalid_token")


class UserAlreadyExists(EduResolveException):
    """User is trying to register with an email that already exists."""
    def __init__(self, message: str = "Email already registered"):
        super().__init__(message=message, error_code="user_exists")


class PasswordMismatch(EduResolveException):
    """Password and its confirmation differ."""
    def __init__(self, message: str = "Passwords do not match"):
        super().__init__(message=message, error_code="password_mismatch")


class InvalidCredentials(EduResolveException):
    """User has provided incorrect login details."""
    def __init__(self, message: str = "Invalid credentials. Please verify your identity."):
        super().__init__(message=message, error_code="invalid_credentials")


class UnAuthenticated(EduResolveException):
    """User is not authenticated."""
    def __init__(self, message: str = "You are not authenticated. Please login to continue"):
        super().__init__(message=message, error_code="unauthenticated")


class InsufficientPermission(EduResolveException):
    """User does not have the necessary permissions to perform an action."""
    def __init__(self, message: str = "Operation not permitted for this role"):
        super().__init__(message=message, error_code="insufficient_permissions")


class ComplaintNotFound(EduResolveException):
    """No complaint with the requested id."""
    def __init__(self, message: str = "Complaint not found"):
        super().__init__(message=message, error_code="complaint_not_found")


def create_exception_handler(
    status_code: int,
    initial_detail: dict[str, Any],
) -> Callable[[Request, EduResolveException], JSONResponse]:

    async def exception_handler(request: Request, exc: EduResolveException):
        return JSONResponse(
            status_code=status_code,
            content={
                "message": exc.message or initial_detail["message"],
                "error_code": exc.error_code or initial_detail["error_code"],
                "resolution": initial_detail["resolution"] or "Please try again later",
            }
        )

    return exception_handler


# exception -> (status code, resolution shown to the client)
ERROR_RESPONSES: dict[type[EduResolveException], tuple[int, str]] = {
    StoreUnavailable: (status.HTTP_503_SERVICE_UNAVAILABLE, "Please try again later"),
    UserAlreadyExists: (status.HTTP_409_CONFLICT, "Please use a different email or sign in"),
    PasswordMismatch: (status.HTTP_422_UNPROCESSABLE_ENTITY, "Please re-enter the password confirmation"),
    InvalidCredentials: (status.HTTP_401_UNAUTHORIZED, "Please check your credentials and try again"),
    UnAuthenticated: (status.HTTP_401_UNAUTHORIZED, "Please request a new token or signin."),
    InvalidToken: (status.HTTP_401_UNAUTHORIZED, "Please request a new token"),
    InsufficientPermission: (status.HTTP_403_FORBIDDEN, "Please check your permissions"),
    ComplaintNotFound: (status.HTTP_404_NOT_FOUND, "Please check the complaint id"),
}


def register_all_errors(app: FastAPI):
    """Registers all exception handlers in the FastAPI app."""

    for exc_class, (status_code, resolution) in ERROR_RESPONSES.items():
        default = exc_class()
        app.add_exception_handler(
            exc_class,
            create_exception_handler(
                status_code=status_code,
                initial_detail={
                    "message": default.message,
                    "resolution": resolution,
                    "error_code": default.error_code,
                },
            ),
        )

    @app.exception_handler(500)
    async def internal_server_error(request, exc):
        return JSONResponse(
            content={
                "message": "Oops! Something went wrong",
                "resolution": "Please try again later",
                "error_code": "server_error",
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
