"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth (10xx credentials/input, 11xx token/access)
  2xxx: User resource
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        details: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details
        super().__init__(message)


# --- 10xx: Credentials / input ---

class ValidationFailedError(AppError):
    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(1001, message, 400, details)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(
            1002,
            "Email already in use",
            400,
            "A user with this email already exists",
        )


class InvalidCredentialsError(AppError):
    # Same message for unknown email and wrong password (no account enumeration)
    def __init__(self) -> None:
        super().__init__(1003, "Invalid credentials", 401)


# --- 11xx: Token / access ---

class MissingTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1101, "Token not provided", 401)


class UnknownSubjectError(AppError):
    def __init__(self) -> None:
        super().__init__(1102, "User not found", 401)


class UnauthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(1103, "Authentication required", 401)


class InvalidTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1104, "Invalid token", 403)


class ExpiredTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1105, "Token expired", 403)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(1106, message, 403)


# --- 2xxx: User resource ---

class UserNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2001, f"User not found: {user_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
