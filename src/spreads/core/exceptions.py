"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str = ""):
        message = f"{resource} not found: {identifier}" if identifier else resource
        super().__init__(message, code="NOT_FOUND")


class UnauthorizedError(AppError):
    """Raised when a caller cannot be identified or authorized."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class AlreadyClaimedError(AppError):
    """Raised when the daily point has already been claimed."""

    def __init__(self):
        super().__init__("Already claimed today", code="ALREADY_CLAIMED")


class RateLimitedError(AppError):
    """Raised when an action is repeated sooner than allowed."""

    status_code = 429

    def __init__(self, message: str, days_remaining: int = 0):
        self.days_remaining = days_remaining
        super().__init__(message, code="RATE_LIMITED")


class UpstreamError(AppError):
    """Raised when an upstream data provider fails and no cached value can stand in."""

    status_code = 502

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider} request failed: {detail}", code="UPSTREAM_ERROR")
        self.provider = provider
