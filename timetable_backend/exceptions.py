from typing import Optional


class AppError(Exception):
    """Base class for all application exceptions."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class DatasetError(AppError):
    """Raised when subject or room input cannot be used at all."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, status_code=400, details=details)


class SessionNotFoundError(AppError):
    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} not found", status_code=404)
