"""
Domain errors raised by services.

Routes let these propagate; the handler registered in main.py renders
them as {"error": ..., "details": ...} with the error's status code.
CRUD routes keep using HTTPException for plain not-found / forbidden cases.
"""

from typing import Optional


class PlacementError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "details": self.details if self.details is not None else f"{type(self).__name__}: {self.message}",
        }


class RequestValidationFailed(PlacementError):
    """A required input is missing (e.g. empty resume text)."""

    status_code = 400


class ProfileNotFoundError(PlacementError):
    status_code = 400

    def __init__(self, message: str = "Profile not found. Please complete your profile first."):
        super().__init__(message)


class UpstreamServiceError(PlacementError):
    """Language model, judge or conversion service failed."""

    status_code = 502


class ServiceNotConfiguredError(PlacementError):
    """An API key needed by this operation is missing from the environment."""

    status_code = 500

    def __init__(self, setting_name: str):
        super().__init__(f"{setting_name} is not configured")
        self.setting_name = setting_name


class DocumentExtractionError(PlacementError):
    status_code = 400

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}
