"""Exceptions raised by the editor and the catalog backend"""

from typing import Optional


class EditorError(Exception):
    """Base class for recoverable editor errors"""


class FormValidationError(EditorError):
    """User input was rejected; the configuration is left untouched"""


class GatewayError(EditorError):
    """Loading or saving through the backend failed.

    The message is shown to the user as-is. For non-success responses it is
    the response body.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogValidationError(ValueError):
    """A submitted catalog failed server-side validation"""
