# backend/cvsuggest/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional


class SuggestionError(Exception):
    """Base for every failure that ends a /api/generate request.

    Subclasses know their HTTP status and the envelope sent to the caller.
    Anything diagnostic (raw model output, tracebacks) stays in the logs.
    """

    status_code: int = 500
    message: str = "Failed to generate suggestions"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class InputValidationError(SuggestionError):
    status_code = 400
    message = "Missing section or data"


class MethodNotAllowedError(SuggestionError):
    status_code = 405
    message = "Method not allowed"

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ExternalAPIError(SuggestionError):
    """The completion provider answered with a non-2xx status."""

    message = "OpenAI API error"

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        type: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message or None)
        self.status_code = status_code
        self.type = type or "api_error"
        self.code = code

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "type": self.type}


class ResponseParseError(SuggestionError):
    message = "Failed to parse AI response"

    def __init__(self, raw: Optional[str] = None):
        super().__init__()
        # server-side only
        self.raw = raw


class EmptyResultError(SuggestionError):
    message = "No suggestions generated"


class UnexpectedError(SuggestionError):
    message = "Failed to generate suggestions"

    def __init__(self, details: str = ""):
        super().__init__()
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "details": self.details}
