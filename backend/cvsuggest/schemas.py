from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class SectionRequest(BaseModel):
    # Optional on purpose: absence is reported as our own 400, not a 422.
    section: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class Suggestion(BaseModel):
    option: int
    text: str


class SuggestionsOut(BaseModel):
    success: bool = True
    # Relayed as the model returned them; Suggestion is the expected shape.
    suggestions: List[Any]


class ErrorOut(BaseModel):
    success: bool = False
    error: str
    type: Optional[str] = None
    details: Optional[str] = None


class MethodNotAllowedOut(BaseModel):
    error: str = "Method not allowed"
