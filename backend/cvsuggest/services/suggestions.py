# backend/cvsuggest/services/suggestions.py
from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Protocol

from cvsuggest.config import Settings
from cvsuggest.errors import EmptyResultError, ResponseParseError, SuggestionError, UnexpectedError
from cvsuggest.services.llm_openai import JSON_OBJECT
from cvsuggest.services.prompts import build_messages

log = logging.getLogger(__name__)


class ChatLLM(Protocol):
    async def chat(self, messages, temperature=None, response_format=None) -> str:
        ...


def _unwrap(parsed: Any) -> Any:
    # {"suggestions": [...]} first, then a bare [...]; anything else yields nothing
    if isinstance(parsed, dict) and "suggestions" in parsed:
        return parsed["suggestions"]
    if isinstance(parsed, list):
        return parsed
    return None


def extract_suggestions(raw: str) -> List[Any]:
    """Parse the model's JSON reply into the list of suggestions.

    Entries are returned untouched; only "non-empty list" is enforced.
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        log.error("JSON parse error: %s", e)
        log.error("Response content: %r", raw)
        raise ResponseParseError(raw=raw) from e

    suggestions = _unwrap(parsed)
    if not isinstance(suggestions, list) or not suggestions:
        log.warning("no suggestions in model reply: %r", raw)
        raise EmptyResultError()
    return suggestions


async def generate_suggestions(
    llm: ChatLLM,
    settings: Settings,
    section: str,
    data: Mapping[str, Any],
) -> List[Any]:
    try:
        raw = await llm.chat(
            build_messages(section, data),
            temperature=settings.llm_temperature,
            response_format=JSON_OBJECT if settings.llm_json_mode else None,
        )
        return extract_suggestions(raw)
    except SuggestionError:
        raise
    except Exception as e:
        log.exception("suggestion generation failed for section=%s", section)
        raise UnexpectedError(details=str(e)) from e
