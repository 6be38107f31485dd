# backend/cvsuggest/services/llm_openai.py
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional

import httpx

from cvsuggest.config import Settings
from cvsuggest.errors import ExternalAPIError, ResponseParseError

log = logging.getLogger("llm-openai")

JSON_OBJECT = {"type": "json_object"}


def _normalize_messages(messages: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    return [{"role": str(m.get("role", "user")), "content": str(m.get("content", ""))} for m in messages]


def _provider_error(r: httpx.Response) -> ExternalAPIError:
    # OpenAI-style body: {"error": {"message", "type", "code"}}
    try:
        body = r.json()
    except ValueError:
        body = None
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        code = err.get("code")
        return ExternalAPIError(
            r.status_code,
            message=err.get("message"),
            type=err.get("type"),
            code=str(code) if code is not None else None,
        )
    if isinstance(err, str):
        return ExternalAPIError(r.status_code, message=err)
    return ExternalAPIError(r.status_code)


class OpenAIChatLLM:
    """Chat-completions client for OpenAI or any API speaking its wire format."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.has_key = bool(settings.openai_api_key)
        self.model = settings.openai_model
        self.temperature = settings.llm_temperature
        self.timeout = settings.llm_timeout_secs
        self._url = f"{settings.openai_base_url.rstrip('/')}/chat/completions"
        self._transport = transport
        self._headers = {
            "Authorization": f"Bearer {settings.openai_api_key}",
            "Content-Type": "application/json",
        }

    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        response_format: Optional[Dict[str, str]] = None,
    ) -> str:
        if not self.has_key:
            raise RuntimeError("OPENAI_API_KEY not set")

        payload: Dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature if temperature is None else temperature,
            "messages": _normalize_messages(messages),
            "stream": False,
        }
        if response_format:
            payload["response_format"] = response_format

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as c:
            r = await c.post(self._url, headers=self._headers, json=payload)
            if r.is_error:
                err = _provider_error(r)
                log.warning(
                    "completion failed: status=%s type=%s code=%s", err.status_code, err.type, err.code
                )
                raise err
            data = r.json()

        content = data["choices"][0]["message"].get("content")
        if content is None:
            raise ResponseParseError(raw=None)
        return content
