import json

import httpx
import pytest

from cvsuggest.errors import ExternalAPIError, ResponseParseError
from cvsuggest.services.llm_openai import JSON_OBJECT, OpenAIChatLLM


def _completion(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def _llm(settings, handler, seen=None):
    def record(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    return OpenAIChatLLM(settings, transport=httpx.MockTransport(record))


@pytest.mark.asyncio
async def test_chat_posts_openai_payload(settings):
    seen = []
    llm = _llm(settings, lambda r: httpx.Response(200, json=_completion('{"suggestions":[1]}')), seen)

    out = await llm.chat([{"role": "user", "content": "hi"}], response_format=JSON_OBJECT)

    assert out == '{"suggestions":[1]}'
    req = seen[0]
    assert str(req.url) == "https://api.openai.com/v1/chat/completions"
    assert req.headers["Authorization"] == "Bearer sk-test-key"
    body = json.loads(req.content)
    assert body["model"] == "gpt-4o-mini"
    assert body["temperature"] == 0.8
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == [{"role": "user", "content": "hi"}]
    assert body["stream"] is False


@pytest.mark.asyncio
async def test_custom_base_url_and_no_response_format(settings):
    seen = []
    settings = settings.model_copy(update={"openai_base_url": "http://localhost:8001/v1/"})
    llm = _llm(settings, lambda r: httpx.Response(200, json=_completion("[]")), seen)

    await llm.chat([{"role": "user", "content": "hi"}], temperature=0.1)

    assert str(seen[0].url) == "http://localhost:8001/v1/chat/completions"
    body = json.loads(seen[0].content)
    assert "response_format" not in body
    assert body["temperature"] == 0.1


@pytest.mark.asyncio
async def test_provider_error_carries_status_and_type(settings):
    err = {"error": {"message": "Rate limit reached for gpt-4o-mini", "type": "requests", "code": "rate_limit_exceeded"}}
    llm = _llm(settings, lambda r: httpx.Response(429, json=err))

    with pytest.raises(ExternalAPIError) as exc:
        await llm.chat([{"role": "user", "content": "hi"}])

    assert exc.value.status_code == 429
    assert exc.value.code == "rate_limit_exceeded"
    assert exc.value.to_payload() == {
        "success": False,
        "error": "Rate limit reached for gpt-4o-mini",
        "type": "requests",
    }


@pytest.mark.asyncio
async def test_provider_error_without_json_body(settings):
    llm = _llm(settings, lambda r: httpx.Response(502, text="<html>Bad Gateway</html>"))

    with pytest.raises(ExternalAPIError) as exc:
        await llm.chat([{"role": "user", "content": "hi"}])

    assert exc.value.status_code == 502
    assert exc.value.to_payload() == {"success": False, "error": "OpenAI API error", "type": "api_error"}


@pytest.mark.asyncio
async def test_null_content_is_a_parse_failure(settings):
    llm = _llm(settings, lambda r: httpx.Response(200, json=_completion(None)))

    with pytest.raises(ResponseParseError):
        await llm.chat([{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_missing_key_fails_before_any_request(settings):
    seen = []
    settings = settings.model_copy(update={"openai_api_key": None})
    llm = _llm(settings, lambda r: httpx.Response(200, json=_completion("[]")), seen)

    with pytest.raises(RuntimeError, match="OPENAI_API_KEY not set"):
        await llm.chat([{"role": "user", "content": "hi"}])
    assert seen == []


@pytest.mark.asyncio
async def test_messages_are_sent_as_role_content_strings(settings):
    seen = []
    llm = _llm(settings, lambda r: httpx.Response(200, json=_completion("[]")), seen)

    await llm.chat([{"content": 42}, {"role": "system", "content": "be brief", "name": "x"}])

    body = json.loads(seen[0].content)
    assert body["messages"] == [
        {"role": "user", "content": "42"},
        {"role": "system", "content": "be brief"},
    ]
