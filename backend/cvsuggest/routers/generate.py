# backend/cvsuggest/routers/generate.py
from __future__ import annotations
from functools import lru_cache

from fastapi import APIRouter, Depends, Response

from cvsuggest.config import Settings, get_settings
from cvsuggest.errors import InputValidationError
from cvsuggest.schemas import ErrorOut, MethodNotAllowedOut, SectionRequest, SuggestionsOut
from cvsuggest.services.llm_openai import OpenAIChatLLM
from cvsuggest.services.suggestions import ChatLLM, generate_suggestions

router = APIRouter(prefix="/api", tags=["generate"])


@lru_cache
def get_llm() -> ChatLLM:
    # one client config per process; tests swap it via app.dependency_overrides
    return OpenAIChatLLM(get_settings())


@router.post(
    "/generate",
    response_model=SuggestionsOut,
    responses={400: {"model": ErrorOut}, 405: {"model": MethodNotAllowedOut}, 500: {"model": ErrorOut}},
)
async def generate(
    body: SectionRequest,
    settings: Settings = Depends(get_settings),
    llm: ChatLLM = Depends(get_llm),
) -> SuggestionsOut:
    if not body.section or not body.data:
        raise InputValidationError()

    suggestions = await generate_suggestions(llm, settings, body.section, body.data)
    return SuggestionsOut(success=True, suggestions=suggestions)


# registered after POST: a 405 on this path advertises the POST route in Allow
@router.options("/generate", include_in_schema=False)
async def preflight() -> Response:
    return Response(status_code=200)
