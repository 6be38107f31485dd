import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cvsuggest.config import get_settings
from cvsuggest.env import key_status
from cvsuggest.errors import InputValidationError, MethodNotAllowedError, SuggestionError
from cvsuggest.routers import generate

log = logging.getLogger("cvsuggest")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _error_response(exc: SuggestionError, headers=None) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload(), headers=headers)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="CV Suggestion Service")

    # Fixed header set on every response, preflight and errors included.
    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(SuggestionError)
    async def _suggestion_error(request: Request, exc: SuggestionError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        log.info("rejected body on %s: %s", request.url.path, exc.errors())
        return _error_response(InputValidationError())

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return _error_response(MethodNotAllowedError(), headers=exc.headers)
        return await http_exception_handler(request, exc)

    app.include_router(generate.router)

    @app.on_event("startup")
    async def _startup():
        log.info(
            "[startup] env=%s model=%s OPENAI_API_KEY: %s",
            settings.env, settings.openai_model, key_status(settings.openai_api_key),
        )

    @app.get("/healthz")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
