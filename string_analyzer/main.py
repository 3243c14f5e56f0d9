import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer.config import get_settings
from string_analyzer.errors import StringAnalyzerError
from string_analyzer.logging import RequestLoggingMiddleware, init_logging
from string_analyzer.query import QueryEngine
from string_analyzer.routes import router
from string_analyzer.store import ContentStore

logger = logging.getLogger("string_analyzer")


# -------------------------------
# Unified error response handlers
# -------------------------------
async def analyzer_error_handler(request: Request, exc: StringAnalyzerError):
    logger.warning(
        "%s: %s %s -> %s | %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        "HTTPException: %s %s -> %s | detail=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    status = 400
    if request.method == "POST" and request.url.path.endswith("/strings"):
        # Missing field or malformed JSON -> 400, wrong type -> 422
        missing = any(err.get("type") == "missing" for err in errors)
        json_invalid = any(err.get("type") == "json_invalid" for err in errors)
        if not (missing or json_invalid):
            status = 422

    logger.warning(
        "ValidationError: %s %s -> %s | errors=%s",
        request.method,
        request.url.path,
        status,
        errors,
    )
    return JSONResponse(
        status_code=status,
        content={"error": "Validation failed", "details": jsonable_encoder(errors)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    """Build an app instance that owns a fresh in-memory store."""
    settings = get_settings()
    init_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Analyze strings and query them back.\n\n"
            "Features:\n"
            "- Length, palindrome, word count, unique characters and character frequency\n"
            "- Lookup and delete by SHA-256 id or by raw value\n"
            "- Structured filters and simple natural language queries"
        ),
    )
    app.state.store = ContentStore()
    app.state.engine = QueryEngine(app.state.store)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(StringAnalyzerError, analyzer_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)

    logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
    return app


app = create_app()
