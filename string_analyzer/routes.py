from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from string_analyzer.config import get_settings
from string_analyzer.errors import NotFoundError
from string_analyzer.filters import parse_filter_params
from string_analyzer.models import AnalyzedString, FilterResult
from string_analyzer.query import QueryEngine
from string_analyzer.schemas import HealthResponse, StringRequest
from string_analyzer.store import ContentStore

router = APIRouter()


def get_store(request: Request) -> ContentStore:
    return request.app.state.store


def get_engine(request: Request) -> QueryEngine:
    return request.app.state.engine


@router.get("/", tags=["Health"])
def root() -> dict:
    settings = get_settings()
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "description": (
            "A REST API for analyzing string properties including palindrome detection, "
            "character frequency, and more"
        ),
        "version": settings.APP_VERSION,
        "endpoints": {
            "POST /strings": "Create and analyze a new string",
            "GET /strings": "Get all strings with optional filtering",
            "GET /strings/{string_value}": "Get a specific string by value or hash",
            "GET /strings/filter-by-natural-language": "Filter strings using natural language queries",
            "DELETE /strings/{string_value}": "Delete a string by value or hash",
            "GET /health": "Health check endpoint",
        },
    }


@router.get("/health", response_model=HealthResponse, tags=["Health"])
def health() -> HealthResponse:
    """Basic health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
    )


@router.post("/strings", response_model=AnalyzedString, status_code=201, tags=["Strings"])
def create_string_endpoint(payload: StringRequest, store: ContentStore = Depends(get_store)) -> AnalyzedString:
    """Create and analyze a string."""
    return store.create(payload.value)


@router.get(
    "/strings",
    response_model=FilterResult,
    response_model_exclude_none=True,
    tags=["Strings"],
)
def list_strings(
    is_palindrome: Optional[str] = Query(None),
    min_length: Optional[str] = Query(None),
    max_length: Optional[str] = Query(None),
    word_count: Optional[str] = Query(None),
    contains_character: Optional[str] = Query(None),
    engine: QueryEngine = Depends(get_engine),
) -> FilterResult:
    """Get all strings with optional filtering."""
    filters = parse_filter_params(is_palindrome, min_length, max_length, word_count, contains_character)
    return engine.filter_explicit(filters)


@router.get(
    "/strings/filter-by-natural-language",
    response_model=FilterResult,
    response_model_exclude_none=True,
    tags=["Strings"],
)
def filter_by_natural_language(
    query: Optional[str] = Query(None),
    engine: QueryEngine = Depends(get_engine),
) -> FilterResult:
    """Filter strings using a natural language query."""
    if not query:
        raise HTTPException(status_code=400, detail="Missing 'query' parameter")
    return engine.filter_by_natural_language(query)


@router.get("/strings/{string_value}", response_model=AnalyzedString, tags=["Strings"])
def get_string_endpoint(string_value: str, store: ContentStore = Depends(get_store)) -> AnalyzedString:
    """Get a string by its id (SHA-256) or its raw value."""
    record = store.get(string_value)
    if record is None:
        raise NotFoundError("String not found in the system")
    return record


@router.delete("/strings/{string_value}", status_code=204, tags=["Strings"])
def delete_string_endpoint(string_value: str, store: ContentStore = Depends(get_store)) -> Response:
    """Delete a string by its id (SHA-256) or its raw value."""
    if not store.delete(string_value):
        raise NotFoundError("String not found in the system")
    return Response(status_code=204)
