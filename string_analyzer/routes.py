from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from string_analyzer.database import get_db
from string_analyzer.exceptions import (
    ConflictingFiltersError,
    InvalidFilterError,
    StringAlreadyExistsError,
    StringNotFoundError,
    UnparseableQueryError,
)
from string_analyzer.filters import build_query_filters
from string_analyzer.schemas import FilterResponse, StringRequest, StringResponse
from string_analyzer.services import (
    create_string,
    delete_string_by_value,
    get_all_strings_with_filters,
    get_string_by_value,
    get_strings_by_natural_language,
)

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.post("/strings", response_model=StringResponse, status_code=201)
def create_string_endpoint(payload: StringRequest, db: Session = Depends(get_db)):
    """Create and analyze a string."""
    try:
        return create_string(db, payload.value)
    except StringAlreadyExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))


# Registered before /strings/{string_value} so the literal path wins
@router.get(
    "/strings/filter-by-natural-language",
    response_model=FilterResponse,
    response_model_exclude_none=True,
)
def filter_by_natural_language(
    query: str = Query(..., min_length=1, description="e.g. 'all single word palindromic strings'"),
    db: Session = Depends(get_db),
):
    """Filter strings using a natural language query."""
    if not query.strip():
        raise HTTPException(status_code=400, detail="Query must not be blank")
    try:
        return get_strings_by_natural_language(db, query)
    except ConflictingFiltersError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": "Query parsed but resulted in conflicting filters", "details": str(e)},
        )
    except UnparseableQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))


# :path lets stored values containing "/" be addressed
@router.get("/strings/{string_value:path}", response_model=StringResponse)
def get_string_endpoint(string_value: str, db: Session = Depends(get_db)):
    """Get a specific string by its raw value."""
    try:
        return get_string_by_value(db, string_value)
    except StringNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/strings", response_model=FilterResponse, response_model_exclude_none=True)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None),
    max_length: Optional[int] = Query(None),
    word_count: Optional[int] = Query(None),
    contains_character: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Get all strings with optional filtering."""
    try:
        filters = build_query_filters(is_palindrome, min_length, max_length, word_count, contains_character)
    except InvalidFilterError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictingFiltersError as e:
        raise HTTPException(status_code=422, detail={"error": "Conflicting filters", "details": str(e)})
    return get_all_strings_with_filters(db, filters)


@router.delete("/strings/{string_value:path}", status_code=204)
def delete_string_endpoint(string_value: str, db: Session = Depends(get_db)):
    """Delete a string by its raw value."""
    try:
        delete_string_by_value(db, string_value)
    except StringNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
