import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from string_analyzer import crud, models
from string_analyzer.analyzer import compute_properties, fingerprint
from string_analyzer.config import settings
from string_analyzer.exceptions import (
    StringAlreadyExistsError,
    StringNotFoundError,
    UnparseableQueryError,
)
from string_analyzer.filters import apply_filters, validate_filters
from string_analyzer.nlp import interpret_nl_query
from string_analyzer.schemas import FilterSet, StringProperties, StringResponse

logger = logging.getLogger("string_analyzer.services")


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_record(row: models.StoredString) -> StringResponse:
    return StringResponse(
        id=row.sha256_hash,
        value=row.value,
        properties=StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=row.character_frequency_map,
        ),
        created_at=_as_utc(row.created_at),
    )


def _all_records(db: Session) -> List[StringResponse]:
    return [to_record(row) for row in crud.get_strings(db)]


def create_string(db: Session, value: str) -> StringResponse:
    props = compute_properties(value)

    if crud.get_string(db, props.sha256_hash) is not None:
        raise StringAlreadyExistsError("String already exists in the system")

    row = crud.create_string(db, value, props)
    logger.info("Stored string %s (length=%d)", props.sha256_hash[:12], props.length)
    return to_record(row)


def get_string_by_value(db: Session, string_value: str) -> StringResponse:
    """Lookup record by hashing the exact provided string value."""
    row = crud.get_string(db, fingerprint(string_value))
    if row is None:
        raise StringNotFoundError(string_value)
    return to_record(row)


def delete_string_by_value(db: Session, string_value: str) -> None:
    if not crud.delete_string(db, fingerprint(string_value)):
        raise StringNotFoundError(string_value)
    logger.info("Deleted string %s", fingerprint(string_value)[:12])


def get_all_strings_with_filters(db: Session, filters: FilterSet) -> Dict[str, Any]:
    records = apply_filters(_all_records(db), filters)
    return {
        "data": records,
        "count": len(records),
        "filters_applied": filters.applied(),
    }


def get_strings_by_natural_language(db: Session, query: str) -> Dict[str, Any]:
    filters, original = interpret_nl_query(query)
    logger.debug("Interpreted %r as %s", original, filters.applied())

    if filters.is_empty():
        if settings.NL_REJECT_UNRECOGNIZED:
            raise UnparseableQueryError("Unable to parse natural language query")
        logger.info("Query %r matched no rule; returning all strings", original)

    validate_filters(filters)

    records = apply_filters(_all_records(db), filters)
    return {
        "data": records,
        "count": len(records),
        "interpreted_query": {"original": original, "parsed_filters": filters.applied()},
    }
