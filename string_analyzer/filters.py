from typing import Iterable, List, Optional

from string_analyzer.exceptions import ConflictingFiltersError, InvalidFilterError
from string_analyzer.schemas import FilterSet, StringResponse


def matches_filters(record: StringResponse, filters: FilterSet) -> bool:
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    # Case-sensitive containment against the raw value
    if filters.contains_character is not None and filters.contains_character not in record.value:
        return False

    return True


def apply_filters(records: Iterable[StringResponse], filters: FilterSet) -> List[StringResponse]:
    """Return the records satisfying every present filter, in input order."""
    return [r for r in records if matches_filters(r, filters)]


def validate_filters(filters: FilterSet) -> FilterSet:
    if filters.min_length is not None and filters.max_length is not None:
        if filters.min_length > filters.max_length:
            raise ConflictingFiltersError(
                f"Conflicting filters: min_length ({filters.min_length}) "
                f"cannot be greater than max_length ({filters.max_length})"
            )
    return filters


def build_query_filters(
    is_palindrome: Optional[bool] = None,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    word_count: Optional[int] = None,
    contains_character: Optional[str] = None,
) -> FilterSet:
    """Build a FilterSet from structured query parameters."""
    if min_length is not None and min_length < 0:
        raise InvalidFilterError("min_length must be non-negative")

    if max_length is not None and max_length < 0:
        raise InvalidFilterError("max_length must be non-negative")

    if word_count is not None and word_count < 0:
        raise InvalidFilterError("word_count must be non-negative")

    if contains_character is not None and len(contains_character) != 1:
        raise InvalidFilterError("contains_character must be a single character")

    filters = FilterSet(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    return validate_filters(filters)
