from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, Any, Optional, List


class StringRequest(BaseModel):
    """Request schema for creating/analyzing a string."""
    value: str


class StringProperties(BaseModel):
    """Computed properties of an analyzed string."""
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    """A stored string together with its properties."""
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    model_config = {"from_attributes": True, "frozen": True}


class FilterSet(BaseModel):
    """Sparse conjunction of optional predicates; None means unconstrained."""
    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    def applied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class FilterResponse(BaseModel):
    """Response schema for filtered results."""
    data: List[StringResponse]
    count: int
    interpreted_query: Optional[InterpretedQuery] = None
    filters_applied: Optional[Dict[str, Any]] = None
