from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StringProperties(BaseModel):
    """Computed properties of an analyzed string."""

    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class AnalyzedString(BaseModel):
    """A stored string; ``id`` is always the SHA-256 of ``value``."""

    model_config = ConfigDict(frozen=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class FilterPredicateSet(BaseModel):
    """Conjunctive filter constraints. ``None`` means the filter is absent."""

    model_config = ConfigDict(frozen=True)

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    word_count: Optional[int] = Field(default=None, ge=0)
    contains_character: Optional[str] = Field(default=None, min_length=1, max_length=1)

    def is_empty(self) -> bool:
        return not self.as_dict()

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class FilterResult(BaseModel):
    """Matches of a filtered listing plus an echo of what was applied."""

    data: List[AnalyzedString]
    count: int
    filters_applied: Optional[Dict[str, Any]] = None
    interpreted_query: Optional[InterpretedQuery] = None
