import re
from typing import Optional

from string_analyzer.errors import InvalidFilterValueError
from string_analyzer.models import AnalyzedString, FilterPredicateSet

_TRUE_VALUES = {"1", "t", "true"}
_FALSE_VALUES = {"0", "f", "false"}
_INT_RE = re.compile(r"[+-]?[0-9]+")


def matches(record: AnalyzedString, filters: FilterPredicateSet) -> bool:
    """Return True when ``record`` satisfies every filter that is set."""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character is not None:
        if filters.contains_character not in props.character_frequency_map:
            return False

    return True


def _parse_bool(name: str, raw: str) -> bool:
    val = raw.lower()
    if val in _TRUE_VALUES:
        return True
    if val in _FALSE_VALUES:
        return False
    raise InvalidFilterValueError(f"Invalid value for '{name}', must be boolean (true/false)")


def _parse_non_negative(name: str, raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise InvalidFilterValueError(f"Invalid value for '{name}', must be a non-negative integer")
    n = int(raw)
    if n < 0:
        raise InvalidFilterValueError(f"Invalid value for '{name}', must be a non-negative integer")
    return n


def parse_filter_params(
    is_palindrome: Optional[str] = None,
    min_length: Optional[str] = None,
    max_length: Optional[str] = None,
    word_count: Optional[str] = None,
    contains_character: Optional[str] = None,
) -> FilterPredicateSet:
    """Validate raw query-string filters. Empty strings count as absent.

    min_length > max_length is not an error here: the two bounds are
    independent constraints and simply match nothing.
    """
    filters: dict = {}

    if is_palindrome:
        filters["is_palindrome"] = _parse_bool("is_palindrome", is_palindrome)

    if min_length:
        filters["min_length"] = _parse_non_negative("min_length", min_length)

    if max_length:
        filters["max_length"] = _parse_non_negative("max_length", max_length)

    if word_count:
        filters["word_count"] = _parse_non_negative("word_count", word_count)

    if contains_character:
        if len(contains_character) != 1:
            raise InvalidFilterValueError(
                "Invalid value for 'contains_character', must be a single character"
            )
        filters["contains_character"] = contains_character

    return FilterPredicateSet(**filters)
