"""Rule-based translation of English filter queries into predicate sets.

Each rule takes the lower-cased query and the predicate set built so far and
returns an updated copy. Rules run in a fixed order so that the length rules
can check new bounds against ones recorded earlier in the same query.
"""
import logging
import re
from typing import Callable, List

from string_analyzer.errors import (
    ConflictingFiltersError,
    UnparseableQueryError,
    UnsupportedWordCountError,
)
from string_analyzer.models import FilterPredicateSet

logger = logging.getLogger("string_analyzer.nlp")

Rule = Callable[[str, FilterPredicateSet], FilterPredicateSet]

_NUM_WORDS = {
    'zero': 0,
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
    'ten': 10,
    'eleven': 11,
    'twelve': 12,
    'thirteen': 13,
    'fourteen': 14,
    'fifteen': 15,
    'sixteen': 16,
    'seventeen': 17,
    'eighteen': 18,
    'nineteen': 19,
    'twenty': 20,
}

# Word counts that may be spelled out in "<number> word" phrases.
_WORD_COUNT_WORDS = {
    'single': 1,
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
    'ten': 10,
}

_OTHER_NUMERALS = (
    'thirty', 'forty', 'fifty', 'sixty', 'seventy', 'eighty', 'ninety',
    'hundred', 'thousand', 'million',
)

_NUMERALS = sorted(set(_NUM_WORDS) | set(_WORD_COUNT_WORDS) | set(_OTHER_NUMERALS), key=len, reverse=True)
_NUMERAL = r"(?:" + "|".join(_NUMERALS) + r")\b"

# A whole run of numerals ("twenty-one", "one hundred"); the trailing
# lookahead stops backtracking from matching only its first part.
_NUMERAL_RUN = _NUMERAL + r"(?:[\s-]+" + _NUMERAL + r")*(?![\s-]+" + _NUMERAL + r")"
# Plain ASCII integers; grouped or decimal numbers ("1,000", "2.5") never match.
_DIGITS = r"(?<![0-9,.])[0-9]+(?![0-9]|[,.][0-9])"
_NUMBER = r"(" + _DIGITS + r"|" + _NUMERAL_RUN + r")"

_PALINDROME_RE = re.compile(r"palindrom(?:e|ic)")
_NAMED_WORD_COUNT_RE = re.compile(r"\b(" + _NUMERAL_RUN + r")[\s-]+words?\b")
_DIGIT_WORD_COUNT_RE = re.compile(r"\b(" + _DIGITS + r")[\s-]+words?\b")
_LONGER_THAN_RE = re.compile(r"\blonger\s+than\s+" + _NUMBER + r"\b")
_SHORTER_THAN_RE = re.compile(r"\bshorter\s+than\s+" + _NUMBER + r"\b")
_EXACTLY_RE = re.compile(r"\bexactly\s+" + _NUMBER + r"\b(?![\s-]*words?\b)")
_CONTAINS_LETTER_RE = re.compile(r"\bcontain(?:s|ing)?\s+the\s+letter\s+['\"]?([a-z])(?![a-z])")
_FIRST_VOWEL_RE = re.compile(r"\bcontain(?:s|ing)?\s+the\s+first\s+vowel\b")


def _to_int(token: str) -> int:
    if token.isdigit():
        return int(token)
    if token in _NUM_WORDS:
        return _NUM_WORDS[token]
    raise UnparseableQueryError(f"unsupported number '{token}'")


def _palindrome_rule(q: str, filters: FilterPredicateSet) -> FilterPredicateSet:
    if _PALINDROME_RE.search(q):
        return filters.model_copy(update={"is_palindrome": True})
    return filters


def _word_count_rule(q: str, filters: FilterPredicateSet) -> FilterPredicateSet:
    m = _NAMED_WORD_COUNT_RE.search(q)
    if m:
        word = m.group(1)
        if word not in _WORD_COUNT_WORDS:
            raise UnsupportedWordCountError(f"unsupported word count '{word}'")
        return filters.model_copy(update={"word_count": _WORD_COUNT_WORDS[word]})

    m = _DIGIT_WORD_COUNT_RE.search(q)
    if m:
        return filters.model_copy(update={"word_count": int(m.group(1))})
    return filters


def _longer_than_rule(q: str, filters: FilterPredicateSet) -> FilterPredicateSet:
    for m in _LONGER_THAN_RE.finditer(q):
        candidate = _to_int(m.group(1)) + 1
        if filters.min_length is not None and filters.min_length > candidate:
            raise ConflictingFiltersError("conflicting length filters detected")
        filters = filters.model_copy(update={"min_length": candidate})
    return filters


def _shorter_than_rule(q: str, filters: FilterPredicateSet) -> FilterPredicateSet:
    for m in _SHORTER_THAN_RE.finditer(q):
        candidate = _to_int(m.group(1)) - 1
        if candidate < 0:
            raise ConflictingFiltersError("conflicting length filters detected: no string is that short")
        if filters.max_length is not None and filters.max_length < candidate:
            raise ConflictingFiltersError("conflicting length filters detected")
        filters = filters.model_copy(update={"max_length": candidate})
    return filters


def _exact_length_rule(q: str, filters: FilterPredicateSet) -> FilterPredicateSet:
    for m in _EXACTLY_RE.finditer(q):
        n = _to_int(m.group(1))
        if filters.min_length is not None and filters.min_length > n:
            raise ConflictingFiltersError("conflicting length filters detected")
        if filters.max_length is not None and filters.max_length < n:
            raise ConflictingFiltersError("conflicting length filters detected")
        filters = filters.model_copy(update={"min_length": n, "max_length": n})
    return filters


def _contains_character_rule(q: str, filters: FilterPredicateSet) -> FilterPredicateSet:
    m = _CONTAINS_LETTER_RE.search(q)
    if m:
        return filters.model_copy(update={"contains_character": m.group(1)})
    if _FIRST_VOWEL_RE.search(q):
        return filters.model_copy(update={"contains_character": "a"})
    return filters


RULES: List[Rule] = [
    _palindrome_rule,
    _word_count_rule,
    _longer_than_rule,
    _shorter_than_rule,
    _exact_length_rule,
    _contains_character_rule,
]


def translate(query: str) -> FilterPredicateSet:
    """Interpret a natural language query as a filter predicate set.

    Raises UnsupportedWordCountError, ConflictingFiltersError or
    UnparseableQueryError; never returns an empty predicate set.
    """
    q = query.lower()
    filters = FilterPredicateSet()
    for rule in RULES:
        filters = rule(q, filters)

    if filters.min_length is not None and filters.max_length is not None:
        if filters.min_length > filters.max_length:
            raise ConflictingFiltersError(
                "query resulted in conflicting length filters (min_length > max_length)"
            )

    if filters.is_empty():
        raise UnparseableQueryError("unable to parse natural language query into filters")

    logger.debug("Translated %r -> %s", query, filters.as_dict())
    return filters
