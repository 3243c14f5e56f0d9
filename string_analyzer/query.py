import logging

from string_analyzer.filters import matches
from string_analyzer.models import FilterPredicateSet, FilterResult, InterpretedQuery
from string_analyzer.nlp import translate
from string_analyzer.store import ContentStore

logger = logging.getLogger("string_analyzer.query")


class QueryEngine:
    """Read-only filtering over a ContentStore snapshot."""

    def __init__(self, store: ContentStore):
        self.store = store

    def _run(self, filters: FilterPredicateSet):
        return [r for r in self.store.snapshot() if matches(r, filters)]

    def filter_explicit(self, filters: FilterPredicateSet) -> FilterResult:
        records = self._run(filters)
        return FilterResult(data=records, count=len(records), filters_applied=filters.as_dict())

    def filter_by_natural_language(self, query: str) -> FilterResult:
        """Translate ``query`` and filter with the result.

        Translation errors propagate unchanged so callers can tell
        ConflictingFiltersError apart from parse failures.
        """
        filters = translate(query)
        records = self._run(filters)
        logger.info("Natural language query %r matched %d strings", query, len(records))
        return FilterResult(
            data=records,
            count=len(records),
            interpreted_query=InterpretedQuery(original=query, parsed_filters=filters.as_dict()),
        )
