"""
Query Compiler

Compiles search commands into Elasticsearch request bodies.
"""

import logging
from typing import Any, Dict

from elasticsearch_explorer.aggregations import (
    Aggregation,
    MetricAggregation,
    NestedAggregation,
    NestedFilteredAggregation,
    TermsAggregation,
)
from elasticsearch_explorer.exceptions import InvalidArgumentError
from elasticsearch_explorer.models import Query
from elasticsearch_explorer.search_command_builder import SearchCommandSource

logger = logging.getLogger(__name__)


class QueryCompiler:
    """
    Builds Elasticsearch request bodies from search commands.

    The rendered body always carries a ``bool`` query with ``must``,
    ``should`` and ``filter`` lists. Pagination, sort, field projection
    and aggregations are only rendered when requested.
    """

    def compile(self, command: SearchCommandSource) -> Dict[str, Any]:
        """
        Build the request body for a search command.

        Args:
            command: Search command (or builder) to compile

        Returns:
            Elasticsearch request body

        Raises:
            InvalidArgumentError: If the command has no target index
        """
        index = command.get_index()
        if not index:
            raise InvalidArgumentError("Search command needs an index to search in")

        return self.compile_query(command.build_query(), index)

    def compile_query(self, query: Query, index: str = "") -> Dict[str, Any]:
        """
        Build the request body for an already assembled query.

        Args:
            query: Query to compile
            index: Target index, used for logging only

        Returns:
            Elasticsearch request body
        """
        body: Dict[str, Any] = {"query": query.bool_query.build()}

        if query.offset is not None:
            body["from"] = query.offset

        if query.limit is not None:
            body["size"] = query.limit

        if query.sort:
            body["sort"] = [sort.build() for sort in query.sort]

        if query.fields is not None:
            body["fields"] = list(query.fields)

        if query.aggregations:
            body["aggs"] = {
                name: self.compile_aggregation(aggregation)
                for name, aggregation in query.aggregations.items()
            }

        logger.debug(f"Compiled request body for index '{index}': {body}")

        return body

    def compile_aggregation(self, aggregation: Aggregation) -> Dict[str, Any]:
        """
        Build the request document for a single aggregation.

        Args:
            aggregation: Aggregation definition

        Returns:
            Aggregation request document
        """
        if isinstance(aggregation, TermsAggregation):
            return {"terms": {"field": aggregation.field, "size": aggregation.size}}

        if isinstance(aggregation, MetricAggregation):
            return {aggregation.kind: {"field": aggregation.field}}

        if isinstance(aggregation, NestedAggregation):
            return {
                "nested": {"path": aggregation.path},
                "aggs": {
                    name: self.compile_aggregation(child)
                    for name, child in aggregation.aggregations.items()
                },
            }

        if isinstance(aggregation, NestedFilteredAggregation):
            return self._compile_nested_filtered(aggregation)

        raise InvalidArgumentError(f"Unsupported aggregation: {aggregation!r}")

    def _compile_nested_filtered(self, aggregation: NestedFilteredAggregation) -> Dict[str, Any]:
        """
        Build a nested, filtered terms aggregation.

        The filter is a single should/bool/must wrapper so more clauses can
        be appended to ``must`` without changing the shape.
        """
        path = aggregation.path
        must = [
            {"terms": {f"{path}.{field}": values}}
            for field, values in aggregation.filter_terms.items()
        ]

        return {
            "nested": {"path": path},
            "aggs": {
                aggregation.result_key: {
                    "filter": {"bool": {"should": {"bool": {"must": must}}}},
                    "aggs": {
                        aggregation.result_key: {
                            "terms": {
                                "field": f"{path}.{aggregation.bucket_key}",
                                "size": aggregation.size,
                            }
                        }
                    },
                }
            },
        }
