"""
Result Decoder

Turns raw Elasticsearch search responses into SearchResult objects.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List

from elasticsearch_explorer.aggregations import (
    Aggregation,
    MetricAggregation,
    NestedAggregation,
    NestedFilteredAggregation,
    TermsAggregation,
)
from elasticsearch_explorer.exceptions import ResponseDecodingError
from elasticsearch_explorer.models import AggregationResult, SearchResult

logger = logging.getLogger(__name__)

FILTERED_SUFFIX = "Filtered"


class ResultDecoder:
    """
    Decodes search responses.

    Aggregations are decoded by walking the requested definitions, not the
    response keys: flat and nested aggregations come back in different
    shapes and only the definition tells which shape to expect. The output
    follows the request order, nested children taking their parent's
    position.
    """

    def decode(self, response: Any, aggregations: Dict[str, Aggregation]) -> SearchResult:
        """
        Decode a search response.

        Args:
            response: Raw Elasticsearch response
            aggregations: Aggregation definitions the request was built with

        Returns:
            SearchResult with raw hits, total and aggregation results

        Raises:
            ResponseDecodingError: If the response does not match the request
        """
        try:
            hits_section = response["hits"]
            hits = list(hits_section["hits"])
            total_hits = hits_section["total"]
        except (KeyError, TypeError) as e:
            raise ResponseDecodingError(f"missing hits section ({e})")

        # Handle different Elasticsearch versions
        if isinstance(total_hits, Mapping):
            total_count = total_hits["value"]
        else:
            total_count = total_hits

        results: List[AggregationResult] = []
        if "aggregations" in response:
            raw_aggregations = response["aggregations"]
            for name, definition in aggregations.items():
                results.extend(self._decode_aggregation(name, definition, raw_aggregations))
        elif aggregations:
            logger.debug("Response carries no aggregations, returning none")

        return SearchResult(hits=hits, total=total_count, aggregations=results)

    def _decode_aggregation(
        self,
        name: str,
        definition: Aggregation,
        container: Mapping,
    ) -> Iterator[AggregationResult]:
        """Yield the results of one requested aggregation found in container."""
        raw = self._child(container, name, name)

        if isinstance(definition, TermsAggregation):
            yield AggregationResult(name, self._buckets(raw, name))

        elif isinstance(definition, MetricAggregation):
            yield AggregationResult(name, raw)

        elif isinstance(definition, NestedAggregation):
            for child_name, child in definition.aggregations.items():
                yield from self._decode_aggregation(child_name, child, raw)

        elif isinstance(definition, NestedFilteredAggregation):
            yield self._decode_nested_filtered(name, definition, raw)

        else:
            raise ResponseDecodingError(f"unsupported definition {definition!r}", name)

    def _decode_nested_filtered(
        self,
        name: str,
        definition: NestedFilteredAggregation,
        raw: Mapping,
    ) -> AggregationResult:
        """
        Decode the filtered terms leaf of a nested filtered aggregation.

        The leaf is named ``<bucket_key>Filtered`` on the response side while
        the request names it after ``result_key``. Both spellings are
        accepted, the first one found wins.
        """
        filtered = self._child(raw, definition.result_key, name)

        leaf_name = f"{definition.bucket_key}{FILTERED_SUFFIX}"
        if leaf_name not in filtered:
            candidates = [
                key for key in filtered
                if key.endswith(FILTERED_SUFFIX) and isinstance(filtered[key], Mapping)
            ]
            if candidates:
                leaf_name = candidates[0]
            elif isinstance(filtered.get(definition.result_key), Mapping):
                leaf_name = definition.result_key
            else:
                raise ResponseDecodingError(
                    f"no filtered terms result under '{definition.result_key}'", name
                )

        logger.debug(f"Nested filtered aggregation '{name}' read from leaf '{leaf_name}'")

        return AggregationResult(leaf_name, self._buckets(filtered[leaf_name], name))

    @staticmethod
    def _child(container: Mapping, key: str, aggregation: str) -> Mapping:
        try:
            return container[key]
        except (KeyError, TypeError):
            raise ResponseDecodingError(f"'{key}' missing from response", aggregation)

    @staticmethod
    def _buckets(raw: Mapping, aggregation: str) -> List[Dict[str, Any]]:
        try:
            return list(raw["buckets"])
        except (KeyError, TypeError):
            raise ResponseDecodingError("result carries no buckets", aggregation)
