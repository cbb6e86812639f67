"""
Finder

Executes search commands: compile, send one search request, decode.
"""

import logging
from typing import Any, Dict, Optional, Protocol

from elasticsearch_explorer.exceptions import InvalidArgumentError
from elasticsearch_explorer.models import SearchResult
from elasticsearch_explorer.query_compiler import QueryCompiler
from elasticsearch_explorer.result_decoder import ResultDecoder
from elasticsearch_explorer.search_command_builder import SearchCommandSource

logger = logging.getLogger(__name__)


class SearchBackend(Protocol):
    """The part of the Elasticsearch client the finder needs."""

    def search(self, *, index: str, body: Dict[str, Any]) -> Any:
        ...


class Finder:
    """
    Runs search commands against Elasticsearch.

    Issues exactly one search request per call. Errors raised by the
    Elasticsearch client are not caught; retries belong to the client.
    """

    def __init__(
        self,
        es_client: SearchBackend,
        compiler: Optional[QueryCompiler] = None,
        decoder: Optional[ResultDecoder] = None,
    ):
        """
        Initialize finder.

        Args:
            es_client: Elasticsearch client instance
            compiler: Query compiler. If None, creates a new compiler.
            decoder: Result decoder. If None, creates a new decoder.
        """
        self.es_client = es_client
        self.compiler = compiler or QueryCompiler()
        self.decoder = decoder or ResultDecoder()

    def find(self, command: SearchCommandSource) -> SearchResult:
        """
        Execute a search command.

        Args:
            command: Search command (or builder) to execute

        Returns:
            SearchResult with hits, total and aggregation results

        Raises:
            InvalidArgumentError: If the command has no target index
            ResponseDecodingError: If the response does not match the request
        """
        index_name = command.get_index()
        if not index_name:
            raise InvalidArgumentError("Search command needs an index to search in")

        query = command.build_query()
        body = self.compiler.compile_query(query, index_name)

        logger.debug(f"Searching index '{index_name}'")

        response = self.es_client.search(index=index_name, body=body)

        result = self.decoder.decode(response, query.aggregations)

        logger.info(
            f"Search completed for index '{index_name}': "
            f"hits={result.total}, returned={len(result.hits)}, "
            f"aggregations={len(result.aggregations)}"
        )

        return result
