"""
Elasticsearch Explorer

Structured search requests for Elasticsearch, and drift detection for
index mappings and settings.

Features:
- Boolean must/should/filter queries with pagination, sort and projection
- Terms, metric, nested and nested filtered aggregations
- Uniform decoding of aggregation results, nested ones included
- Type-strict comparison of declared and live index configurations
- XML-based index declarations

Quick Start:
    >>> from elasticsearch_explorer import ExplorerClient, TermsAggregation
    >>>
    >>> client = ExplorerClient()
    >>> builder = client.builder("posts")
    >>> builder.set_query("elastic").set_wheres({"published": True})
    >>> builder.add_aggregation("tags", TermsAggregation("tags"))
    >>> results = client.search(builder)
    >>> for aggregation in results.aggregations:
    ...     print(aggregation.name, aggregation.values)

Example:
    >>> client.has_changes("posts")
    True
"""

__version__ = "1.0.0"
__all__ = [
    # Main client
    "ExplorerClient",
    "Finder",
    "QueryCompiler",
    "ResultDecoder",
    # Query model
    "BoolQuery",
    "Query",
    "SearchCommand",
    "SearchCommandBuilder",
    "Matching",
    "MultiMatch",
    "Term",
    "Terms",
    "Range",
    "Exists",
    "Sort",
    # Aggregations
    "TermsAggregation",
    "MetricAggregation",
    "NestedAggregation",
    "NestedFilteredAggregation",
    # Results
    "AggregationResult",
    "Hit",
    "SearchResult",
    # Index management
    "IndexConfiguration",
    "IndexChangedChecker",
    "ElasticIndexAdapter",
    # Exceptions
    "ExplorerError",
    "InvalidArgumentError",
    "ConfigurationError",
    "IndexNotDeclaredError",
    "ResponseDecodingError",
    # Convenience functions
    "create_client",
]

# Import main components
from elasticsearch_explorer.aggregations import (
    MetricAggregation,
    NestedAggregation,
    NestedFilteredAggregation,
    TermsAggregation,
)
from elasticsearch_explorer.client import ExplorerClient
from elasticsearch_explorer.exceptions import (
    ConfigurationError,
    ExplorerError,
    IndexNotDeclaredError,
    InvalidArgumentError,
    ResponseDecodingError,
)
from elasticsearch_explorer.finder import Finder
from elasticsearch_explorer.index_management import (
    ElasticIndexAdapter,
    IndexChangedChecker,
    IndexConfiguration,
)
from elasticsearch_explorer.models import (
    AggregationResult,
    BoolQuery,
    Hit,
    Query,
    SearchCommand,
    SearchResult,
)
from elasticsearch_explorer.query_compiler import QueryCompiler
from elasticsearch_explorer.result_decoder import ResultDecoder
from elasticsearch_explorer.search_command_builder import SearchCommandBuilder
from elasticsearch_explorer.syntax import Exists, Matching, MultiMatch, Range, Sort, Term, Terms


def create_client(**kwargs) -> ExplorerClient:
    """
    Create a new ExplorerClient instance.

    Convenience function for creating a client with settings from the
    environment.

    Args:
        **kwargs: Arguments passed to ExplorerClient

    Returns:
        Configured ExplorerClient instance

    Example:
        >>> client = create_client(es_host="search.internal")
        >>> results = client.search(client.builder("posts").set_query("python"))
    """
    return ExplorerClient(**kwargs)
