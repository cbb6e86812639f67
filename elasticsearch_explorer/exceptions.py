"""
Custom Exceptions for Elasticsearch Explorer

Provides a clear exception hierarchy for different error scenarios.

Failures raised by the Elasticsearch client itself (connection errors,
query errors returned by the cluster) are not wrapped; they reach the
caller as the client raised them.
"""

from typing import List, Optional


class ExplorerError(Exception):
    """
    Base exception for all library errors.

    All custom exceptions in this library inherit from this base class,
    allowing callers to catch all library-specific errors with a single except clause.
    """
    pass


class InvalidArgumentError(ExplorerError, ValueError):
    """
    Raised when a caller hands the library an unusable argument.

    Always raised before any request is sent to Elasticsearch.

    Examples:
        - Search command without a target index
        - Unknown sort direction or metric aggregation kind
        - Comparing configurations of two different indices
    """
    pass


class ConfigurationError(ExplorerError):
    """
    Raised when there's an error in configuration.

    Examples:
        - Invalid XML syntax
        - Missing required configuration fields
        - Invalid configuration values
        - Configuration file not found
    """
    pass


class IndexNotDeclaredError(ConfigurationError):
    """
    Raised when an index is not declared in the configuration file.
    """

    def __init__(self, index_name: str, available_indices: Optional[List[str]] = None):
        """
        Initialize IndexNotDeclaredError.

        Args:
            index_name: The index that was not found
            available_indices: List of declared index names
        """
        self.index_name = index_name
        self.available_indices = available_indices or []

        if self.available_indices:
            message = (
                f"Index '{index_name}' is not declared. "
                f"Declared indices: {', '.join(self.available_indices)}"
            )
        else:
            message = f"Index '{index_name}' is not declared"

        super().__init__(message)


class ResponseDecodingError(ExplorerError):
    """
    Raised when a search response does not match the request that was sent.

    Examples:
        - A requested aggregation is missing from the response
        - A terms aggregation result carries no buckets
    """

    def __init__(self, message: str, aggregation: Optional[str] = None):
        """
        Initialize ResponseDecodingError.

        Args:
            message: Error message
            aggregation: Name of the aggregation being decoded (optional)
        """
        self.aggregation = aggregation

        if aggregation:
            full_message = f"Cannot decode aggregation '{aggregation}': {message}"
        else:
            full_message = f"Cannot decode response: {message}"

        super().__init__(full_message)
