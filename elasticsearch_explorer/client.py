"""
Explorer Client

High-level client tying together search execution and index drift checks.
"""

import logging
from typing import List, Optional

from elasticsearch import Elasticsearch

from elasticsearch_explorer.config.loader import ConfigLoader
from elasticsearch_explorer.config.settings import ElasticsearchSettings
from elasticsearch_explorer.finder import Finder
from elasticsearch_explorer.index_management.adapter import ElasticIndexAdapter
from elasticsearch_explorer.index_management.changed_checker import IndexChangedChecker
from elasticsearch_explorer.index_management.index_configuration import IndexConfiguration
from elasticsearch_explorer.models import SearchResult
from elasticsearch_explorer.search_command_builder import SearchCommandBuilder, SearchCommandSource

logger = logging.getLogger(__name__)


class ExplorerClient:
    """
    High-level client for searches and index checks.

    Example:
        >>> client = ExplorerClient()
        >>> builder = client.builder("posts").set_query("elastic search")
        >>> results = client.search(builder)
        >>> print(results.total, [a.name for a in results.aggregations])
        >>> client.has_changes("posts")
        False
    """

    def __init__(
        self,
        es_host: Optional[str] = None,
        es_port: Optional[int] = None,
        config_path: Optional[str] = None,
        es_client: Optional[Elasticsearch] = None,
        settings: Optional[ElasticsearchSettings] = None,
    ):
        """
        Initialize explorer client.

        Args:
            es_host: Elasticsearch host (defaults to ES_HOST env var or 'localhost')
            es_port: Elasticsearch port (defaults to ES_PORT env var or 9200)
            config_path: Path to index declarations (defaults to EXPLORER_INDEX_CONFIG
                         env var or the bundled file)
            es_client: Ready-made Elasticsearch client; skips client creation
            settings: Connection settings (read from environment if None)
        """
        self.settings = settings or ElasticsearchSettings.from_env()
        self.es_host = es_host or self.settings.host
        self.es_port = es_port or self.settings.port

        # Initialize components
        self.config_loader = ConfigLoader(config_path or self.settings.index_config_path)
        self.es_client = es_client or self._create_es_client()
        self.finder = Finder(self.es_client)
        self.changed_checker = IndexChangedChecker(ElasticIndexAdapter(self.es_client))

        logger.info(f"ExplorerClient initialized for {self.es_host}:{self.es_port}")

    def _create_es_client(self) -> Elasticsearch:
        """Create Elasticsearch client."""
        es_url = f"{self.settings.scheme}://{self.es_host}:{self.es_port}"

        client = Elasticsearch(
            [es_url],
            request_timeout=self.settings.request_timeout,
            max_retries=self.settings.max_retries,
            retry_on_timeout=True
        )
        logger.info(f"Elasticsearch client created for {es_url}")
        return client

    def search(self, command: SearchCommandSource) -> SearchResult:
        """
        Run a search command.

        Args:
            command: SearchCommand or SearchCommandBuilder

        Returns:
            SearchResult with hits and aggregation results

        Example:
            >>> results = client.search(SearchCommand("posts", Query()))
            >>> print(f"Found {results.total} posts")
        """
        return self.finder.find(command)

    def builder(self, index_name: str) -> SearchCommandBuilder:
        """
        Create a search command builder for an index.

        Default search fields are taken from the index declaration when the
        index is declared.

        Args:
            index_name: Index to search

        Returns:
            SearchCommandBuilder targeting the index
        """
        builder = SearchCommandBuilder(index_name)
        if self.config_loader.is_index_declared(index_name):
            declaration = self.config_loader.get_declaration(index_name)
            builder.set_default_search_fields(declaration.default_search_fields)
        return builder

    def get_index_configuration(self, index_name: str) -> IndexConfiguration:
        """
        Get the declared configuration of an index.

        Raises:
            IndexNotDeclaredError: If the index is not declared
        """
        return self.config_loader.get_index_configuration(index_name)

    def get_supported_indices(self) -> List[str]:
        """
        Get list of declared index names.

        Example:
            >>> client.get_supported_indices()
            ['posts', 'authors']
        """
        return self.config_loader.get_declared_indices()

    def has_changes(self, index_name: str) -> bool:
        """
        Check whether a declared index must be created or updated.

        Args:
            index_name: Declared index name

        Returns:
            True if the index is missing or its configuration drifted
        """
        return self.changed_checker.has_changes(self.get_index_configuration(index_name))
