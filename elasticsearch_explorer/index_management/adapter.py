"""
Elasticsearch Index Adapter

Reads the live mapping and settings of an index.
"""

import copy
import logging
from typing import Any, Dict, Optional

from elasticsearch import Elasticsearch
from elasticsearch import exceptions as es_exceptions

from elasticsearch_explorer.index_management.index_configuration import IndexConfiguration

logger = logging.getLogger(__name__)


class ElasticIndexAdapter:
    """
    Fetches index configurations from Elasticsearch.

    Elasticsearch reports analysis settings under ``settings.index.analysis``
    while declarations keep them at ``settings.analysis``; the adapter lifts
    them so both sides have the same shape.
    """

    def __init__(self, es_client: Elasticsearch):
        """
        Initialize index adapter.

        Args:
            es_client: Elasticsearch client instance
        """
        self.es_client = es_client

    def get_remote_configuration(self, desired: IndexConfiguration) -> Optional[IndexConfiguration]:
        """
        Fetch the live configuration of the desired index.

        Args:
            desired: Declared configuration; only its name is used

        Returns:
            Live IndexConfiguration, or None if the index does not exist
        """
        try:
            response = self.es_client.indices.get(index=desired.name)
        except es_exceptions.NotFoundError:
            logger.warning(f"Index '{desired.name}' not found")
            return None

        # An alias resolves to the concrete index name
        entry = None
        for index_name in response:
            entry = response[index_name]
            if index_name == desired.name:
                break

        if entry is None:
            return None

        mapping = entry.get('mappings', {}).get('properties', {})
        settings = self._normalize_settings(entry.get('settings', {}))

        logger.debug(f"Fetched configuration for index '{desired.name}'")

        return IndexConfiguration.create(desired.name, mapping, settings)

    def _normalize_settings(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        """Lift index.analysis to analysis, keep the remaining index knobs."""
        normalized = copy.deepcopy(dict(settings))
        index_settings = normalized.get('index')

        if isinstance(index_settings, dict) and 'analysis' in index_settings:
            normalized['analysis'] = index_settings.pop('analysis')

        return normalized
