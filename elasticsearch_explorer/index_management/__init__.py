"""
Index management module for Elasticsearch Explorer.

Detects whether an index's live mapping and settings drifted from the
declared configuration.
"""

from elasticsearch_explorer.index_management.adapter import ElasticIndexAdapter
from elasticsearch_explorer.index_management.changed_checker import IndexAdapter, IndexChangedChecker
from elasticsearch_explorer.index_management.comparator import MANAGED_SETTINGS, ConfigurationComparator
from elasticsearch_explorer.index_management.index_configuration import IndexConfiguration

__all__ = [
    "ConfigurationComparator",
    "ElasticIndexAdapter",
    "IndexAdapter",
    "IndexChangedChecker",
    "IndexConfiguration",
    "MANAGED_SETTINGS",
]
