"""
Configuration module for Elasticsearch Explorer.

Handles connection settings and loading of XML index declarations.
"""

from elasticsearch_explorer.config.loader import ConfigLoader, IndexDeclaration
from elasticsearch_explorer.config.settings import ElasticsearchSettings, setup_logging

__all__ = ["ConfigLoader", "ElasticsearchSettings", "IndexDeclaration", "setup_logging"]
