"""
Index Changed Checker

Tells index provisioning whether an index has drifted from its declared
configuration.
"""

import logging
from typing import Optional, Protocol

from elasticsearch_explorer.index_management.comparator import ConfigurationComparator
from elasticsearch_explorer.index_management.index_configuration import IndexConfiguration

logger = logging.getLogger(__name__)


class IndexAdapter(Protocol):
    """Fetches the configuration an index currently has."""

    def get_remote_configuration(self, desired: IndexConfiguration) -> Optional[IndexConfiguration]:
        """Return the live configuration, or None when the index does not exist."""
        ...


class IndexChangedChecker:
    """
    Compares desired index configurations with the live ones.

    A missing index always counts as changed.
    """

    def __init__(
        self,
        adapter: IndexAdapter,
        comparator: Optional[ConfigurationComparator] = None,
    ):
        """
        Initialize changed checker.

        Args:
            adapter: Index adapter used to fetch the live configuration
            comparator: Configuration comparator. If None, creates one
                        with the default managed settings.
        """
        self.adapter = adapter
        self.comparator = comparator or ConfigurationComparator()

    def has_changes(self, desired: IndexConfiguration) -> bool:
        """
        Check whether an index needs to be created or updated.

        Args:
            desired: Configuration the index should have

        Returns:
            True if the index is missing or differs from desired
        """
        actual = self.adapter.get_remote_configuration(desired)

        if actual is None:
            logger.info(f"Index '{desired.name}' does not exist yet")
            return True

        changes = self.comparator.differences(desired, actual)

        if changes:
            logger.info(f"Index '{desired.name}' changed at: {', '.join(changes)}")
            return True

        logger.debug(f"Index '{desired.name}' is up to date")
        return False
