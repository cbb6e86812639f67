"""
Configuration Comparator

Structural comparison of index configurations.

Rules:
- Dictionaries compare by key set and per-key value, key order ignored
- Lists compare as sets, element order and repeats ignored
- Scalars compare type-strict: "2" differs from 2, False from 0, 1 from 1.0
- Mappings compare in full; settings only at the managed paths
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Sequence, Tuple

from elasticsearch_explorer.exceptions import InvalidArgumentError
from elasticsearch_explorer.index_management.index_configuration import IndexConfiguration

logger = logging.getLogger(__name__)

# Settings trees this library manages. Anything else in the settings, such
# as index.uuid or index.creation_date, never counts as a change.
MANAGED_SETTINGS: Tuple[str, ...] = (
    "analysis",
    "tokenizer",
    "index.max_ngram_diff",
    "index.max_shingle_diff",
)


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


def _kind(value: Any) -> Any:
    if isinstance(value, Mapping):
        return Mapping
    if isinstance(value, (list, tuple)):
        return list
    return type(value)


def _lookup(tree: Mapping, path: str) -> Any:
    """Return the value at a dotted path, or MISSING."""
    node: Any = tree
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return MISSING
        node = node[part]
    return node


class ConfigurationComparator:
    """
    Compares a desired index configuration with an actual one.

    Attributes:
        managed_settings: Dotted settings paths taken into account
    """

    def __init__(self, managed_settings: Sequence[str] = MANAGED_SETTINGS):
        """
        Initialize comparator.

        Args:
            managed_settings: Dotted settings paths to compare
                              (default: MANAGED_SETTINGS)
        """
        self.managed_settings = tuple(managed_settings)

    def differences(self, desired: IndexConfiguration, actual: IndexConfiguration) -> List[str]:
        """
        List the dotted paths where two configurations differ.

        Args:
            desired: Configuration the index should have
            actual: Configuration the index has

        Returns:
            Changed paths, prefixed with 'mapping.' or 'settings.'.
            Empty when the configurations match.

        Raises:
            InvalidArgumentError: If the configurations belong to different indices
        """
        if desired.name != actual.name:
            raise InvalidArgumentError(
                f"Cannot compare configuration of '{desired.name}' with '{actual.name}'"
            )

        changes: List[str] = []
        self._compare("mapping", desired.mapping, actual.mapping, changes)

        for path in self.managed_settings:
            self._compare(
                f"settings.{path}",
                _lookup(desired.settings, path),
                _lookup(actual.settings, path),
                changes,
            )

        return changes

    def has_differences(self, desired: IndexConfiguration, actual: IndexConfiguration) -> bool:
        """Return True when any mapping or managed setting differs."""
        return bool(self.differences(desired, actual))

    def equal(self, left: Any, right: Any) -> bool:
        """Type-strict structural equality of two values."""
        changes: List[str] = []
        self._compare("", left, right, changes)
        return not changes

    def _compare(self, path: str, desired: Any, actual: Any, changes: List[str]) -> None:
        if _kind(desired) is not _kind(actual):
            changes.append(path)
            return

        if isinstance(desired, Mapping):
            for key in sorted(set(desired) | set(actual), key=str):
                child_path = f"{path}.{key}" if path else str(key)
                if key not in desired or key not in actual:
                    changes.append(child_path)
                else:
                    self._compare(child_path, desired[key], actual[key], changes)

        elif isinstance(desired, (list, tuple)):
            if not self._same_elements(desired, actual):
                changes.append(path)

        elif desired != actual:
            changes.append(path)

    def _same_elements(self, desired: Sequence, actual: Sequence) -> bool:
        """Set comparison; elements may be unhashable."""
        return self._covers(desired, actual) and self._covers(actual, desired)

    def _covers(self, items: Sequence, candidates: Sequence) -> bool:
        return all(
            any(self.equal(item, candidate) for candidate in candidates)
            for item in items
        )
