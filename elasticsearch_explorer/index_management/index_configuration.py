"""
Index Configuration

Mapping and settings of a single index, as declared or as found in
Elasticsearch.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class IndexConfiguration:
    """
    Configuration of a named index.

    Attributes:
        name: Index name
        mapping: Field name to field definition. Definitions may nest
                 through a 'fields' sub-mapping.
        settings: Settings tree (index knobs, analysis, tokenizers)
    """
    name: str
    mapping: Dict[str, Any] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        name: str,
        mapping: Optional[Dict[str, Any]] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> "IndexConfiguration":
        """Create a configuration holding private copies of mapping and settings."""
        return cls(
            name=name,
            mapping=copy.deepcopy(mapping or {}),
            settings=copy.deepcopy(settings or {}),
        )
