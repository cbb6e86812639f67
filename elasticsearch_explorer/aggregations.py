"""
Aggregation Definitions

The four aggregation kinds a query can request. The set is closed: the
query compiler and the result decoder both handle every kind explicitly,
so adding a kind means extending ``Aggregation`` and both of them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from elasticsearch_explorer.exceptions import InvalidArgumentError

DEFAULT_SIZE = 10

METRIC_KINDS = ("max", "min", "avg", "sum", "value_count", "cardinality", "stats")


@dataclass(frozen=True)
class TermsAggregation:
    """
    Bucket documents by the distinct values of a field.

    Attributes:
        field: Field to bucket on
        size: Maximum number of buckets (default: 10)
    """
    field: str
    size: int = DEFAULT_SIZE

    def __post_init__(self):
        if self.size < 1:
            raise InvalidArgumentError(f"Aggregation size must be positive, got {self.size}")


@dataclass(frozen=True)
class MetricAggregation:
    """
    Single-value (or stats) metric over a field, e.g. ``max`` or ``avg``.
    """
    kind: str
    field: str

    def __post_init__(self):
        if self.kind not in METRIC_KINDS:
            raise InvalidArgumentError(
                f"Unknown metric aggregation '{self.kind}'. "
                f"Supported: {', '.join(METRIC_KINDS)}"
            )


@dataclass(frozen=True)
class NestedAggregation:
    """
    Aggregations scoped to a nested (array-of-objects) field path.

    Attributes:
        path: Nested field path
        aggregations: Child aggregations by name, in request order
    """
    path: str
    aggregations: Dict[str, "Aggregation"] = field(default_factory=dict)

    def add(self, name: str, aggregation: "Aggregation") -> "NestedAggregation":
        """Add a child aggregation and return self for chaining."""
        self.aggregations[name] = aggregation
        return self


@dataclass(frozen=True)
class NestedFilteredAggregation:
    """
    Terms aggregation over a nested path, restricted by terms filters.

    Attributes:
        path: Nested field path
        result_key: Name of the filter aggregation and of its terms child
        bucket_key: Field (relative to path) the buckets are built on
        filter_terms: Mapping of field (relative to path) to accepted values
        size: Maximum number of buckets (default: 10)
    """
    path: str
    result_key: str
    bucket_key: str
    filter_terms: Dict[str, List[Any]] = field(default_factory=dict)
    size: int = DEFAULT_SIZE

    def __post_init__(self):
        if self.size < 1:
            raise InvalidArgumentError(f"Aggregation size must be positive, got {self.size}")


Aggregation = Union[
    TermsAggregation,
    MetricAggregation,
    NestedAggregation,
    NestedFilteredAggregation,
]
