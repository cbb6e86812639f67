"""
Data Models for Elasticsearch Explorer

Dataclasses for the query model, search commands and search results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from elasticsearch_explorer.aggregations import Aggregation
from elasticsearch_explorer.exceptions import InvalidArgumentError
from elasticsearch_explorer.syntax import Clause, Sort, render_clause


@dataclass
class BoolQuery:
    """
    Boolean compound query.

    Clause order is kept as added; it matters for scoring in ``must`` and
    ``should`` but not in ``filter``.

    Attributes:
        must: Clauses that must match and contribute to the score
        should: Clauses that should match and contribute to the score
        filter: Clauses that must match without scoring
    """
    must: List[Clause] = field(default_factory=list)
    should: List[Clause] = field(default_factory=list)
    filter: List[Clause] = field(default_factory=list)

    def add(self, occurrence: str, clause: Clause) -> "BoolQuery":
        """
        Append a clause to one of the occurrence lists.

        Args:
            occurrence: 'must', 'should' or 'filter'
            clause: Syntax object or compiled document

        Returns:
            Self, for chaining
        """
        if occurrence not in ("must", "should", "filter"):
            raise InvalidArgumentError(f"Unknown bool occurrence: {occurrence}")
        getattr(self, occurrence).append(clause)
        return self

    def build(self) -> Dict[str, Any]:
        """Render the query. All three occurrence keys are always present."""
        return {
            "bool": {
                "must": [render_clause(c) for c in self.must],
                "should": [render_clause(c) for c in self.should],
                "filter": [render_clause(c) for c in self.filter],
            }
        }


@dataclass
class Query:
    """
    A complete search query.

    Attributes:
        bool_query: Top-level boolean query
        offset: Number of hits to skip (rendered as 'from' only when set)
        limit: Number of hits to return (rendered as 'size' only when set)
        sort: Ordered sort directives
        fields: Field projection list
        aggregations: Aggregation definitions by name, in request order
    """
    bool_query: BoolQuery = field(default_factory=BoolQuery)
    offset: Optional[int] = None
    limit: Optional[int] = None
    sort: List[Sort] = field(default_factory=list)
    fields: Optional[List[str]] = None
    aggregations: Dict[str, Aggregation] = field(default_factory=dict)

    @classmethod
    def with_bool(cls, bool_query: BoolQuery) -> "Query":
        """Create a query around an existing boolean query."""
        return cls(bool_query=bool_query)

    def add_aggregation(self, name: str, aggregation: Aggregation) -> "Query":
        """Add a named aggregation and return self for chaining."""
        self.aggregations[name] = aggregation
        return self


@dataclass
class SearchCommand:
    """
    Plain search command: a target index and an optional query.

    Attributes:
        index: Index to search
        query: Query to run (an empty boolean query when None)
    """
    index: Optional[str] = None
    query: Optional[Query] = None

    def get_index(self) -> Optional[str]:
        return self.index

    def build_query(self) -> Query:
        return self.query if self.query is not None else Query()


@dataclass(frozen=True)
class AggregationResult:
    """
    Decoded result of a single aggregation.

    Attributes:
        name: Aggregation name
        values: Bucket list for bucket aggregations, or the whole value
                document for metric aggregations
    """
    name: str
    values: Union[List[Dict[str, Any]], Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'values': self.values,
        }


@dataclass(frozen=True)
class Hit:
    """
    Typed view of a single raw hit.

    Attributes:
        data: Source data from Elasticsearch document
        score: Relevance score
        index: Index name where document was found
        id: Document ID
    """
    data: Dict[str, Any]
    score: Optional[float]
    index: str
    id: str

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "Hit":
        return cls(
            data=raw.get('_source', {}),
            score=raw.get('_score'),
            index=raw.get('_index', ''),
            id=raw.get('_id', ''),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get value from data dictionary."""
        return self.data.get(key, default)


@dataclass
class SearchResult:
    """
    Complete search result.

    Attributes:
        hits: Raw hit records as returned by Elasticsearch
        total: Total number of matching documents
        aggregations: Decoded aggregation results, in request order
    """
    hits: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
    aggregations: List[AggregationResult] = field(default_factory=list)

    @property
    def items(self) -> List[Hit]:
        """Typed views of the raw hits."""
        return [Hit.from_raw(hit) for hit in self.hits]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'total': self.total,
            'hits': self.hits,
            'aggregations': [a.to_dict() for a in self.aggregations],
        }

    def __len__(self) -> int:
        """Return total number of matching documents."""
        return self.total

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        """Iterate over raw hits."""
        return iter(self.hits)

    def __getitem__(self, index: int) -> Dict[str, Any]:
        """Get raw hit by position."""
        return self.hits[index]
