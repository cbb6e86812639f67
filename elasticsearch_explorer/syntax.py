"""
Query Syntax

Small value objects for the Elasticsearch query-DSL clauses the library
emits. Every clause renders itself with ``build()``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from elasticsearch_explorer.exceptions import InvalidArgumentError

DEFAULT_FUZZINESS = "auto"
DEFAULT_BOOST = 1.0


@runtime_checkable
class Syntax(Protocol):
    """Anything that renders to a query-DSL document."""

    def build(self) -> Dict[str, Any]:
        ...


# A clause is either a syntax object or an already compiled document
Clause = Union[Syntax, Dict[str, Any]]


def render_clause(clause: Clause) -> Dict[str, Any]:
    """
    Render a clause to its query-DSL document.

    Args:
        clause: Syntax object or a compiled document

    Returns:
        Query-DSL dictionary
    """
    if isinstance(clause, dict):
        return clause
    return clause.build()


@dataclass(frozen=True)
class Matching:
    """
    Fuzzy full-text match on a single field.

    Attributes:
        field: Field name
        value: Text to match
        fuzziness: Fuzzy matching tolerance (default: 'auto')
    """
    field: str
    value: Any
    fuzziness: Union[int, str] = DEFAULT_FUZZINESS

    def build(self) -> Dict[str, Any]:
        return {
            "match": {
                self.field: {
                    "query": self.value,
                    "fuzziness": self.fuzziness,
                }
            }
        }


@dataclass(frozen=True)
class MultiMatch:
    """
    Fuzzy full-text match across several fields.

    When no fields are given Elasticsearch searches the index's default
    fields.
    """
    value: Any
    fields: Optional[List[str]] = None
    fuzziness: Union[int, str] = DEFAULT_FUZZINESS

    def build(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {"query": self.value}
        if self.fields:
            query["fields"] = list(self.fields)
        query["fuzziness"] = self.fuzziness
        return {"multi_match": query}


@dataclass(frozen=True)
class Term:
    """
    Exact value match. The boost is always rendered.
    """
    field: str
    value: Any
    boost: float = DEFAULT_BOOST

    def build(self) -> Dict[str, Any]:
        return {
            "term": {
                self.field: {
                    "value": self.value,
                    "boost": self.boost,
                }
            }
        }


@dataclass(frozen=True)
class Terms:
    """
    Match any of several exact values. The boost is always rendered.
    """
    field: str
    values: List[Any]
    boost: float = DEFAULT_BOOST

    def build(self) -> Dict[str, Any]:
        return {
            "terms": {
                self.field: list(self.values),
                "boost": self.boost,
            }
        }


@dataclass(frozen=True)
class Range:
    """
    Bounded range match on a single field.

    Attributes:
        field: Field name
        gt, gte, lt, lte: Bounds, only the ones set are rendered
        boost: Relevance boost (default: 1.0)
    """
    field: str
    gt: Any = None
    gte: Any = None
    lt: Any = None
    lte: Any = None
    boost: float = DEFAULT_BOOST

    def __post_init__(self):
        if all(bound is None for bound in (self.gt, self.gte, self.lt, self.lte)):
            raise InvalidArgumentError(f"Range on '{self.field}' needs at least one bound")

    def build(self) -> Dict[str, Any]:
        definition: Dict[str, Any] = {}
        for name in ("gt", "gte", "lt", "lte"):
            bound = getattr(self, name)
            if bound is not None:
                definition[name] = bound
        definition["boost"] = self.boost
        return {"range": {self.field: definition}}


@dataclass(frozen=True)
class Exists:
    """Match documents that have a value for the field."""
    field: str

    def build(self) -> Dict[str, Any]:
        return {"exists": {"field": self.field}}


@dataclass(frozen=True)
class Sort:
    """
    Sort directive rendered as ``{field: order}``.

    Attributes:
        field: Field to sort on
        order: 'asc' or 'desc' (default: 'asc')
    """
    ASCENDING = "asc"
    DESCENDING = "desc"

    field: str
    order: str = ASCENDING

    def __post_init__(self):
        if self.order not in (self.ASCENDING, self.DESCENDING):
            raise InvalidArgumentError(
                f"Sort order must be '{self.ASCENDING}' or '{self.DESCENDING}', got '{self.order}'"
            )

    def build(self) -> Dict[str, str]:
        return {self.field: self.order}
